from rest_framework.permissions import BasePermission

from accounts.principals import FRONT_DESK_ROLES, MANAGEMENT_ROLES, StaffAccount


class HasStaffRole(BasePermission):
    """Allow access to authenticated staff holding one of ``allowed_roles``."""

    allowed_roles = frozenset()
    message = "Forbidden: insufficient role"

    def has_permission(self, request, view):
        user = request.user
        if not (user and user.is_authenticated):
            return False
        return getattr(user, "role", None) in self.allowed_roles


class IsFrontDesk(HasStaffRole):
    """Admin, manager and receptionist."""

    allowed_roles = FRONT_DESK_ROLES


class IsManagement(HasStaffRole):
    allowed_roles = MANAGEMENT_ROLES


class IsAdmin(HasStaffRole):
    allowed_roles = frozenset((StaffAccount.Role.ADMIN,))
