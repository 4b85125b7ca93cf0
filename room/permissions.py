from rest_framework.permissions import SAFE_METHODS

from accounts.permissions import IsFrontDesk


class IsFrontDeskOrReadOnly(IsFrontDesk):
    """Allow read-only access for everyone, write access only for front desk staff."""

    def has_permission(self, request, view):
        """Return True for SAFE methods, otherwise require a front desk role."""
        if request.method in SAFE_METHODS:
            return True
        return super().has_permission(request, view)
