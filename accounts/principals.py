"""
Caller identities.

Staff accounts and guest accounts live in separate tables. Both are
wrapped into a ``Principal`` when a request is authenticated so the rest
of the code deals with one shape: id, display name, email, role and
active flag.
"""

from abc import ABC, abstractmethod

from accounts.models import StaffAccount
from guest.models import Guest

STAFF_ROLES = frozenset(StaffAccount.Role.values)
FRONT_DESK_ROLES = frozenset(
    (
        StaffAccount.Role.ADMIN,
        StaffAccount.Role.MANAGER,
        StaffAccount.Role.RECEPTIONIST,
    )
)
MANAGEMENT_ROLES = frozenset((StaffAccount.Role.ADMIN, StaffAccount.Role.MANAGER))
GUEST_ROLE = "user"


class Principal(ABC):
    """Authenticated caller backed by a staff or guest account."""

    kind = None
    is_authenticated = True
    is_anonymous = False

    def __init__(self, account):
        self.account = account

    @property
    def id(self):
        return self.account.pk

    @property
    def pk(self):
        return self.account.pk

    @property
    def email(self) -> str:
        return (self.account.email or "").lower()

    @property
    @abstractmethod
    def display_name(self) -> str: ...

    @property
    @abstractmethod
    def role(self) -> str: ...

    @property
    def is_active(self) -> bool:
        return True

    @property
    def is_staff(self) -> bool:
        return self.role in STAFF_ROLES

    def has_role(self, *roles) -> bool:
        return self.role in roles

    @abstractmethod
    def contact_details(self):
        """Return ``(first_name, last_name, phone)`` for guest upserts."""

    def __eq__(self, other):
        return (
            isinstance(other, Principal)
            and self.kind == other.kind
            and self.id == other.id
        )

    def __hash__(self):
        return hash((self.kind, self.id))

    def __str__(self):
        return f"{self.kind}:{self.id}"


class StaffPrincipal(Principal):
    kind = "staff"

    @property
    def display_name(self) -> str:
        return self.account.name

    @property
    def role(self) -> str:
        return self.account.role

    @property
    def is_active(self) -> bool:
        return self.account.is_active

    def contact_details(self):
        name = (self.account.name or "").strip()
        first_name, _, last_name = name.partition(" ")
        return first_name or name, last_name.strip(), self.account.phone


class GuestPrincipal(Principal):
    kind = "guest"

    @property
    def display_name(self) -> str:
        return self.account.full_name

    @property
    def role(self) -> str:
        return GUEST_ROLE

    def contact_details(self):
        return self.account.first_name, self.account.last_name, self.account.phone


PRINCIPAL_TYPES = {
    StaffPrincipal.kind: (StaffPrincipal, StaffAccount),
    GuestPrincipal.kind: (GuestPrincipal, Guest),
}


def resolve_principal(kind, account_id):
    """Load the account for a token subject, or return None."""
    try:
        principal_class, model = PRINCIPAL_TYPES[kind]
    except KeyError:
        return None
    try:
        account = model.objects.get(pk=account_id)
    except (model.DoesNotExist, ValueError, TypeError):
        return None
    return principal_class(account)
