import logging
import secrets

from django.conf import settings
from django.contrib.auth.hashers import check_password
from django.utils import timezone
from rest_framework.exceptions import AuthenticationFailed, NotFound, ValidationError

from accounts.models import StaffAccount
from accounts.principals import GuestPrincipal, StaffPrincipal
from guest.models import Guest
from guest.services import find_guest_by_email, save_guest
from notifications.services.email import notify_password_reset

logger = logging.getLogger(__name__)


def authenticate_credentials(email, password):
    """
    Match credentials against staff accounts first, then guests.

    Guests without a stored password cannot log in.
    Returns a Principal or None.
    """
    email = (email or "").strip().lower()

    staff = StaffAccount.objects.filter(email=email).first()
    if staff and staff.is_active and staff.check_password(password):
        return StaffPrincipal(staff)

    guest = Guest.objects.filter(email=email).first()
    if guest and guest.password and check_password(password, guest.password):
        return GuestPrincipal(guest)

    return None


def split_name(name):
    """Split a display name into ``(first_name, last_name)`` on the first space."""
    name = (name or "").strip()
    first_name, _, last_name = name.partition(" ")
    return first_name, last_name.strip()


def register_guest(name, email, password, phone=""):
    """
    Self-registration for hotel guests.

    Only guest portal accounts are created here; staff accounts are
    provisioned by administrators.
    """
    email = email.strip().lower()
    if find_guest_by_email(email) or StaffAccount.objects.filter(email=email).exists():
        raise ValidationError("Guest already exists with this email")

    first_name, last_name = split_name(name)
    guest = Guest(
        first_name=first_name,
        last_name=last_name,
        email=email,
        phone=phone or "",
        password=password,
    )
    save_guest(guest)
    logger.info(f"guest registered: {guest.email}")
    return GuestPrincipal(guest)


def request_password_reset(email):
    """
    Issue a reset token for the guest with ``email`` and mail the link.

    Unknown addresses are ignored. If the email cannot be delivered the
    token is withdrawn again so no unusable token stays active.
    """
    guest = find_guest_by_email(email)
    if guest is None:
        logger.info(f"password reset requested for unknown email {email}")
        return

    guest.reset_token = secrets.token_hex(32)
    guest.reset_token_expiry = timezone.now() + settings.PASSWORD_RESET_TOKEN_LIFETIME
    guest.save(update_fields=["reset_token", "reset_token_expiry", "updated_at"])

    if not notify_password_reset(guest.email, guest.reset_token):
        _clear_reset_token(guest)


def reset_password(token, password):
    if not token:
        raise ValidationError("Invalid or expired reset token")

    guest = Guest.objects.filter(
        reset_token=token, reset_token_expiry__gt=timezone.now()
    ).first()
    if guest is None:
        raise ValidationError("Invalid or expired reset token")

    guest.password = password
    _clear_reset_token(guest, extra_fields=["password"])
    logger.info(f"password reset for guest {guest.email}")


def _clear_reset_token(guest, extra_fields=()):
    guest.reset_token = ""
    guest.reset_token_expiry = None
    guest.save(
        update_fields=["reset_token", "reset_token_expiry", "updated_at", *extra_fields]
    )


def update_profile(principal, name=None, email=None):
    """Rename the caller's account. The email address is fixed."""
    if email and email.strip().lower() != principal.email:
        raise ValidationError("Email address cannot be changed")
    if not name:
        return principal

    account = principal.account
    if isinstance(principal, GuestPrincipal):
        account.first_name, account.last_name = split_name(name)
        save_guest(account)
    else:
        account.name = name.strip()
        account.save(update_fields=["name", "updated_at"])
    return principal


def change_password(principal, current_password, new_password):
    account = principal.account
    if isinstance(principal, StaffPrincipal):
        if not account.check_password(current_password):
            raise AuthenticationFailed("Current password is incorrect")
        account.set_password(new_password)
        account.save(update_fields=["password", "updated_at"])
        return

    if not account.password:
        raise NotFound("User not found")
    if not check_password(current_password, account.password):
        raise AuthenticationFailed("Current password is incorrect")
    account.password = new_password
    account.save(update_fields=["password", "updated_at"])
