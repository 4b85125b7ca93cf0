"""Guest identity resolution used by the booking flows."""

import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework.exceptions import ValidationError

from guest.models import Guest

logger = logging.getLogger(__name__)


def find_guest_by_email(email):
    if not email:
        return None
    return Guest.objects.filter(email=email.strip().lower()).first()


def resolve_guest(
    email,
    first_name,
    last_name,
    phone=None,
    notes=None,
    password=None,
    require_password=True,
):
    """
    Find or create the single guest record for ``email``.

    New guests need a password when ``require_password`` is set (the
    public, unauthenticated flow). Existing guests get the latest name,
    phone and notes; the password changes only when a new non-blank one
    is supplied. Exactly one write happens per call.
    """
    guest = find_guest_by_email(email)
    has_password = bool(password and password.strip())

    if guest is None:
        if require_password and not has_password:
            raise ValidationError("Password is required for guest account")
        guest = Guest(
            email=email.strip().lower(),
            first_name=first_name,
            last_name=last_name or "",
            phone=phone or "",
            notes=notes or "",
            password=password if has_password else None,
        )
    else:
        guest.first_name = first_name
        guest.last_name = last_name or ""
        if phone is not None:
            guest.phone = phone
        if notes:
            guest.notes = notes
        if has_password:
            guest.password = password

    save_guest(guest)
    return guest


def save_guest(guest):
    """Validate and store ``guest``; model errors become a DRF ValidationError."""
    try:
        guest.full_clean(exclude=["password"])
    except DjangoValidationError as e:
        messages = [message for errors in e.message_dict.values() for message in errors]
        logger.warning(f"Guest validation failed for {guest.email}: {messages}")
        raise ValidationError(
            {
                "detail": f"Validation error: {', '.join(messages)}",
                "details": e.message_dict,
            }
        )
    guest.save()
