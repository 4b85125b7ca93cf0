from rest_framework.exceptions import ValidationError


def validate_parsed_dates(*dates):
    """Raise if any query date could not be parsed as YYYY-MM-DD."""
    if any(value is None for value in dates):
        raise ValidationError("Invalid date format. Use YYYY-MM-DD.")


def validate_calendar_request(date_from_str, date_to_str, date_from, date_to):
    """Calendar windows need both bounds, in order; a single day is allowed."""
    if not (date_from_str and date_to_str):
        raise ValidationError("date_from and date_to are required")
    validate_parsed_dates(date_from, date_to)
    if date_from > date_to:
        raise ValidationError("date_from must be before date_to")


def validate_availability_window(check_in_str, check_out_str, check_in, check_out):
    """
    Validate the optional stay window used to annotate the room list.

    Both bounds must be given together and check-out must follow check-in.
    """
    if bool(check_in_str) != bool(check_out_str):
        raise ValidationError("check_in_date and check_out_date must be provided together")
    if not check_in_str:
        return
    validate_parsed_dates(check_in, check_out)
    if check_out <= check_in:
        raise ValidationError("check_out_date must be after check_in_date")
