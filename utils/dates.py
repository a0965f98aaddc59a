"""
Date handling for the API.
Calendar dates travel as DD-MM-YYYY strings; everything stored is a
datetime.date (or a naive UTC datetime for timestamps).
"""
from datetime import date, datetime, timezone

from utils.errors import ValidationError

API_DATE_FORMAT = "%d-%m-%Y"
ISO_DATE_FORMAT = "%Y-%m-%d"


def utcnow() -> datetime:
    """Naive UTC now, matching the naive DateTime columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def today() -> date:
    return utcnow().date()


def parse_date(value, field="date", required=False):
    """
    Parse an incoming date into a date object.
    Accepts DD-MM-YYYY (the API format) and YYYY-MM-DD.
    Returns None for an empty value unless required.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        if required:
            raise ValidationError(f"{field} is required.")
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a date in DD-MM-YYYY format.")

    text = value.strip()
    for fmt in (API_DATE_FORMAT, ISO_DATE_FORMAT):
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise ValidationError(f"{field} must be a date in DD-MM-YYYY format.")


def format_date(value):
    """Format a stored date for the API; None stays None."""
    if value is None:
        return None
    if isinstance(value, datetime):
        value = value.date()
    return value.strftime(API_DATE_FORMAT)
