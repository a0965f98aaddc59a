"""
Input validation helpers
"""
import re

from utils.errors import ValidationError

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
OTP_LENGTH = 6


def normalize_email(email):
    """Lowercased, stripped address; anything that is not a string becomes ''."""
    if not isinstance(email, str):
        return ""
    return email.strip().lower()


def validate_email(email):
    """True if email looks like an address."""
    return bool(email) and len(email) <= 120 and EMAIL_RE.match(email) is not None


def validate_password(password, min_length=6):
    """Returns (is_valid, error_message)."""
    if not password:
        return False, "Password is required."
    if not isinstance(password, str):
        return False, "Password must be a string."
    if len(password) < min_length:
        return False, f"Password must be at least {min_length} characters"
    return True, None


def validate_otp_format(otp):
    """A code is exactly six digits."""
    return isinstance(otp, str) and otp.isdigit() and len(otp) == OTP_LENGTH


def require_fields(data, *fields):
    """Raise ValidationError naming the first missing field."""
    missing = [f for f in fields if data.get(f) in (None, "")]
    if missing:
        raise ValidationError(f"Missing required field(s): {', '.join(missing)}")


def get_json_body(request):
    """JSON object from the request, or ValidationError."""
    data = request.get_json(silent=True)
    if data is None:
        data = request.form.to_dict() if request.form else {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object.")
    return data


def parse_int(value, field):
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {field}")
