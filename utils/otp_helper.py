"""
OTP generation and hashing.
Codes are hashed with a salted adaptive hash before storage; the plain code
is only ever handed to the mailer.
"""
import random
from datetime import datetime, timedelta

from werkzeug.security import generate_password_hash, check_password_hash

OTP_MIN = 100000
OTP_MAX = 999999
OTP_EXPIRY_MINUTES = 10


def generate_otp() -> str:
    """Six-digit numeric code in [100000, 999999]."""
    return str(random.randint(OTP_MIN, OTP_MAX))


def hash_otp(otp: str) -> str:
    """Salted hash; two calls for the same code give different strings."""
    return generate_password_hash(otp)


def verify_otp(plain_otp: str, otp_hash: str) -> bool:
    """Constant-time check of a plain code against a stored hash."""
    if not plain_otp or not otp_hash:
        return False
    try:
        return check_password_hash(otp_hash, plain_otp)
    except ValueError:
        # Unknown or corrupt hash format
        return False


def otp_expires_at(now: datetime, ttl: timedelta = timedelta(minutes=OTP_EXPIRY_MINUTES)) -> datetime:
    return now + ttl
