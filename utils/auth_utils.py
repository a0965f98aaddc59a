"""
Authentication utility functions: password hashing and bearer tokens
"""
from datetime import timedelta
from functools import lru_cache

import jwt
from flask import current_app
from werkzeug.security import generate_password_hash, check_password_hash

from utils.dates import utcnow
from utils.errors import Unauthorized


def hash_password(password):
    """Generate password hash"""
    return generate_password_hash(password)


def verify_password(password_hash, password):
    """Verify password against hash"""
    try:
        return check_password_hash(password_hash or '', password or '')
    except ValueError:
        return False


@lru_cache(maxsize=1)
def dummy_password_hash():
    """Hash compared against when no user matches a login email."""
    return generate_password_hash("dummy-password-for-absent-users")


def create_access_token(user_id, now=None):
    """
    Signed bearer token carrying the user id.
    Valid for JWT_TTL_HOURS (1 hour by default); nothing is stored server-side.
    """
    issued = now or utcnow()
    payload = {
        "sub": str(user_id),
        "iat": issued,
        "exp": issued + timedelta(hours=current_app.config.get("JWT_TTL_HOURS", 1)),
    }
    return jwt.encode(
        payload,
        current_app.config["JWT_SECRET_KEY"],
        algorithm=current_app.config.get("JWT_ALGORITHM", "HS256"),
    )


def decode_access_token(token):
    """Return the user id inside a valid token, else raise Unauthorized."""
    if not token or not isinstance(token, str):
        raise Unauthorized("No token provided")
    try:
        payload = jwt.decode(
            token,
            current_app.config["JWT_SECRET_KEY"],
            algorithms=[current_app.config.get("JWT_ALGORITHM", "HS256")],
        )
    except jwt.ExpiredSignatureError:
        raise Unauthorized("Token has expired")
    except jwt.InvalidTokenError:
        raise Unauthorized("Invalid token")

    try:
        return int(payload.get("sub"))
    except (TypeError, ValueError):
        raise Unauthorized("Invalid token")


def bearer_token_from_header(header_value):
    """Token part of an 'Authorization: Bearer <token>' header, or None."""
    if not header_value:
        return None
    scheme, _, token = header_value.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()
