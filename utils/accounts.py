"""
Account operations: OTP signup, login, password reset and profile management.

Every operation that consumes a code commits the code's deletion and the
account change in the same transaction, so a failure in either leaves the
code usable.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from flask import current_app

from models.otp import PURPOSE_PASSWORD_RESET, PURPOSE_SIGNUP
from utils.auth_utils import create_access_token, dummy_password_hash, hash_password, verify_password
from utils.credential_store import CredentialStore, OtpTarget
from utils.errors import Conflict, InvalidCredentials, NotFound, ValidationError
from utils.otp_authenticator import OtpAuthenticator, get_authenticator
from utils.validators import normalize_email, validate_email, validate_otp_format, validate_password

logger = logging.getLogger(__name__)


@dataclass
class ProfilePatch:
    """Optional profile fields; None means leave unchanged."""
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None

    @classmethod
    def from_dict(cls, data):
        def _clean(key, strip=True):
            value = data.get(key)
            if value is None:
                return None
            if not isinstance(value, str):
                raise ValidationError(f"{key} must be a string")
            # Passwords are hashed exactly as submitted
            return (value.strip() if strip else value) or None

        return cls(
            username=_clean('username'),
            email=_clean('email'),
            password=_clean('password', strip=False),
        )

    def is_empty(self):
        return not (self.username or self.email or self.password)


class AccountService:
    def __init__(self, store: CredentialStore, authenticator: OtpAuthenticator, password_min_length=6):
        self.store = store
        self.authenticator = authenticator
        self.password_min_length = password_min_length

    def _check_email(self, email):
        email = normalize_email(email)
        if not validate_email(email):
            raise ValidationError("Please provide a valid email address.")
        return email

    def _check_password(self, password):
        is_valid, error = validate_password(password, self.password_min_length)
        if not is_valid:
            raise ValidationError(error)

    def _check_username(self, username):
        if username is not None and not isinstance(username, str):
            raise ValidationError("Username must be a string.")
        username = (username or '').strip()
        if not username:
            raise ValidationError("Username is required.")
        if len(username) > 80:
            raise ValidationError("Username must be at most 80 characters.")
        return username

    def _check_otp(self, otp):
        otp = (otp or '').strip() if isinstance(otp, str) else otp
        if not validate_otp_format(otp):
            raise ValidationError("OTP must be a 6-digit code.")
        return otp

    # ---------- signup ----------

    def request_signup(self, username, email, password):
        """Send a signup code to an unregistered email."""
        self._check_username(username)
        email = self._check_email(email)
        self._check_password(password)

        if self.store.find_user_by_email(email):
            logger.info("Signup requested for registered email %s", email)
            raise Conflict("Email already registered")

        self.authenticator.issue(OtpTarget(email=email, purpose=PURPOSE_SIGNUP))

    def complete_signup(self, username, email, password, otp):
        """Verify the signup code and create the user."""
        username = self._check_username(username)
        email = self._check_email(email)
        self._check_password(password)
        otp = self._check_otp(otp)

        self.authenticator.verify(OtpTarget(email=email, purpose=PURPOSE_SIGNUP), otp)

        # Someone may have registered this address while the code was pending
        if self.store.email_taken(email):
            self.store.rollback()
            logger.info("Email registered during verification: %s", email)
            raise Conflict("Email already registered")

        user = self.store.insert_user(username, email, hash_password(password))
        self.store.commit()
        logger.info("User registered: id=%s email=%s", user.id, email)
        return user

    # ---------- login ----------

    def login(self, email, password):
        """Return (user, token). Unknown email and wrong password fail the same way."""
        email = normalize_email(email)
        if not email or not password or not isinstance(password, str):
            raise InvalidCredentials()

        user = self.store.find_user_by_email(email)
        if user is None:
            # Unknown email does the same hashing work as a wrong password
            verify_password(dummy_password_hash(), password)
            raise InvalidCredentials()
        if not user.check_password(password):
            raise InvalidCredentials()

        return user, create_access_token(user.id)

    # ---------- password reset ----------

    def request_password_reset(self, email):
        email = self._check_email(email)
        user = self.store.find_user_by_email(email)
        if user is None:
            raise NotFound("Email not found")

        self.authenticator.issue(OtpTarget(email=email, purpose=PURPOSE_PASSWORD_RESET, user_id=user.id))

    def reset_password(self, email, otp, new_password):
        email = self._check_email(email)
        otp = self._check_otp(otp)
        self._check_password(new_password)

        user = self.store.find_user_by_email(email)
        if user is None:
            raise NotFound("Email not found")

        self.authenticator.verify(
            OtpTarget(email=email, purpose=PURPOSE_PASSWORD_RESET, user_id=user.id), otp
        )
        self.store.update_user(user.id, {'password_hash': hash_password(new_password)})
        self.store.commit()
        logger.info("Password reset for user id=%s", user.id)

    # ---------- profile ----------

    def get_profile(self, user_id):
        user = self.store.find_user_by_id(user_id)
        if user is None:
            raise NotFound("User not found")
        return user

    def update_profile(self, user_id, patch: ProfilePatch):
        if patch.is_empty():
            raise ValidationError("At least one field (username, email, password) must be provided")

        user = self.get_profile(user_id)
        fields = {}
        if patch.username:
            fields['username'] = self._check_username(patch.username)
        if patch.email:
            email = self._check_email(patch.email)
            if email != user.email:
                if self.store.email_taken(email, exclude_user_id=user_id):
                    raise Conflict("Email already in use")
                fields['email'] = email
        if patch.password:
            self._check_password(patch.password)
            fields['password_hash'] = hash_password(patch.password)

        if not fields:
            raise ValidationError("No valid fields to update")

        self.store.update_user(user_id, fields)
        self.store.commit()
        logger.info("Profile updated for user id=%s (%s)", user_id, ", ".join(sorted(fields)))
        return self.get_profile(user_id)

    def delete_account(self, user_id):
        if not self.store.delete_user(user_id):
            raise NotFound("User not found")
        self.store.commit()
        logger.info("Profile deleted for user id=%s", user_id)


def get_account_service():
    """AccountService wired to the current app's session, mailer and settings."""
    from models import db

    store = CredentialStore(db.session)
    return AccountService(
        store,
        get_authenticator(store),
        password_min_length=current_app.config.get('PASSWORD_MIN_LENGTH', 6),
    )
