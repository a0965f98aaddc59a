"""
Credential store: users and pending one-time codes.

Wraps a SQLAlchemy session handed in by the caller. Nothing here commits on
its own except commit(); the account operations decide where the transaction
ends so that consuming a code and the change it unlocks land together.
"""
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import delete, or_, select, update
from sqlalchemy.exc import IntegrityError

from models.otp import PURPOSES, UserOtp
from models.user import User
from utils.errors import Conflict


@dataclass(frozen=True)
class OtpTarget:
    """Who a code was issued to and what it unlocks."""
    email: str
    purpose: str
    user_id: Optional[int] = None

    def __post_init__(self):
        if self.purpose not in PURPOSES:
            raise ValueError(f"Unknown OTP purpose: {self.purpose!r}")


class CredentialStore:
    def __init__(self, session):
        self.session = session

    # ---------- users ----------

    def find_user_by_email(self, email) -> Optional[User]:
        return self.session.execute(
            select(User).where(User.email == email)
        ).scalar_one_or_none()

    def find_user_by_id(self, user_id) -> Optional[User]:
        return self.session.get(User, user_id)

    def email_taken(self, email, exclude_user_id=None) -> bool:
        stmt = select(User.id).where(User.email == email)
        if exclude_user_id is not None:
            stmt = stmt.where(User.id != exclude_user_id)
        return self.session.execute(stmt).first() is not None

    def insert_user(self, username, email, password_hash) -> User:
        user = User(username=username, email=email, password_hash=password_hash)
        self.session.add(user)
        self.flush()
        return user

    def update_user(self, user_id, fields) -> None:
        """Apply a column -> value mapping as one UPDATE."""
        if not fields:
            return
        self.session.execute(
            update(User).where(User.id == user_id).values(**fields)
        )
        self.flush()

    def delete_user(self, user_id) -> bool:
        user = self.find_user_by_id(user_id)
        if user is None:
            return False
        self.session.execute(
            delete(UserOtp).where(or_(UserOtp.user_id == user_id, UserOtp.email == user.email))
        )
        self.session.delete(user)
        self.flush()
        return True

    # ---------- one-time codes ----------

    def insert_otp(self, target: OtpTarget, otp_hash, expires_at) -> UserOtp:
        row = UserOtp(
            email=target.email,
            purpose=target.purpose,
            user_id=target.user_id,
            otp_hash=otp_hash,
            expires_at=expires_at,
        )
        self.session.add(row)
        self.flush()
        return row

    def find_latest_otp(self, target: OtpTarget) -> Optional[UserOtp]:
        """Most recently issued code: latest expiry, newest row on ties."""
        return self.session.execute(
            select(UserOtp)
            .where(UserOtp.email == target.email, UserOtp.purpose == target.purpose)
            .order_by(UserOtp.expires_at.desc(), UserOtp.id.desc())
            .limit(1)
        ).scalar_one_or_none()

    def delete_otps_for(self, target: OtpTarget) -> int:
        result = self.session.execute(
            delete(UserOtp).where(UserOtp.email == target.email, UserOtp.purpose == target.purpose)
        )
        return result.rowcount or 0

    def delete_expired_otps(self, now) -> int:
        result = self.session.execute(delete(UserOtp).where(UserOtp.expires_at < now))
        return result.rowcount or 0

    # ---------- transaction ----------

    def flush(self):
        """Flush pending changes; a duplicate email surfaces as Conflict."""
        try:
            self.session.flush()
        except IntegrityError as e:
            self.session.rollback()
            raise Conflict() from e

    def commit(self):
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise Conflict() from e

    def rollback(self):
        self.session.rollback()
