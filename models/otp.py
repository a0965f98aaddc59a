"""
One-time code records for signup verification and password reset.
Only the hash of a code is stored; the plaintext goes out by email.
"""
from models import db
from utils.dates import utcnow

PURPOSE_SIGNUP = 'signup'
PURPOSE_PASSWORD_RESET = 'password_reset'
PURPOSES = (PURPOSE_SIGNUP, PURPOSE_PASSWORD_RESET)


class UserOtp(db.Model):
    """
    Pending one-time code for an email address.
    Several may be live for the same (email, purpose); verification looks at
    the newest and a successful verification removes all of them.
    """
    __tablename__ = 'user_otps'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=True, index=True)
    email = db.Column(db.String(120), nullable=False, index=True)
    purpose = db.Column(db.String(32), nullable=False, default=PURPOSE_SIGNUP)  # signup, password_reset
    otp_hash = db.Column(db.String(255), nullable=False)
    expires_at = db.Column(db.DateTime, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow)

    def is_expired(self, now=None):
        """Still valid at the exact expiry instant."""
        return (now or utcnow()) > self.expires_at

    def __repr__(self):
        return f'<UserOtp {self.purpose} {self.email}>'
