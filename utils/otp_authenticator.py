"""
One-time code authenticator.

issue() stores the hash of a fresh code and mails the code; verify() checks a
submitted code against the newest record for the target and, on success,
stages the deletion of every record for that target. The deletion is not
committed here: the caller commits it together with the change the code
unlocks (user creation, password overwrite).

    Pending --match, now <= expiry--> Consumed (records deleted)
    Pending --wrong code-----------> Pending (Mismatch, retry allowed)
    Pending --now > expiry---------> Expired (record left, inert)
    no record ---------------------> NotFound
"""
import logging
from datetime import timedelta

from flask import current_app

from utils.credential_store import CredentialStore, OtpTarget
from utils.dates import utcnow
from utils.errors import Expired, Mismatch, NotFound
from utils.mail import MailNotifier
from utils.otp_helper import OTP_EXPIRY_MINUTES, generate_otp, hash_otp, otp_expires_at, verify_otp

logger = logging.getLogger(__name__)


class OtpAuthenticator:
    def __init__(self, store: CredentialStore, notifier, ttl=timedelta(minutes=OTP_EXPIRY_MINUTES), clock=utcnow):
        self.store = store
        self.notifier = notifier
        self.ttl = ttl
        self.clock = clock

    def issue(self, target: OtpTarget, ttl=None):
        """
        Persist a new code for target and send it.

        DeliveryError from ensure_ready() leaves nothing behind. DeliveryError
        from send() comes after the commit, so the record stays and simply
        expires.
        """
        ttl = ttl or self.ttl
        self.notifier.ensure_ready()

        otp = generate_otp()
        row = self.store.insert_otp(target, hash_otp(otp), otp_expires_at(self.clock(), ttl))
        self.store.commit()

        logger.info("Issued %s code for %s (expires %s)", target.purpose, target.email, row.expires_at)
        self.notifier.send(target.email, otp, target.purpose, int(ttl.total_seconds() // 60))
        return row

    def verify(self, target: OtpTarget, submitted_code):
        """Check submitted_code; on success stage deletion of all codes for target."""
        record = self.store.find_latest_otp(target)
        if record is None:
            logger.info("No %s code on file for %s", target.purpose, target.email)
            raise NotFound("OTP expired or invalid")

        if record.is_expired(self.clock()):
            logger.info("Expired %s code submitted for %s", target.purpose, target.email)
            raise Expired()

        if not verify_otp(submitted_code, record.otp_hash):
            logger.info("Incorrect %s code for %s", target.purpose, target.email)
            raise Mismatch()

        self.store.delete_otps_for(target)
        return record


def get_authenticator(store=None):
    """Authenticator bound to the current app's session, mailer and ttl."""
    from models import db

    return OtpAuthenticator(
        store or CredentialStore(db.session),
        MailNotifier(),
        ttl=timedelta(minutes=current_app.config.get('OTP_TTL_MINUTES', OTP_EXPIRY_MINUTES)),
    )
