"""
Delete one-time codes that are past their expiry.
Expired codes are already rejected at verification time; this only keeps
the user_otps table small. Safe to run from cron.
Run: python purge_expired_otps.py
     or: python purge_expired_otps.py --dry-run
"""
import sys

from sqlalchemy import func, select


def purge(app, dry_run=False):
    """Remove expired codes; returns how many rows matched."""
    from models import db
    from models.otp import UserOtp
    from utils.credential_store import CredentialStore
    from utils.dates import utcnow

    with app.app_context():
        now = utcnow()
        if dry_run:
            return db.session.execute(
                select(func.count(UserOtp.id)).where(UserOtp.expires_at < now)
            ).scalar_one()

        store = CredentialStore(db.session)
        try:
            deleted = store.delete_expired_otps(now)
            store.commit()
        except Exception:
            store.rollback()
            raise
        return deleted


def main():
    from app import create_app

    dry_run = "--dry-run" in sys.argv[1:]
    count = purge(create_app(), dry_run=dry_run)
    if dry_run:
        print(f"[DRY RUN] {count} expired OTP record(s) would be deleted.")
    else:
        print(f"[SUCCESS] Deleted {count} expired OTP record(s).")


if __name__ == '__main__':
    main()
