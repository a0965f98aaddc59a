from datetime import datetime, timedelta

import pytest
from sqlalchemy import func, select

from conftest import FakeClock, FakeNotifier
from models import db
from models.otp import UserOtp
from models.user import User
from utils.accounts import AccountService, ProfilePatch
from utils.credential_store import CredentialStore
from utils.errors import Conflict, Expired, InvalidCredentials, NotFound, ValidationError
from utils.otp_authenticator import OtpAuthenticator


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 5, 1, 9, 0, 0))


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def store(ctx):
    return CredentialStore(db.session)


@pytest.fixture
def service(store, notifier, clock):
    authenticator = OtpAuthenticator(store, notifier, ttl=timedelta(minutes=10), clock=clock)
    return AccountService(store, authenticator)


def _user_count(email):
    return db.session.execute(select(func.count(User.id)).where(User.email == email)).scalar_one()


def _otp_count(email):
    return db.session.execute(select(func.count(UserOtp.id)).where(UserOtp.email == email)).scalar_one()


def _signup(service, notifier, email="a@x.com"):
    service.request_signup("alice", email, "secret123")
    return service.complete_signup("alice", email, "secret123", notifier.last_code)


def test_expired_then_fresh_code_then_replay(service, notifier, clock):
    service.request_signup("alice", "a@x.com", "secret123")
    first = notifier.last_code
    clock.advance(minutes=11)

    with pytest.raises(Expired):
        service.complete_signup("alice", "a@x.com", "secret123", first)

    service.request_signup("alice", "a@x.com", "secret123")
    user = service.complete_signup("alice", "a@x.com", "secret123", notifier.last_code)
    assert user.email == "a@x.com"

    # Every code for the address went with the successful verification
    with pytest.raises(NotFound):
        service.complete_signup("alice", "a@x.com", "secret123", first)
    assert _user_count("a@x.com") == 1


def test_two_live_codes_create_only_one_user(service, notifier, clock):
    service.request_signup("alice", "a@x.com", "secret123")
    older = notifier.last_code
    clock.advance(seconds=30)
    service.request_signup("alice", "a@x.com", "secret123")
    newer = notifier.last_code

    service.complete_signup("alice", "a@x.com", "secret123", newer)
    for code in (older, newer):
        with pytest.raises((Conflict, NotFound)):
            service.complete_signup("alice", "a@x.com", "secret123", code)

    assert _user_count("a@x.com") == 1


def test_signup_for_registered_email_is_conflict(service, notifier):
    _signup(service, notifier)
    sent = len(notifier.sent)

    with pytest.raises(Conflict):
        service.request_signup("other", "A@X.com", "secret123")
    assert len(notifier.sent) == sent


def test_email_registered_while_code_pending_is_conflict(service, notifier, store):
    service.request_signup("alice", "a@x.com", "secret123")
    code = notifier.last_code
    store.insert_user("bob", "a@x.com", "hash")
    store.commit()

    with pytest.raises(Conflict):
        service.complete_signup("alice", "a@x.com", "secret123", code)
    assert _user_count("a@x.com") == 1


def test_unique_constraint_rejects_racing_insert_and_keeps_code(service, notifier, store, monkeypatch):
    service.request_signup("alice", "a@x.com", "secret123")
    code = notifier.last_code
    store.insert_user("bob", "a@x.com", "hash")
    store.commit()
    # The racing request passed its re-check before the other insert landed
    monkeypatch.setattr(store, "email_taken", lambda *args, **kwargs: False)

    with pytest.raises(Conflict):
        service.complete_signup("alice", "a@x.com", "secret123", code)

    assert _user_count("a@x.com") == 1
    assert _otp_count("a@x.com") == 1


def test_signup_validates_input_before_sending(service, notifier):
    with pytest.raises(ValidationError):
        service.request_signup("alice", "not-an-email", "secret123")
    with pytest.raises(ValidationError):
        service.request_signup("alice", "a@x.com", "123")
    with pytest.raises(ValidationError):
        service.request_signup("", "a@x.com", "secret123")
    assert notifier.sent == []


def test_malformed_code_is_validation_error(service, notifier):
    service.request_signup("alice", "a@x.com", "secret123")
    with pytest.raises(ValidationError):
        service.complete_signup("alice", "a@x.com", "secret123", "12ab56")


def test_login_does_not_reveal_which_part_was_wrong(service, notifier):
    _signup(service, notifier)

    with pytest.raises(InvalidCredentials) as wrong_password:
        service.login("a@x.com", "wrong-password")
    with pytest.raises(InvalidCredentials) as unknown_email:
        service.login("nobody@x.com", "secret123")

    assert wrong_password.value.status_code == unknown_email.value.status_code == 401
    assert wrong_password.value.message == unknown_email.value.message


def test_login_hashes_even_for_unknown_email(service, notifier, monkeypatch):
    _signup(service, notifier)
    checked = []
    monkeypatch.setattr("utils.accounts.verify_password", lambda pw_hash, pw: checked.append(pw) or False)

    with pytest.raises(InvalidCredentials):
        service.login("nobody@x.com", "secret123")

    assert checked == ["secret123"]


def test_login_returns_token(service, notifier):
    _signup(service, notifier)
    user, token = service.login(" A@X.COM ", "secret123")
    assert user.email == "a@x.com"
    assert token.count(".") == 2


def test_password_reset_flow(service, notifier):
    user = _signup(service, notifier)

    service.request_password_reset("a@x.com")
    assert notifier.sent[-1][2] == "password_reset"
    service.reset_password("a@x.com", notifier.last_code, "newsecret")

    assert _otp_count("a@x.com") == 0
    service.login("a@x.com", "newsecret")
    with pytest.raises(InvalidCredentials):
        service.login("a@x.com", "secret123")
    assert db.session.get(User, user.id).check_password("newsecret")


def test_password_reset_for_unknown_email(service):
    with pytest.raises(NotFound):
        service.request_password_reset("nobody@x.com")
    with pytest.raises(NotFound):
        service.reset_password("nobody@x.com", "123456", "newsecret")


def test_signup_code_cannot_reset_password(service, notifier):
    _signup(service, notifier, email="b@x.com")
    service.request_signup("carol", "c@x.com", "secret123")

    with pytest.raises(NotFound):
        service.reset_password("b@x.com", notifier.last_code, "newsecret")


def test_update_profile_applies_patch(service, notifier):
    user = _signup(service, notifier)

    updated = service.update_profile(user.id, ProfilePatch(username="alice2", email="New@X.com"))

    assert updated.username == "alice2"
    assert updated.email == "new@x.com"
    service.login("new@x.com", "secret123")


def test_update_profile_rules(service, notifier):
    user = _signup(service, notifier)
    _signup(service, notifier, email="b@x.com")

    with pytest.raises(ValidationError, match="At least one field"):
        service.update_profile(user.id, ProfilePatch())
    with pytest.raises(Conflict):
        service.update_profile(user.id, ProfilePatch(email="b@x.com"))
    with pytest.raises(ValidationError, match="at least 6"):
        service.update_profile(user.id, ProfilePatch(password="123"))
    with pytest.raises(ValidationError, match="No valid fields"):
        service.update_profile(user.id, ProfilePatch(email="a@x.com"))


def test_profile_patch_from_dict():
    patch = ProfilePatch.from_dict({"username": "  bob ", "email": "", "password": None})
    assert patch == ProfilePatch(username="bob")
    with pytest.raises(ValidationError):
        ProfilePatch.from_dict({"username": 42})


def test_profile_patch_keeps_password_as_given():
    patch = ProfilePatch.from_dict({"username": " bob", "password": "  pass word  "})
    assert patch.username == "bob"
    assert patch.password == "  pass word  "
    with pytest.raises(ValidationError):
        ProfilePatch.from_dict({"password": 1234567})


def test_delete_account_removes_user_and_codes(service, notifier):
    user = _signup(service, notifier)
    service.request_password_reset("a@x.com")
    assert _otp_count("a@x.com") == 1

    service.delete_account(user.id)

    assert _user_count("a@x.com") == 0
    assert _otp_count("a@x.com") == 0
    with pytest.raises(NotFound):
        service.delete_account(user.id)
