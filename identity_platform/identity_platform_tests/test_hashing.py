import pytest

from identity_platform.identity_platform.auth_service.hashing import PasswordHasher


def test_hash_then_verify_same_password(hasher):
    hashed = hasher.hash("pw123")
    assert hashed != "pw123"
    assert hasher.verify("pw123", hashed) is True


def test_verify_different_password_is_false(hasher):
    hashed = hasher.hash("pw123")
    assert hasher.verify("pw124", hashed) is False
    assert hasher.verify("PW123", hashed) is False


def test_hash_uses_fresh_salt_per_call(hasher):
    assert hasher.hash("same-password") != hasher.hash("same-password")


def test_hash_records_configured_rounds():
    hashed = PasswordHasher(rounds=1234).hash("pw")
    assert hashed.startswith("$pbkdf2-sha256$1234$")


@pytest.mark.parametrize("bad_hash", ["", "not-a-hash", "$pbkdf2-sha256$garbage", None])
def test_verify_malformed_hash_is_false(hasher, bad_hash):
    assert hasher.verify("pw123", bad_hash) is False


def test_verify_empty_password_is_false(hasher):
    assert hasher.verify("", hasher.hash("pw123")) is False


def test_hash_rejects_empty_password(hasher):
    with pytest.raises(ValueError):
        hasher.hash("")


def test_from_settings(settings):
    hasher = PasswordHasher.from_settings(settings)
    assert "$1000$" in hasher.hash("pw")
