"""Password hashing tests."""

import bcrypt
import pytest

from account_api.auth.password import (
    EmptyPasswordError,
    PasswordError,
    hash_password,
    verify_password,
)


def test_hash_password():
    hashed = hash_password("myStrongPassword", rounds=4)
    assert hashed.startswith("$2")
    assert hashed != "myStrongPassword"


def test_hash_empty_password_fails():
    with pytest.raises(EmptyPasswordError):
        hash_password("", rounds=4)


def test_hashes_are_salted():
    assert hash_password("same", rounds=4) != hash_password("same", rounds=4)


def test_verify_matching_password():
    hashed = hash_password("myStrongPassword", rounds=4)
    assert verify_password("myStrongPassword", hashed) is None


def test_verify_wrong_password_fails():
    hashed = hash_password("myStrongPassword", rounds=4)
    with pytest.raises(PasswordError):
        verify_password("myStrongPasswords", hashed)


def test_verify_against_garbage_hash_fails():
    with pytest.raises(PasswordError):
        verify_password("myStrongPassword", "not-a-bcrypt-hash")


def test_default_cost_factor_is_secure():
    hashed = hash_password("myStrongPassword")
    assert bcrypt.checkpw(b"myStrongPassword", hashed.encode())
    assert hashed.split("$")[2] == "12"


def test_long_passwords_truncate_consistently():
    long_password = "x" * 100
    hashed = hash_password(long_password, rounds=4)
    verify_password(long_password, hashed)
