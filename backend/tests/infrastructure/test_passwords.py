"""Password hashing — bcrypt round trip and defensive failures."""

import pytest

from dziennik.infrastructure.passwords import hash_password, verify_password


def test_hash_then_verify():
    hashed = hash_password("tajne")
    assert hashed != "tajne"
    assert verify_password("tajne", hashed)
    assert not verify_password("jawne", hashed)


def test_empty_password_cannot_be_hashed():
    with pytest.raises(ValueError):
        hash_password("")


@pytest.mark.parametrize("password,hashed", [
    ("", "$2b$12$abc"),
    ("tajne", ""),
    ("tajne", "not-a-bcrypt-hash"),
])
def test_verify_rejects_bad_input(password, hashed):
    assert verify_password(password, hashed) is False
