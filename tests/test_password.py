"""
Tests for argon2id password hashing.
"""

from auth.password import hash_password, verify_password


class TestPasswordHashing:
    def test_round_trip(self):
        hashed = hash_password("Secret123")
        assert hashed.startswith("$argon2id$")
        assert verify_password("Secret123", hashed)

    def test_salted(self):
        assert hash_password("Secret123") != hash_password("Secret123")

    def test_wrong_password(self):
        assert not verify_password("Secret124", hash_password("Secret123"))

    def test_malformed_hash(self):
        assert not verify_password("Secret123", "not-a-hash")
        assert not verify_password("Secret123", "")
