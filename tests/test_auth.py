"""Tests for credential hashing and the authentication service."""

import pytest

from pocket_ledger.auth import (
    AuthError,
    AuthService,
    InvalidCredentialsError,
    UserExistsError,
    hash_password,
    verify_password,
)
from pocket_ledger.storage import InMemoryUserStorage


class TestPasswords:
    """Tests for PBKDF2 hashing."""

    def test_hash_format(self):
        """Test the encoded hash carries algorithm and iterations."""
        encoded = hash_password("secret", iterations=1_000)
        algorithm, iterations, salt, digest = encoded.split("$")
        assert algorithm == "pbkdf2_sha256"
        assert iterations == "1000"
        assert len(salt) == 32
        assert len(digest) == 64

    def test_salted(self):
        """Test the same password hashes differently each time."""
        assert hash_password("secret", iterations=1_000) != hash_password("secret", iterations=1_000)

    def test_verify(self):
        encoded = hash_password("secret", iterations=1_000)
        assert verify_password("secret", encoded) is True
        assert verify_password("secret!", encoded) is False

    @pytest.mark.parametrize("encoded", [
        "", "plain", "md5$1$aa$bb", "pbkdf2_sha256$x$aa$bb", "pbkdf2_sha256$10$zz$bb",
        "pbkdf2_sha256$0$00$00", "pbkdf2_sha256$-5$00$00",
    ])
    def test_malformed_hash_never_matches(self, encoded):
        assert verify_password("secret", encoded) is False


class TestAuthService:
    """Tests for registration and login."""

    def test_register_and_login(self, auth):
        """Test a registered user can log in and owns an empty wallet."""
        registered = auth.register("alice", "secret")
        logged_in = auth.login("alice", "secret")

        assert logged_in is registered
        assert logged_in.wallet.get_transactions() == []

    def test_duplicate_registration(self, auth):
        auth.register("alice", "secret")
        with pytest.raises(UserExistsError):
            auth.register("alice", "other")

    def test_wrong_password(self, auth):
        auth.register("alice", "secret")
        with pytest.raises(InvalidCredentialsError):
            auth.login("alice", "wrong")

    def test_unknown_user(self, auth):
        with pytest.raises(InvalidCredentialsError):
            auth.login("nobody", "secret")

    def test_blank_username_rejected(self, auth):
        with pytest.raises(AuthError):
            auth.register("   ", "secret")

    def test_min_password_length(self):
        """Test the configured minimum password length is enforced."""
        service = AuthService(InMemoryUserStorage(), hash_iterations=1_000, min_password_length=6)
        with pytest.raises(AuthError, match="at least 6"):
            service.register("alice", "short")

    def test_save_and_load(self, auth, user_storage):
        """Test the user set goes through the storage backend."""
        auth.register("alice", "secret")
        assert auth.save() == 1

        fresh = AuthService(user_storage, hash_iterations=1_000)
        assert fresh.load() == 1
        assert fresh.login("alice", "secret").username == "alice"

    def test_users_is_a_copy(self, auth):
        auth.register("alice", "secret")
        auth.users.clear()
        assert auth.get_user("alice") is not None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
