"""
Authentication Service

Maps a username/password pair to a user record. Owns the in-memory user
set and hands it to the storage backend on load/save.
"""

from typing import Optional

import structlog

from pocket_ledger.auth.passwords import DEFAULT_ITERATIONS, hash_password
from pocket_ledger.models.user import User
from pocket_ledger.storage.interface import UserStorageInterface


class AuthError(Exception):
    """Base exception for authentication failures."""
    pass


class UserExistsError(AuthError):
    """Registration with a username that is already taken."""
    pass


class InvalidCredentialsError(AuthError):
    """Unknown username or wrong password."""
    pass


class AuthService:
    """
    Registers users and checks their credentials.

    The login result is returned to the caller; this service keeps no
    notion of a "current user".
    """

    def __init__(
        self,
        storage: UserStorageInterface,
        hash_iterations: int = DEFAULT_ITERATIONS,
        min_password_length: int = 1,
    ):
        self._storage = storage
        self._hash_iterations = hash_iterations
        self._min_password_length = min_password_length
        self._users: dict[str, User] = {}
        self._logger = structlog.get_logger(__name__)

    @property
    def users(self) -> dict[str, User]:
        return dict(self._users)

    def get_user(self, username: str) -> Optional[User]:
        return self._users.get(username)

    def load(self) -> int:
        """Replace the in-memory user set with the stored one. Returns the count."""
        self._users = self._storage.load_users()
        return len(self._users)

    def save(self) -> int:
        """Write the in-memory user set to storage. Returns the count."""
        self._storage.save_users(self._users)
        return len(self._users)

    def register(self, username: str, password: str) -> User:
        """
        Create a user with an empty wallet.

        Raises:
            UserExistsError: username already taken
            AuthError: blank username or too-short password
        """
        if not username or not username.strip():
            raise AuthError("Username must not be empty")
        if len(password) < self._min_password_length:
            raise AuthError(
                f"Password must be at least {self._min_password_length} characters"
            )
        if username in self._users:
            raise UserExistsError(f"User '{username}' already exists")

        user = User(
            username=username,
            password_hash=hash_password(password, self._hash_iterations),
        )
        self._users[username] = user
        self._logger.info("user_registered", username=username)
        return user

    def login(self, username: str, password: str) -> User:
        """
        Return the user matching the credentials.

        Raises:
            InvalidCredentialsError: unknown user or wrong password
        """
        user = self._users.get(username)
        if user is None or not user.validate_password(password):
            self._logger.warning("login_failed", username=username)
            raise InvalidCredentialsError("Invalid username or password")
        self._logger.info("login_succeeded", username=username)
        return user
