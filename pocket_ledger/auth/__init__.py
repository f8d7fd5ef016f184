"""Authentication package."""

from pocket_ledger.auth.passwords import hash_password, verify_password
from pocket_ledger.auth.service import (
    AuthError,
    AuthService,
    InvalidCredentialsError,
    UserExistsError,
)

__all__ = [
    "AuthError",
    "AuthService",
    "InvalidCredentialsError",
    "UserExistsError",
    "hash_password",
    "verify_password",
]
