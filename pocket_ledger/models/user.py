"""
User Model

A user owns exactly one wallet, created together with the user.
Credential checking lives in pocket_ledger.auth; the model only stores
the hash.
"""

from pydantic import BaseModel, Field

from pocket_ledger.models.wallet import Wallet


class User(BaseModel):
    """A registered ledger user."""

    username: str = Field(
        ...,
        min_length=1,
        description="Unique login name"
    )
    password_hash: str = Field(
        ...,
        description="Salted password hash (see pocket_ledger.auth.passwords)"
    )
    wallet: Wallet = Field(
        default_factory=Wallet,
        description="The user's ledger"
    )

    def validate_password(self, password: str) -> bool:
        """Check a plain-text password against the stored hash."""
        from pocket_ledger.auth.passwords import verify_password

        return verify_password(password, self.password_hash)
