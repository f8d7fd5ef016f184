"""
Storage Package

Abstract interfaces plus JSON-file and in-memory implementations.
"""

from pocket_ledger.storage.interface import (
    AuditStorageInterface,
    CorruptStorageError,
    StorageError,
    UserStorageInterface,
)
from pocket_ledger.storage.json_file import JsonFileUserStorage
from pocket_ledger.storage.memory import InMemoryAuditStorage, InMemoryUserStorage

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    "UserStorageInterface",
    # Exceptions
    "CorruptStorageError",
    "StorageError",
    # Implementations
    "InMemoryAuditStorage",
    "InMemoryUserStorage",
    "JsonFileUserStorage",
]
