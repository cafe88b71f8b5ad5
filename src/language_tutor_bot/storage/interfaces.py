"""Capability interfaces the core depends on.

Concrete Redis-backed implementations live next to this module; tests supply
in-memory doubles implementing the same interfaces.
"""

from abc import ABC, abstractmethod

from language_tutor_bot.models.user import UserRecord


class KeyValueStore(ABC):
    """String values with optional expiry plus per-key hash maps of counters."""

    @abstractmethod
    async def get(self, key: str) -> str | None:
        ...

    @abstractmethod
    async def set(self, key: str, value: str, ttl_seconds: int | None = None) -> None:
        ...

    @abstractmethod
    async def hash_increment(self, hash_key: str, field: str, delta: int = 1) -> int:
        """Atomically add ``delta`` to a hash field and return the new value."""
        ...

    @abstractmethod
    async def hash_get_all(self, hash_key: str) -> dict[str, str]:
        ...

    @abstractmethod
    async def hash_set(self, hash_key: str, field: str, value: str) -> None:
        ...


class UserRecordStore(ABC):
    """Reads and writes learner preference records."""

    @abstractmethod
    async def get_user(self, user_id: int) -> UserRecord:
        """Return the record, creating and persisting defaults on first lookup."""
        ...

    @abstractmethod
    async def update_user_meta(self, user: UserRecord) -> None:
        """Overwrite the stored record (last writer wins)."""
        ...


class ErrorTallyStore(ABC):
    """Per-user, per-category error counters."""

    @abstractmethod
    async def increment_error_count(self, user_id: int, category: str) -> int:
        ...

    @abstractmethod
    async def get_error_history(self, user_id: int) -> dict[str, int]:
        ...

    @abstractmethod
    async def reset_error_count(self, user_id: int, category: str) -> None:
        ...
