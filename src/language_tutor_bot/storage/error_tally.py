"""Per-user error counters kept in a Redis hash."""

import structlog

from language_tutor_bot.storage.interfaces import ErrorTallyStore, KeyValueStore

logger = structlog.get_logger()

USER_ERRORS_PREFIX = "user:errors:"


def user_errors_key(user_id: int) -> str:
    return f"{USER_ERRORS_PREFIX}{user_id}"


def _parse_count(value: str | None) -> int:
    try:
        return max(int(value or 0), 0)
    except ValueError:
        return 0


class KeyValueErrorTally(ErrorTallyStore):
    """ErrorTallyStore backed by a hash of category -> count per user."""

    def __init__(self, store: KeyValueStore):
        self._store = store

    async def increment_error_count(self, user_id: int, category: str) -> int:
        # Single HINCRBY: concurrent messages never lose an increment
        return await self._store.hash_increment(user_errors_key(user_id), category, 1)

    async def get_error_history(self, user_id: int) -> dict[str, int]:
        history = await self._store.hash_get_all(user_errors_key(user_id))
        return {category: _parse_count(count) for category, count in history.items()}

    async def reset_error_count(self, user_id: int, category: str) -> None:
        # The field is kept at "0" rather than deleted
        await self._store.hash_set(user_errors_key(user_id), category, "0")
