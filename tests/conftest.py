"""Shared in-memory doubles for the store and AI collaborators."""

import pytest

from language_tutor_bot.ai.client import Corrector
from language_tutor_bot.models.correction import CorrectionResult, PracticeExercise
from language_tutor_bot.storage.error_tally import KeyValueErrorTally
from language_tutor_bot.storage.interfaces import KeyValueStore
from language_tutor_bot.storage.user_store import KeyValueUserStore

DEFAULT_NATIVE = "Portuguese (Brazilian)"


class InMemoryStore(KeyValueStore):
    """Dict-backed KeyValueStore that records the TTL given to each key."""

    def __init__(self):
        self.values: dict[str, str] = {}
        self.ttls: dict[str, int | None] = {}
        self.hashes: dict[str, dict[str, str]] = {}
        self.set_calls: list[str] = []

    async def get(self, key: str) -> str | None:
        return self.values.get(key)

    async def set(self, key: str, value: str, ttl_seconds: int | None = None) -> None:
        self.values[key] = value
        self.ttls[key] = ttl_seconds
        self.set_calls.append(key)

    async def hash_increment(self, hash_key: str, field: str, delta: int = 1) -> int:
        fields = self.hashes.setdefault(hash_key, {})
        fields[field] = str(int(fields.get(field, "0")) + delta)
        return int(fields[field])

    async def hash_get_all(self, hash_key: str) -> dict[str, str]:
        return dict(self.hashes.get(hash_key, {}))

    async def hash_set(self, hash_key: str, field: str, value: str) -> None:
        self.hashes.setdefault(hash_key, {})[field] = value


class FakeCorrector(Corrector):
    """Returns queued results and records every call."""

    def __init__(self):
        self.correction: CorrectionResult | None = None
        self.exercise: PracticeExercise | None = None
        self.correct_calls: list[tuple] = []
        self.practice_calls: list[tuple] = []
        self.raise_on_correct: Exception | None = None

    async def correct(self, text, target_language, context=None, native_language=None):
        self.correct_calls.append((text, target_language, context))
        if self.raise_on_correct is not None:
            raise self.raise_on_correct
        return self.correction

    async def practice(self, target_language, category="general", native_language=None):
        self.practice_calls.append((target_language, category))
        return self.exercise


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def corrector():
    return FakeCorrector()


@pytest.fixture
def users(store):
    return KeyValueUserStore(store, DEFAULT_NATIVE)


@pytest.fixture
def tally(store):
    return KeyValueErrorTally(store)
