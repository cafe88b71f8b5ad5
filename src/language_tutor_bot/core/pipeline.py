"""Correction pipeline: cache lookup, AI correction, error tally, reinforcement."""

import structlog
from pydantic import ValidationError

from language_tutor_bot.ai.client import Corrector
from language_tutor_bot.core.feedback import compose_reply, reinforcement_message
from language_tutor_bot.models.correction import CorrectionResult
from language_tutor_bot.storage.interfaces import ErrorTallyStore, KeyValueStore, UserRecordStore

logger = structlog.get_logger()

CACHE_PREFIX = "correction:"
CACHE_TTL_SECONDS = 3600
REINFORCEMENT_THRESHOLD = 3

APOLOGY_MESSAGE = "I'm sorry, I couldn't process your message at the moment."


def correction_cache_key(text: str) -> str:
    """Cache key shared by every user: prefix plus trimmed, lower-cased text."""
    return f"{CACHE_PREFIX}{text.strip().lower()}"


class CorrectionPipeline:
    """Turns one learner message into the bot's reply.

    Args:
        users: Source of learner preferences.
        tally: Per-user error counters.
        cache: Key/value store holding cached corrections.
        corrector: AI collaborator.
        reinforcement_threshold: Count at which a category triggers a reminder.
        cache_ttl_seconds: Lifetime of a freshly cached correction.
    """

    def __init__(
        self,
        users: UserRecordStore,
        tally: ErrorTallyStore,
        cache: KeyValueStore,
        corrector: Corrector,
        reinforcement_threshold: int = REINFORCEMENT_THRESHOLD,
        cache_ttl_seconds: int = CACHE_TTL_SECONDS,
    ):
        self._users = users
        self._tally = tally
        self._cache = cache
        self._corrector = corrector
        self.reinforcement_threshold = reinforcement_threshold
        self.cache_ttl_seconds = cache_ttl_seconds

    async def _cached_correction(self, cache_key: str) -> CorrectionResult | None:
        cached = await self._cache.get(cache_key)
        if not cached:
            return None
        try:
            return CorrectionResult.model_validate_json(cached)
        except ValidationError:
            logger.warning("correction_cache_corrupt", cache_key=cache_key)
            return None

    async def _request_correction(
        self, text: str, target_language: str, context: str | None, native_language: str
    ) -> CorrectionResult | None:
        try:
            return await self._corrector.correct(
                text, target_language, context, native_language=native_language
            )
        except Exception:
            logger.exception("corrector_raised")
            return None

    async def _record_error(self, user_id: int, error_type: str) -> bool:
        """Tally one error and report whether it crossed the reinforcement threshold."""
        count = await self._tally.increment_error_count(user_id, error_type)
        logger.info("error_tallied", user_id=user_id, error_type=error_type, count=count)

        if count >= self.reinforcement_threshold:
            await self._tally.reset_error_count(user_id, error_type)
            logger.info("reinforcement_triggered", user_id=user_id, error_type=error_type)
            return True
        return False

    async def process_message(self, user_id: int, text: str) -> str:
        """Correct ``text`` for ``user_id`` and return the reply to send.

        Store failures propagate. A failed AI call yields APOLOGY_MESSAGE.
        """
        user = await self._users.get_user(user_id)
        cache_key = correction_cache_key(text)

        correction = await self._cached_correction(cache_key)
        from_cache = correction is not None
        if from_cache:
            logger.info("correction_cache_hit", user_id=user_id)
        else:
            logger.info("correction_cache_miss", user_id=user_id)
            correction = await self._request_correction(
                text, user.target_language, user.context, user.native_language
            )
            if correction is None:
                return APOLOGY_MESSAGE

        reinforcement = None
        if correction.has_error:
            error_type = str(correction.error_type)
            if await self._record_error(user.id, error_type):
                reinforcement = reinforcement_message(error_type)

        # Hits are not rewritten, so the TTL only restarts on a miss
        if not from_cache:
            await self._cache.set(cache_key, correction.to_json(), self.cache_ttl_seconds)

        return compose_reply(correction, reinforcement)
