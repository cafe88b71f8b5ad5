"""Container wiring concrete collaborators into the core.

Build one Container per process; every handler shares its store, so the
Redis connection is opened once and reused.
"""

import structlog

from language_tutor_bot.ai.client import Corrector, OpenAICorrector
from language_tutor_bot.config import Settings
from language_tutor_bot.core.pipeline import CorrectionPipeline
from language_tutor_bot.core.router import MessageRouter
from language_tutor_bot.storage.error_tally import KeyValueErrorTally
from language_tutor_bot.storage.interfaces import KeyValueStore
from language_tutor_bot.storage.redis_store import RedisStore
from language_tutor_bot.storage.user_store import KeyValueUserStore

logger = structlog.get_logger()


class Container:
    """Holds the process-wide store, AI collaborator, pipeline and router.

    Args:
        settings: Application settings.
        store: Key/value store; a RedisStore on ``settings.redis_url`` by default.
        corrector: AI collaborator; an OpenAICorrector by default.

    Raises:
        StoreConfigurationError: If no store is given and no Redis URL is configured.
    """

    def __init__(
        self,
        settings: Settings,
        store: KeyValueStore | None = None,
        corrector: Corrector | None = None,
    ):
        self.settings = settings
        self.store = store if store is not None else RedisStore(settings.redis_url)
        self.corrector = corrector if corrector is not None else OpenAICorrector(
            api_key=settings.openai_api_key,
            model=settings.correction_model,
            default_native_language=settings.default_native_language,
            correction_temperature=settings.correction_temperature,
            practice_temperature=settings.practice_temperature,
        )

        self.users = KeyValueUserStore(self.store, settings.default_native_language)
        self.tally = KeyValueErrorTally(self.store)
        self.pipeline = CorrectionPipeline(
            users=self.users,
            tally=self.tally,
            cache=self.store,
            corrector=self.corrector,
            reinforcement_threshold=settings.reinforcement_threshold,
            cache_ttl_seconds=settings.correction_cache_ttl_seconds,
        )
        self.router = MessageRouter(
            users=self.users,
            tally=self.tally,
            pipeline=self.pipeline,
            corrector=self.corrector,
        )
        logger.info("container_ready", store=type(self.store).__name__)

    async def close(self) -> None:
        close = getattr(self.store, "close", None)
        if close is not None:
            await close()
