"""User preference records, one JSON document per user."""

import json

import structlog

from language_tutor_bot.models.user import UserRecord
from language_tutor_bot.storage.interfaces import KeyValueStore, UserRecordStore

logger = structlog.get_logger()

USER_META_PREFIX = "user:meta:"


def user_meta_key(user_id: int) -> str:
    return f"{USER_META_PREFIX}{user_id}"


class KeyValueUserStore(UserRecordStore):
    """UserRecordStore persisted as JSON under ``user:meta:{id}``.

    Args:
        store: Backing key/value store.
        default_native_language: Native language given to new records and to
            stored records that predate the field.
    """

    def __init__(self, store: KeyValueStore, default_native_language: str):
        self._store = store
        self._default_native_language = default_native_language

    def _defaults(self, user_id: int) -> dict:
        return {
            "id": user_id,
            "targetLanguage": "",
            "nativeLanguage": self._default_native_language,
        }

    async def get_user(self, user_id: int) -> UserRecord:
        key = user_meta_key(user_id)
        stored = await self._store.get(key)

        if stored:
            # Stored fields win; fields added since the record was written get defaults
            data = {**self._defaults(user_id), **json.loads(stored)}
            return UserRecord.model_validate(data)

        user = UserRecord.model_validate(self._defaults(user_id))
        await self._store.set(key, user.to_json())
        logger.info("user_created", user_id=user_id)
        return user

    async def update_user_meta(self, user: UserRecord) -> None:
        await self._store.set(user_meta_key(user.id), user.to_json())
