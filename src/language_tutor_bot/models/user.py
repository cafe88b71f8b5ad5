"""Per-user preference record."""

from pydantic import BaseModel, ConfigDict, Field


class UserRecord(BaseModel):
    """Learner preferences stored under ``user:meta:{id}``.

    An empty ``target_language`` means the learner has not picked one yet.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: int
    target_language: str = Field(default="", alias="targetLanguage")
    native_language: str = Field(alias="nativeLanguage")
    context: str | None = None

    @property
    def has_target_language(self) -> bool:
        return bool(self.target_language)

    def to_json(self) -> str:
        """Serialize with the camelCase keys used in the store."""
        return self.model_dump_json(by_alias=True, exclude_none=True)
