"""Correction and practice value objects returned by the AI collaborator."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ErrorType(StrEnum):
    """Closed set of error categories a correction can report."""

    TENSE = "tense"
    PREPOSITION = "preposition"
    GRAMMAR = "grammar"
    WORD_CHOICE = "word_choice"
    SYNTAX = "syntax"


class CorrectionResult(BaseModel):
    """One AI correction of a learner message.

    ``error_type`` is ``None`` exactly when the message needed no correction.
    """

    model_config = ConfigDict(populate_by_name=True)

    corrected: str
    explanation: str = ""
    error_type: ErrorType | None = Field(default=None, alias="errorType")
    reply: str = ""

    @field_validator("error_type", mode="before")
    @classmethod
    def _blank_means_no_error(cls, value):
        if value is None:
            return None
        if isinstance(value, str) and value.strip().lower() in ("", "null", "none"):
            return None
        return value

    @property
    def has_error(self) -> bool:
        return self.error_type is not None

    def to_json(self) -> str:
        """Serialize with the camelCase keys used in the correction cache."""
        return self.model_dump_json(by_alias=True)


class PracticeExercise(BaseModel):
    """A single practice exercise. Not cached."""

    type: str
    sentence: str
    correct_answer: str

    @property
    def is_translation(self) -> bool:
        """The model sometimes returns the same text as prompt and answer."""
        return self.sentence == self.correct_answer

    @property
    def label(self) -> str:
        return self.type.replace("_", " ")
