"""OpenAI-backed correction and practice-exercise collaborator."""

import json
from abc import ABC, abstractmethod

import structlog
from openai import AsyncOpenAI

from language_tutor_bot.ai.prompts import (
    DEFAULT_PRACTICE_CATEGORY,
    build_correction_prompt,
    build_practice_prompt,
)
from language_tutor_bot.models.correction import CorrectionResult, PracticeExercise

logger = structlog.get_logger()


class Corrector(ABC):
    """AI collaborator consumed by the pipeline and the router.

    Both calls return ``None`` instead of raising when no usable result could
    be produced.
    """

    @abstractmethod
    async def correct(
        self,
        text: str,
        target_language: str,
        context: str | None = None,
        native_language: str | None = None,
    ) -> CorrectionResult | None:
        ...

    @abstractmethod
    async def practice(
        self,
        target_language: str,
        category: str = DEFAULT_PRACTICE_CATEGORY,
        native_language: str | None = None,
    ) -> PracticeExercise | None:
        ...


class OpenAICorrector(Corrector):
    """Uses the Chat Completions JSON mode for corrections and exercises.

    Args:
        api_key: OpenAI API key.
        model: Model to use for both calls.
        default_native_language: Used when the caller does not pass one.
        correction_temperature: Sampling temperature for corrections.
        practice_temperature: Sampling temperature for exercises.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        default_native_language: str = "Portuguese (Brazilian)",
        correction_temperature: float = 0.3,
        practice_temperature: float = 0.7,
        client: AsyncOpenAI | None = None,
    ):
        self.client = client or AsyncOpenAI(api_key=api_key)
        self.model = model
        self.default_native_language = default_native_language
        self.correction_temperature = correction_temperature
        self.practice_temperature = practice_temperature

    async def _complete_json(self, prompt: str, temperature: float) -> dict | None:
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "system", "content": prompt}],
            temperature=temperature,
            response_format={"type": "json_object"},
        )
        content = response.choices[0].message.content if response.choices else None
        if not content:
            return None
        return json.loads(content)

    async def correct(
        self,
        text: str,
        target_language: str,
        context: str | None = None,
        native_language: str | None = None,
    ) -> CorrectionResult | None:
        """Correct one learner message.

        Args:
            text: The learner's message, verbatim.
            target_language: Language being practiced.
            context: Optional conversation topic.
            native_language: Language for the explanation.

        Returns:
            CorrectionResult, or None if the call failed or returned nothing.
        """
        prompt = build_correction_prompt(
            message=text,
            target_language=target_language,
            native_language=native_language or self.default_native_language,
            context=context,
        )
        try:
            data = await self._complete_json(prompt, self.correction_temperature)
            if data is None:
                logger.error("correction_empty_response")
                return None
            result = CorrectionResult.model_validate(data)
            logger.info("correction_complete", error_type=result.error_type)
            return result
        except Exception:
            logger.exception("correction_failed")
            return None

    async def practice(
        self,
        target_language: str,
        category: str = DEFAULT_PRACTICE_CATEGORY,
        native_language: str | None = None,
    ) -> PracticeExercise | None:
        """Generate one practice exercise targeting an error category."""
        prompt = build_practice_prompt(
            target_language=target_language,
            native_language=native_language or self.default_native_language,
            error_type=category,
        )
        try:
            data = await self._complete_json(prompt, self.practice_temperature)
            if data is None:
                logger.error("practice_empty_response")
                return None
            return PracticeExercise.model_validate(data)
        except Exception:
            logger.exception("practice_failed")
            return None
