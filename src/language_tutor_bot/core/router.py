"""Routes inbound text to the correction pipeline or a preference command."""

from collections.abc import Awaitable, Callable

import structlog

from language_tutor_bot.ai.client import Corrector
from language_tutor_bot.ai.prompts import DEFAULT_PRACTICE_CATEGORY
from language_tutor_bot.core.commands import Command, CommandKind, parse_command
from language_tutor_bot.core.pipeline import CorrectionPipeline
from language_tutor_bot.models.user import UserRecord
from language_tutor_bot.storage.interfaces import ErrorTallyStore, UserRecordStore

logger = structlog.get_logger()

SET_LANGUAGE_FIRST = (
    "Please set your target language first using the /language command "
    "(e.g., /language Spanish)."
)
NO_MISTAKES_YET = "You haven't made any recorded mistakes yet. Keep practicing!"
PRACTICE_UNAVAILABLE = "I couldn't generate an exercise for you right now. Please try again later."
NO_CONTEXT_SET = "No context is currently set. Use /context [topic] to set one."
UNEXPECTED_FAILURE = "Something went wrong on my side. Please try again in a moment."
NO_LANGUAGE_SET = (
    "You have not set a target language yet. Use /language [language] to set a new one."
)

Handler = Callable[[int, UserRecord, Command], Awaitable[str]]


def welcome_message(user: UserRecord) -> str:
    if user.has_target_language:
        language_line = f"Your current target language is {user.target_language}."
    else:
        language_line = (
            "Please start by setting your target language with the /language command "
            "(e.g., /language Spanish)."
        )
    return (
        "Welcome, language learner! I'm here to help you practice.\n"
        f"{language_line}\n\n"
        "- Send me a message and I'll correct it.\n"
        "- Use /progress to see your error history.\n"
        "- Use /practice to get an exercise.\n"
        "- Use /context [topic] to set a conversation topic (e.g., /context travel).\n"
        "- Use /language [language] to change the language you are practicing."
    )


def format_progress(history: dict[str, int]) -> str:
    recorded = [(category, count) for category, count in history.items() if count > 0]
    if not recorded:
        return NO_MISTAKES_YET
    lines = "\n".join(f"- {category}: {count} time(s)" for category, count in recorded)
    return f"Here's your progress report:\n{lines}"


def most_frequent_category(history: dict[str, int]) -> str:
    """Category with the highest count; on ties the first one enumerated wins."""
    best: str | None = None
    best_count = 0
    for category, count in history.items():
        if best is None or count > best_count:
            best, best_count = category, count
    return best or DEFAULT_PRACTICE_CATEGORY


class MessageRouter:
    """Dispatches each inbound message to exactly one handler.

    Args:
        users: Learner preference store.
        tally: Error counter store.
        pipeline: Correction pipeline for plain text.
        corrector: AI collaborator used for practice exercises.
    """

    def __init__(
        self,
        users: UserRecordStore,
        tally: ErrorTallyStore,
        pipeline: CorrectionPipeline,
        corrector: Corrector,
    ):
        self._users = users
        self._tally = tally
        self._pipeline = pipeline
        self._corrector = corrector
        self._handlers: dict[CommandKind, Handler] = {
            CommandKind.START: self._start,
            CommandKind.LANGUAGE: self._language,
            CommandKind.PROGRESS: self._progress,
            CommandKind.PRACTICE: self._practice,
            CommandKind.CONTEXT: self._context,
            CommandKind.UNKNOWN: self._unknown,
            CommandKind.TEXT: self._text,
        }

    async def handle(self, user_id: int, text: str) -> str:
        """Return the reply text for one inbound message."""
        command = parse_command(text)
        logger.info("command_received", user_id=user_id, kind=str(command.kind))

        user = await self._users.get_user(user_id)
        if command.requires_target_language and not user.has_target_language:
            return SET_LANGUAGE_FIRST

        return await self._handlers[command.kind](user_id, user, command)

    async def _start(self, user_id: int, user: UserRecord, command: Command) -> str:
        return welcome_message(user)

    async def _language(self, user_id: int, user: UserRecord, command: Command) -> str:
        if command.args:
            user.target_language = command.argument_text
            await self._users.update_user_meta(user)
            return f'Target language set to: "{user.target_language}"'
        if user.has_target_language:
            return (
                f'Your current target language is: "{user.target_language}". '
                "Use /language [language] to set a new one."
            )
        return NO_LANGUAGE_SET

    async def _progress(self, user_id: int, user: UserRecord, command: Command) -> str:
        history = await self._tally.get_error_history(user_id)
        return format_progress(history)

    async def _practice(self, user_id: int, user: UserRecord, command: Command) -> str:
        history = await self._tally.get_error_history(user_id)
        category = most_frequent_category(history)
        logger.info("practice_requested", user_id=user_id, category=category)

        exercise = await self._corrector.practice(
            user.target_language, category, native_language=user.native_language
        )
        if exercise is None:
            return PRACTICE_UNAVAILABLE

        if exercise.is_translation:
            return (
                f"Let's practice! Try translating this to {user.target_language}:\n\n"
                f'"{exercise.sentence}"'
            )
        return f'Let\'s practice! ({exercise.label})\n\n"{exercise.sentence}"'

    async def _context(self, user_id: int, user: UserRecord, command: Command) -> str:
        if command.args:
            user.context = command.argument_text
            await self._users.update_user_meta(user)
            return f'Context set to: "{user.context}"'
        if user.context:
            return f'Current context is: "{user.context}"'
        return NO_CONTEXT_SET

    async def _unknown(self, user_id: int, user: UserRecord, command: Command) -> str:
        return f'Unknown command: "{command.token}". Try /start to see what I can do.'

    async def _text(self, user_id: int, user: UserRecord, command: Command) -> str:
        return await self._pipeline.process_message(user_id, command.token)
