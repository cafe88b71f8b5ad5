"""Reply text assembly for corrections and reinforcement reminders."""

from language_tutor_bot.models.correction import CorrectionResult

BOT_MARKER = "🤖"
CORRECTION_MARKER = "🤔"

REINFORCEMENT_HEADER = "🔔 You've made this type of error a few times. Let's focus on it!"

DEFAULT_TIP = "Grammar rules can be complex, but mastering them makes a big difference."

REINFORCEMENT_TIPS: dict[str, str] = {
    "tense": (
        "Tenses tell you when an action happens (e.g., 'I walk' vs. 'I walked'). "
        "Let's focus on getting them right!"
    ),
    "preposition": (
        "Prepositions like 'in', 'on', 'at' show relationships. They often require practice."
    ),
    "word_choice": (
        "Choosing the most accurate word is key. Similar words can have very different meanings."
    ),
}


def reinforcement_message(error_type: str) -> str:
    """Header plus a category-specific tip."""
    tip = REINFORCEMENT_TIPS.get(error_type, DEFAULT_TIP)
    focus = error_type.replace("_", " ")
    return f"{REINFORCEMENT_HEADER}\n\n**Focus Area: {focus}**\n{tip}"


def format_correction(correction: CorrectionResult) -> str:
    """Format a correction for the learner.

    Errors get a correction block followed by the conversational reply.
    Correct messages get only the reply.
    """
    if not correction.has_error:
        if correction.reply:
            return f"{BOT_MARKER} {correction.reply}"
        return f'"{correction.corrected}" is correct! Keep it up.'

    block = (
        f"{CORRECTION_MARKER}\n"
        f'Correction: "{correction.corrected}"\n'
        f"Explanation: {correction.explanation}\n"
        f"Error Type: {correction.error_type}"
    )
    return f"{block}\n\n{BOT_MARKER} {correction.reply}"


def compose_reply(correction: CorrectionResult, reinforcement: str | None = None) -> str:
    regular = format_correction(correction)
    if reinforcement:
        return f"{reinforcement}\n\n{regular}"
    return regular
