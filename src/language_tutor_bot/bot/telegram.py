"""Telegram chat transport built on python-telegram-bot."""

import structlog
from telegram import Update
from telegram.ext import Application, ContextTypes, MessageHandler, filters

from language_tutor_bot.core.router import UNEXPECTED_FAILURE, MessageRouter

logger = structlog.get_logger()


class TelegramBot:
    """Forwards every text message, commands included, to the router.

    Args:
        router: Message router producing the reply text.
        token: Telegram bot token, used when no application is supplied.
        application: Pre-built application (for custom hooks or tests).
    """

    def __init__(
        self,
        router: MessageRouter,
        token: str | None = None,
        application: Application | None = None,
    ):
        self.router = router
        self.application = application or Application.builder().token(token).build()
        self.application.add_handler(MessageHandler(filters.TEXT, self.handle_message))
        self.application.add_error_handler(self.handle_error)

    async def handle_message(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        if update.effective_user is None or update.message is None or not update.message.text:
            return

        user_id = update.effective_user.id
        with structlog.contextvars.bound_contextvars(user_id=user_id):
            reply = await self.router.handle(user_id, update.message.text)
            await update.message.reply_text(reply)

    async def handle_error(self, update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Log the failure and tell the user something went wrong."""
        logger.error("telegram_handler_failed", exc_info=context.error)
        if isinstance(update, Update) and update.effective_message is not None:
            await update.effective_message.reply_text(UNEXPECTED_FAILURE)

    def run(self) -> None:
        logger.info("telegram_polling_started")
        self.application.run_polling(allowed_updates=Update.ALL_TYPES)
