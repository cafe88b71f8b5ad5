"""Process entry points: HTTP transport (FastAPI) and Telegram transport."""

from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI
from telegram.ext import Application

from language_tutor_bot.api.routes import router
from language_tutor_bot.app import Container
from language_tutor_bot.bot.telegram import TelegramBot
from language_tutor_bot.config import get_settings
from language_tutor_bot.logging_setup import configure_logging

configure_logging()
logger = structlog.get_logger()


def create_app(container: Container | None = None) -> FastAPI:
    """Build the FastAPI app.

    The container is created at startup unless one is supplied, so a missing
    Redis URL stops the server before it accepts requests.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.container = container or Container(get_settings())
        yield
        await app.state.container.close()

    app = FastAPI(title="Language Tutor Bot", version="0.1.0", lifespan=lifespan)
    app.include_router(router)
    return app


app = create_app()


def main() -> None:
    """Run the HTTP transport."""
    settings = get_settings()
    uvicorn.run(
        "language_tutor_bot.main:app",
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level="info",
    )


def run_telegram() -> None:
    """Run the Telegram transport with long polling."""
    settings = get_settings()
    if not settings.telegram_bot_token:
        raise RuntimeError("TELEGRAM_BOT_TOKEN must be provided")

    container = Container(settings)

    async def _shutdown(_application: Application) -> None:
        await container.close()

    application = (
        Application.builder()
        .token(settings.telegram_bot_token)
        .post_shutdown(_shutdown)
        .build()
    )
    TelegramBot(container.router, settings.telegram_bot_token, application=application).run()


if __name__ == "__main__":
    main()
