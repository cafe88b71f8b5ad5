"""HTTP chat transport: one inbound message in, one reply out."""

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from redis.exceptions import RedisError

from language_tutor_bot.core.router import UNEXPECTED_FAILURE

logger = structlog.get_logger()
router = APIRouter(prefix="/api")


class InboundMessage(BaseModel):
    user_id: int
    text: str


class Reply(BaseModel):
    reply: str


@router.post("/messages", response_model=Reply)
async def post_message(message: InboundMessage, request: Request):
    """Route one learner message and return the bot's reply."""
    message_router = request.app.state.container.router
    with structlog.contextvars.bound_contextvars(user_id=message.user_id):
        try:
            reply = await message_router.handle(message.user_id, message.text)
        except RedisError:
            logger.exception("store_unavailable")
            return JSONResponse({"reply": UNEXPECTED_FAILURE}, status_code=503)
    return Reply(reply=reply)


@router.get("/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "ok"}
