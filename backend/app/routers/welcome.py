from fastapi import APIRouter

from backend.app.constants import WELCOME_MESSAGE
from backend.app.schemas.tutorial import MessageResponse

welcome_router = APIRouter(tags=["Welcome"])


@welcome_router.get(
    "/",
    summary="Welcome message",
    responses={200: {"description": "Static greeting; no dependencies."}},
)
async def welcome() -> MessageResponse:
    return MessageResponse(message=WELCOME_MESSAGE)
