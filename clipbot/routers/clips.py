from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from clipbot.config import logger
from clipbot.core.orchestrator import ClipOrchestrator
from clipbot.schemas import ClipStatusResponse

router = APIRouter(tags=["Clips"])


def get_orchestrator(request: Request) -> ClipOrchestrator:
    return request.app.state.orchestrator


def clean_display_name(user: Optional[str]) -> Optional[str]:
    """Trim the chatter name; blank names count as absent."""
    if user is None:
        return None
    user = user.strip()
    return user or None


@router.get("/", response_model=ClipStatusResponse)
async def create_clip(
    user: Optional[str] = Query(default=None, description="Display name of the chatter asking for the clip"),
    orchestrator: ClipOrchestrator = Depends(get_orchestrator),
) -> ClipStatusResponse:
    """
    Create a clip and announce it in Discord.

    Always answers 200; success or failure is only reported in ``body``, which
    chat bots relay back to the channel.
    """
    display_name = clean_display_name(user)
    logger.info("Clip requested by %s", display_name or "anonymous")
    message = await orchestrator.run(display_name)
    return ClipStatusResponse(body=message)
