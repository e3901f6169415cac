"""Email sharing endpoint."""

from fastapi import APIRouter

from lexora.api.dependencies import CurrentUserDep, EmailShareDep
from lexora.api.v1.schemas import MessageResponse, ShareRequest

router = APIRouter(tags=["share"])


@router.post("/share", response_model=MessageResponse)
async def share_by_email(
    request: ShareRequest,
    user: CurrentUserDep,
    share_service: EmailShareDep,
) -> MessageResponse:
    """Email summary text from the caller's own mailbox."""
    await share_service.share(user, request.summary, request.recipient)
    return MessageResponse(message="Email sent successfully!")
