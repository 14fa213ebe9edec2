"""Messages API router — send and inbox."""

from typing import List
from fastapi import APIRouter, Depends, status

from devdeck.api.deps import get_message_service
from devdeck.core.policy import Action, Caller
from devdeck.core.security import RequireAction
from devdeck.schemas.schemas import MessageCreate, MessageOut
from devdeck.services.message_service import MessageService
from devdeck.services.projection import message_out

router = APIRouter(prefix="/messages", tags=["messages"])


@router.post("", response_model=MessageOut, status_code=status.HTTP_201_CREATED)
async def send_message(
    body: MessageCreate,
    messages: MessageService = Depends(get_message_service),
    caller: Caller = Depends(RequireAction(Action.send_message)),
):
    """Send a message from the caller to another user."""
    message = messages.send(caller.id, body.receiver_id, body.subject, body.content)
    return message_out(message)


@router.get("/inbox", response_model=List[MessageOut])
async def inbox(
    messages: MessageService = Depends(get_message_service),
    caller: Caller = Depends(RequireAction(Action.list_own_messages)),
):
    """Messages the caller sent or received, newest first."""
    return [message_out(m) for m in messages.inbox(caller.id)]
