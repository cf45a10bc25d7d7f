"""
Direct message endpoints for API v1.

``/unread`` is declared before ``/{user_id}`` so that it is not
swallowed by the conversation route.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from agri_market_api.app.core.security import get_current_user
from agri_market_api.app.schemas.message import MessageCreate, MessageRead
from agri_market_api.app.services.message_service import MessageService


router = APIRouter()


@router.post("", response_model=MessageRead, status_code=status.HTTP_201_CREATED)
async def send_message(
    message: MessageCreate,
    current_user: dict = Depends(get_current_user),
) -> MessageRead:
    return await MessageService.send_message(message, current_user)


@router.get("/unread", response_model=List[MessageRead])
async def list_unread(current_user: dict = Depends(get_current_user)) -> List[MessageRead]:
    return await MessageService.list_unread(current_user)


@router.get("/{user_id}", response_model=List[MessageRead])
async def get_conversation(user_id: int, current_user: dict = Depends(get_current_user)) -> List[MessageRead]:
    """Messages exchanged with ``user_id``, oldest first."""
    return await MessageService.get_conversation(user_id, current_user)


@router.patch("/{message_id}/read", response_model=MessageRead)
async def mark_message_read(message_id: int, current_user: dict = Depends(get_current_user)) -> MessageRead:
    return await MessageService.mark_as_read(message_id, current_user)
