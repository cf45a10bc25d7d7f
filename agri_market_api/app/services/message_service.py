"""
Service layer for direct messages.

Messages are addressed from one user to another and start unread.  Only
the receiver may mark a message read, and a read message never becomes
unread again.  Conversations are returned oldest first.
"""

import logging
from typing import Any, Dict, List

from ..core.errors import ForbiddenError, NotFoundError, ValidationError
from ..core.store import get_store
from ..schemas.message import MessageCreate, MessageRead


class MessageService:
    """Service for sending and reading direct messages."""

    @classmethod
    async def send_message(cls, data: MessageCreate, current_user: Dict[str, Any]) -> MessageRead:
        store = get_store()
        if store.get_user(data.receiver_id) is None:
            raise NotFoundError("Receiver not found")
        if data.receiver_id == current_user["user_id"]:
            raise ValidationError.for_field("receiver_id", "You cannot send a message to yourself")
        message = store.create_message(data.model_dump(), sender_id=current_user["user_id"])
        logging.getLogger(__name__).info(
            "Message #%s sent from user %s to user %s", message.id, message.sender_id, message.receiver_id
        )
        return message

    @classmethod
    async def get_conversation(cls, other_user_id: int, current_user: Dict[str, Any]) -> List[MessageRead]:
        store = get_store()
        if store.get_user(other_user_id) is None:
            raise NotFoundError("User not found")
        return store.get_messages_between_users(current_user["user_id"], other_user_id)

    @classmethod
    async def list_unread(cls, current_user: Dict[str, Any]) -> List[MessageRead]:
        return get_store().get_unread_messages_by_user_id(current_user["user_id"])

    @classmethod
    async def mark_as_read(cls, message_id: int, current_user: Dict[str, Any]) -> MessageRead:
        """Mark a message read on behalf of its receiver.

        Marking an already read message again is a no‑op that returns it
        unchanged.
        """
        store = get_store()
        with store.lock:
            message = store.get_message_by_id(message_id)
            if message is None:
                raise NotFoundError("Message not found")
            if message.receiver_id != current_user["user_id"]:
                raise ForbiddenError("You don't have permission to mark this message as read")
            if message.read:
                return message
            return store.mark_message_as_read(message_id)
