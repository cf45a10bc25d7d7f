"""Pydantic models for direct messages between users."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class MessageCreate(BaseModel):
    receiver_id: int
    content: str = Field(..., min_length=1)

    @field_validator("content")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Message cannot be empty")
        return v


class MessageRead(BaseModel):
    id: int
    sender_id: int
    receiver_id: int
    content: str
    read: bool = False
    created_at: datetime

    model_config = {
        "from_attributes": True,
    }
