"""
Messaging Models - Player/physician conversations, messages and attachments.
"""

from datetime import datetime, timezone
from typing import Optional, List
from pydantic import BaseModel, Field


class MessageAttachment(BaseModel):
    """File attached to a message."""
    id: str
    message_id: str
    file_path: str
    file_type: str
    uploaded_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class Message(BaseModel):
    """A single chat message."""
    id: str
    conversation_id: str
    sender_id: str
    content: str
    sent_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    read_by_recipient: bool = False
    attachments: List[MessageAttachment] = Field(default_factory=list)


class MessageCreate(BaseModel):
    """Payload for sending a message."""
    conversation_id: str
    content: str = Field(..., min_length=1, max_length=10000)
    attachment_file_path: Optional[str] = None
    attachment_file_type: Optional[str] = None


class Conversation(BaseModel):
    """A conversation between one player and one physician."""
    id: str
    player_id: str
    physician_id: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    last_message_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ConversationCreate(BaseModel):
    """Start a conversation with the given counterpart (physician for players, player for physicians)."""
    participant_id: str


class ConversationSummary(Conversation):
    """Conversation as listed for one participant."""
    counterpart_name: Optional[str] = None
    unread: int = 0


class MessageList(BaseModel):
    """Messages of a conversation, oldest first."""
    messages: List[Message]
