"""
Record Store - Persistence gateway for player logs, AI insights and messaging.

Each record is one JSON file on a StorageInterface:

    logs/<player_id>/<log_id>.json
    insights/<log_id>.json
    conversations/<conversation_id>.json
    messages/<conversation_id>/<message_id>.json
    attachments/<message_id>/<attachment_id>.json
    attachment_files/<user_id>/<file name>
"""

import logging
import re
from datetime import datetime, timezone
from typing import Optional, List, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..models import (
    AIInsight,
    Conversation,
    Message,
    MessageAttachment,
    PlayerLog,
)
from .interface import StorageInterface
from .local_storage import LocalStorage

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

RECORD_ID_PATTERN = re.compile(r"[A-Za-z0-9_-]+")


def is_valid_record_id(record_id: str) -> bool:
    """Record ids end up in paths and glob patterns; only plain tokens are allowed."""
    return bool(RECORD_ID_PATTERN.fullmatch(record_id))


class RecordStore:
    """Typed access to the records the API works with."""

    def __init__(self, storage: StorageInterface):
        self.storage = storage

    async def _load_model(self, path: str, model: Type[ModelT]) -> Optional[ModelT]:
        content = await self.storage.load(path)
        if content is None:
            return None
        try:
            return model.model_validate_json(content)
        except ValidationError as e:
            logger.error(f"Invalid {model.__name__} record at {path}: {e}")
            return None

    async def _load_all(self, directory: str, model: Type[ModelT], recursive: bool = False) -> List[ModelT]:
        records = []
        for path in await self.storage.list(directory, pattern="*.json", recursive=recursive):
            record = await self._load_model(path, model)
            if record is not None:
                records.append(record)
        return records

    async def _save_model(self, path: str, record: BaseModel) -> bool:
        return await self.storage.save(path, record.model_dump_json(indent=2))

    # Player logs

    async def create_log(self, log: PlayerLog) -> bool:
        """Store a new log. Logs are never overwritten."""
        path = f"logs/{log.player_id}/{log.id}.json"
        if await self.storage.exists(path):
            logger.warning(f"Refusing to overwrite player log {log.id}")
            return False
        return await self._save_model(path, log)

    async def get_log(self, log_id: str) -> Optional[PlayerLog]:
        if not is_valid_record_id(log_id):
            return None
        matches = await self.storage.list("logs", pattern=f"{log_id}.json", recursive=True)
        if not matches:
            return None
        return await self._load_model(matches[0], PlayerLog)

    async def list_logs(self, player_id: str) -> List[PlayerLog]:
        """All logs of a player, newest first."""
        logs = await self._load_all(f"logs/{player_id}", PlayerLog)
        return sorted(logs, key=lambda log: log.submitted_at, reverse=True)

    # AI insights

    async def create_insight(self, insight: AIInsight) -> bool:
        return await self._save_model(f"insights/{insight.log_id}.json", insight)

    async def get_insight_for_log(self, log_id: str) -> Optional[AIInsight]:
        return await self._load_model(f"insights/{log_id}.json", AIInsight)

    # Conversations

    async def save_conversation(self, conversation: Conversation) -> bool:
        return await self._save_model(f"conversations/{conversation.id}.json", conversation)

    async def get_conversation(self, conversation_id: str) -> Optional[Conversation]:
        if not is_valid_record_id(conversation_id):
            return None
        return await self._load_model(f"conversations/{conversation_id}.json", Conversation)

    async def list_conversations(self, user_id: str) -> List[Conversation]:
        """Conversations the user takes part in, most recent activity first."""
        conversations = [
            conversation
            for conversation in await self._load_all("conversations", Conversation)
            if user_id in (conversation.player_id, conversation.physician_id)
        ]
        return sorted(conversations, key=lambda conversation: conversation.last_message_at, reverse=True)

    async def find_conversation(self, player_id: str, physician_id: str) -> Optional[Conversation]:
        for conversation in await self._load_all("conversations", Conversation):
            if conversation.player_id == player_id and conversation.physician_id == physician_id:
                return conversation
        return None

    async def touch_conversation(self, conversation: Conversation, when: Optional[datetime] = None) -> Conversation:
        """Bump last_message_at."""
        updated = conversation.model_copy(update={"last_message_at": when or datetime.now(timezone.utc)})
        await self.save_conversation(updated)
        return updated

    # Messages

    def _message_path(self, message: Message) -> str:
        return f"messages/{message.conversation_id}/{message.id}.json"

    async def save_message(self, message: Message) -> bool:
        # Attachments are stored as their own records
        stored = message.model_copy(update={"attachments": []})
        return await self._save_model(self._message_path(message), stored)

    async def get_message(self, conversation_id: str, message_id: str) -> Optional[Message]:
        if not (is_valid_record_id(conversation_id) and is_valid_record_id(message_id)):
            return None
        return await self._load_model(f"messages/{conversation_id}/{message_id}.json", Message)

    async def list_messages(self, conversation_id: str) -> List[Message]:
        """Messages of a conversation, oldest first, with attachments."""
        messages = await self._load_all(f"messages/{conversation_id}", Message)
        messages.sort(key=lambda message: message.sent_at)
        for message in messages:
            message.attachments = await self.list_attachments(message.id)
        return messages

    async def mark_read(self, conversation_id: str, reader_id: str) -> int:
        """Mark messages sent by the other participant as read. Returns how many changed."""
        changed = 0
        for message in await self._load_all(f"messages/{conversation_id}", Message):
            if message.sender_id != reader_id and not message.read_by_recipient:
                message.read_by_recipient = True
                await self.save_message(message)
                changed += 1
        return changed

    async def count_unread(self, conversation_id: str, reader_id: str) -> int:
        return sum(
            1
            for message in await self._load_all(f"messages/{conversation_id}", Message)
            if message.sender_id != reader_id and not message.read_by_recipient
        )

    # Attachments

    async def save_attachment(self, attachment: MessageAttachment) -> bool:
        return await self._save_model(f"attachments/{attachment.message_id}/{attachment.id}.json", attachment)

    async def list_attachments(self, message_id: str) -> List[MessageAttachment]:
        attachments = await self._load_all(f"attachments/{message_id}", MessageAttachment)
        return sorted(attachments, key=lambda attachment: attachment.uploaded_at)

    async def save_attachment_file(self, user_id: str, filename: str, content: bytes) -> Optional[str]:
        """Store uploaded bytes. Returns the storage path, or None on failure or name clash."""
        path = f"attachment_files/{user_id}/{filename}"
        if await self.storage.exists(path):
            logger.warning(f"Refusing to overwrite attachment file {path}")
            return None
        return path if await self.storage.save(path, content) else None


# Global record store instance
_record_store: Optional[RecordStore] = None


def init_record_store(storage: Optional[StorageInterface] = None) -> RecordStore:
    """
    Initialize the global record store.

    Args:
        storage: Optional StorageInterface implementation. If None, creates LocalStorage.
    """
    global _record_store
    if storage is None:
        storage = LocalStorage()
    _record_store = RecordStore(storage)
    return _record_store


def get_record_store() -> RecordStore:
    """
    Get the global record store (FastAPI dependency).

    Raises:
        RuntimeError: If the record store has not been initialized
    """
    if _record_store is None:
        raise RuntimeError("Record store not initialized. Call init_record_store() first.")
    return _record_store
