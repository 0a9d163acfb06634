"""
Messaging API endpoints - Player/physician conversations, messages and attachments.
"""

import logging
import re
import time
import uuid
from typing import List
from fastapi import APIRouter, HTTPException, Depends, File, Form, Query, Response, UploadFile, status

from ..config import settings
from ..models import (
    Conversation,
    ConversationCreate,
    ConversationSummary,
    Message,
    MessageAttachment,
    MessageCreate,
    MessageList,
    TokenData,
    User,
    UserRole,
)
from ..storage.record_store import RecordStore, get_record_store
from ..storage.user_storage import UserStorage, get_user_storage
from ..utils.auth import get_current_user, require_role
from .deps import get_participating_conversation

logger = logging.getLogger(__name__)

router = APIRouter(tags=["messages"])

ALLOWED_ATTACHMENT_TYPES = {
    "image/jpeg", "image/png", "image/webp", "image/gif", "application/pdf",
}


@router.get("/physicians", response_model=List[User])
async def list_physicians(
    current_user: TokenData = Depends(get_current_user),
    users: UserStorage = Depends(get_user_storage)
):
    """Physicians a player can start a conversation with."""
    physicians = await users.list_users(role=UserRole.PHYSICIAN.value)
    return [User(**{k: v for k, v in p.items() if k != 'hashed_password'}) for p in physicians]


@router.post("/conversations", response_model=Conversation, status_code=status.HTTP_201_CREATED)
async def start_conversation(
    payload: ConversationCreate,
    response: Response,
    current_user: TokenData = Depends(require_role(UserRole.PLAYER, UserRole.PHYSICIAN)),
    users: UserStorage = Depends(get_user_storage),
    store: RecordStore = Depends(get_record_store)
):
    """
    Start a conversation with a physician (as a player) or a player (as a physician).
    Returns the existing conversation with status 200 if the pair already has one.
    """
    expected_role = UserRole.PHYSICIAN if current_user.role == UserRole.PLAYER else UserRole.PLAYER
    participant = await users.get_user(payload.participant_id)
    if participant is None or participant.get("role") != expected_role.value:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"participant_id must be a {expected_role.value}"
        )

    if current_user.role == UserRole.PLAYER:
        player_id, physician_id = current_user.user_id, payload.participant_id
    else:
        player_id, physician_id = payload.participant_id, current_user.user_id

    existing = await store.find_conversation(player_id, physician_id)
    if existing is not None:
        response.status_code = status.HTTP_200_OK
        return existing

    conversation = Conversation(id=str(uuid.uuid4()), player_id=player_id, physician_id=physician_id)
    if not await store.save_conversation(conversation):
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to start conversation"
        )
    logger.info(
        "Conversation started",
        extra={"extra_fields": {"conversation_id": conversation.id, "player_id": player_id, "physician_id": physician_id}}
    )
    return conversation


@router.get("/conversations", response_model=List[ConversationSummary])
async def list_conversations(
    current_user: TokenData = Depends(get_current_user),
    users: UserStorage = Depends(get_user_storage),
    store: RecordStore = Depends(get_record_store)
):
    """Conversations of the caller, most recent first, with unread counts."""
    summaries = []
    for conversation in await store.list_conversations(current_user.user_id):
        counterpart_id = (
            conversation.physician_id
            if conversation.player_id == current_user.user_id
            else conversation.player_id
        )
        counterpart = await users.get_user(counterpart_id)
        summaries.append(ConversationSummary(
            **conversation.model_dump(),
            counterpart_name=counterpart.get("full_name") if counterpart else None,
            unread=await store.count_unread(conversation.id, current_user.user_id),
        ))
    return summaries


@router.get("/messages", response_model=MessageList)
async def list_messages(
    conversation_id: str = Query(...),
    current_user: TokenData = Depends(get_current_user),
    store: RecordStore = Depends(get_record_store)
):
    """Messages of a conversation, oldest first. Marks the other side's messages as read."""
    conversation = await get_participating_conversation(conversation_id, current_user, store)
    await store.mark_read(conversation.id, current_user.user_id)
    return MessageList(messages=await store.list_messages(conversation.id))


@router.post("/messages", response_model=Message, status_code=status.HTTP_201_CREATED)
async def send_message(
    payload: MessageCreate,
    current_user: TokenData = Depends(get_current_user),
    store: RecordStore = Depends(get_record_store)
):
    """Send a message, optionally referencing an already uploaded file."""
    conversation = await get_participating_conversation(payload.conversation_id, current_user, store)

    message = Message(
        id=str(uuid.uuid4()),
        conversation_id=conversation.id,
        sender_id=current_user.user_id,
        content=payload.content,
    )
    if not await store.save_message(message):
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to send message"
        )

    if payload.attachment_file_path and payload.attachment_file_type:
        attachment = MessageAttachment(
            id=str(uuid.uuid4()),
            message_id=message.id,
            file_path=payload.attachment_file_path,
            file_type=payload.attachment_file_type,
        )
        if await store.save_attachment(attachment):
            message.attachments.append(attachment)
        else:
            logger.error(f"Failed to store attachment for message {message.id}")

    await store.touch_conversation(conversation, message.sent_at)
    return message


@router.post("/upload", response_model=MessageAttachment, status_code=status.HTTP_201_CREATED)
async def upload_attachment(
    file: UploadFile = File(...),
    conversation_id: str = Form(...),
    message_id: str = Form(...),
    current_user: TokenData = Depends(get_current_user),
    store: RecordStore = Depends(get_record_store)
):
    """Attach a file to a message the caller sent."""
    conversation = await get_participating_conversation(conversation_id, current_user, store)
    message = await store.get_message(conversation.id, message_id)
    if message is None or message.sender_id != current_user.user_id:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Message not found"
        )

    if file.content_type not in ALLOWED_ATTACHMENT_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"File type {file.content_type} not supported"
        )

    content = await file.read()
    if len(content) > settings.max_attachment_bytes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="File too large"
        )

    extension = 'dat'
    if file.filename and '.' in file.filename:
        extension = re.sub(r'[^a-z0-9]', '', file.filename.rsplit('.', 1)[-1].lower())[:10] or 'dat'
    filename = f"{int(time.time() * 1000)}-{uuid.uuid4().hex}.{extension}"
    file_path = await store.save_attachment_file(current_user.user_id, filename, content)
    if file_path is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to upload file"
        )

    attachment = MessageAttachment(
        id=str(uuid.uuid4()),
        message_id=message.id,
        file_path=file_path,
        file_type=file.content_type,
    )
    if not await store.save_attachment(attachment):
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save attachment record"
        )
    return attachment
