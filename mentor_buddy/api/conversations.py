from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse
from loguru import logger

from mentor_buddy.api.deps import get_storage, parse_conversation_id
from mentor_buddy.core.export import export_filename, render_transcript
from mentor_buddy.schemas.chat import (
    ConversationDetailResponse,
    ConversationResponse,
    ConversationTitleRequest,
)
from mentor_buddy.storage.base import Storage

router = APIRouter(prefix="/api", tags=["Conversations"])


@router.get("/conversations", response_model=list[ConversationResponse])
def list_conversations(storage: Storage = Depends(get_storage)):
    try:
        return storage.get_conversations()
    except Exception:
        logger.exception("Failed to fetch conversations")
        raise HTTPException(status_code=500, detail="Failed to fetch conversations")


@router.post("/conversations", response_model=ConversationResponse, status_code=201)
def create_conversation(data: ConversationTitleRequest, storage: Storage = Depends(get_storage)):
    try:
        return storage.create_conversation(data.title)
    except Exception:
        logger.exception("Failed to create conversation")
        raise HTTPException(status_code=500, detail="Failed to create conversation")


@router.get("/conversations/{conversation_id}", response_model=ConversationDetailResponse)
def get_conversation(conversation_id: str, storage: Storage = Depends(get_storage)):
    cid = parse_conversation_id(conversation_id)
    try:
        conversation = storage.get_conversation(cid)
        messages = storage.get_messages_by_conversation(cid) if conversation else []
    except Exception:
        logger.exception("Failed to fetch conversation {}", cid)
        raise HTTPException(status_code=500, detail="Failed to fetch conversation")
    if not conversation:
        raise HTTPException(status_code=404, detail="Conversation not found")
    return ConversationDetailResponse(conversation=conversation, messages=messages)


@router.patch("/conversations/{conversation_id}", response_model=ConversationResponse)
def rename_conversation(
    conversation_id: str,
    data: ConversationTitleRequest,
    storage: Storage = Depends(get_storage),
):
    cid = parse_conversation_id(conversation_id)
    try:
        storage.update_conversation_title(cid, data.title)
        conversation = storage.get_conversation(cid)
    except Exception:
        logger.exception("Failed to rename conversation {}", cid)
        raise HTTPException(status_code=500, detail="Failed to update conversation")
    if not conversation:
        raise HTTPException(status_code=404, detail="Conversation not found")
    return conversation


@router.get("/conversations/{conversation_id}/export", response_class=PlainTextResponse)
def export_conversation(conversation_id: str, storage: Storage = Depends(get_storage)):
    cid = parse_conversation_id(conversation_id)
    try:
        conversation = storage.get_conversation(cid)
        messages = storage.get_messages_by_conversation(cid) if conversation else []
    except Exception:
        logger.exception("Failed to export conversation {}", cid)
        raise HTTPException(status_code=500, detail="Failed to export conversation")
    if not conversation:
        raise HTTPException(status_code=404, detail="Conversation not found")
    return PlainTextResponse(
        content=render_transcript(conversation, messages),
        headers={"Content-Disposition": f'attachment; filename="{export_filename(cid)}"'},
    )
