from fastapi import APIRouter, Depends, HTTPException
from loguru import logger

from mentor_buddy.api.deps import get_chat_model, get_storage
from mentor_buddy.core.ai_engine import ChatModel
from mentor_buddy.core.chat import handle_chat_turn
from mentor_buddy.core.errors import UpstreamError
from mentor_buddy.schemas.chat import ChatRequest, ChatResponse
from mentor_buddy.storage.base import Storage

router = APIRouter(prefix="/api", tags=["Chat"])


@router.post("/chat", response_model=ChatResponse)
def chat(
    data: ChatRequest,
    storage: Storage = Depends(get_storage),
    chat_model: ChatModel = Depends(get_chat_model),
):
    try:
        return handle_chat_turn(storage, chat_model, data)
    except UpstreamError:
        raise  # rendered by the app-level handler with error_type
    except Exception:
        logger.exception("Chat error")
        raise HTTPException(status_code=500, detail="Failed to process chat message")
