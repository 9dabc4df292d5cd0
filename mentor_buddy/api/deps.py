from fastapi import HTTPException, Request

from mentor_buddy.core.ai_engine import ChatModel
from mentor_buddy.storage.base import Storage


def get_storage(request: Request) -> Storage:
    return request.app.state.storage


def get_chat_model(request: Request) -> ChatModel:
    return request.app.state.chat_model


def parse_conversation_id(conversation_id: str) -> int:
    try:
        return int(conversation_id)
    except (TypeError, ValueError):
        raise HTTPException(status_code=400, detail="Invalid conversation ID")
