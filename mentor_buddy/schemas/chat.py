from pydantic import BaseModel, Field, PositiveInt
from datetime import datetime
from typing import Literal, Optional

Role = Literal["user", "assistant"]

MAX_MESSAGE_LENGTH = 2000


class ConversationResponse(BaseModel):
    """Frontend camelCase leta hai, aliases se serialize."""
    id: int
    title: str
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    model_config = {"populate_by_name": True}


class MessageResponse(BaseModel):
    id: int
    conversation_id: int = Field(alias="conversationId")
    role: Role
    content: str
    created_at: datetime = Field(alias="createdAt")

    model_config = {"populate_by_name": True}


class ConversationDetailResponse(BaseModel):
    conversation: ConversationResponse
    messages: list[MessageResponse]


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1, max_length=MAX_MESSAGE_LENGTH)
    conversation_id: Optional[PositiveInt] = Field(None, alias="conversationId")

    model_config = {"populate_by_name": True}


class ChatResponse(BaseModel):
    message: str
    conversation_id: int = Field(alias="conversationId")
    message_id: int = Field(alias="messageId")

    model_config = {"populate_by_name": True}


class ConversationTitleRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
