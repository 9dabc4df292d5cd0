"""One chat turn: resolve/create the conversation, store the user message,
replay history to the model, store and return the reply.

The user message is written before the model call and is not rolled back
if anything after it fails. A user turn without a reply is a valid state,
the client can simply send again.
"""
from loguru import logger

from mentor_buddy.core.ai_engine import CAREER_SYSTEM_PROMPT, ChatModel, PromptMessage
from mentor_buddy.core.errors import classify_upstream_error
from mentor_buddy.schemas.chat import ChatRequest, ChatResponse, MessageResponse
from mentor_buddy.storage.base import Storage

TITLE_MAX_LENGTH = 50
FALLBACK_REPLY = "I apologize, but I couldn't generate a response. Please try again."


def make_title(message: str) -> str:
    """First 50 chars, '...' when cut."""
    if len(message) > TITLE_MAX_LENGTH:
        return message[:TITLE_MAX_LENGTH] + "..."
    return message


def build_prompt(history: list[MessageResponse]) -> list[PromptMessage]:
    return [PromptMessage(role="system", content=CAREER_SYSTEM_PROMPT)] + [
        PromptMessage(role=m.role, content=m.content) for m in history
    ]


def handle_chat_turn(storage: Storage, chat_model: ChatModel, request: ChatRequest) -> ChatResponse:
    conversation_id = request.conversation_id
    logger.info("Chat turn: conversation={} message_len={}", conversation_id, len(request.message))

    if conversation_id is None:
        conversation = storage.create_conversation(make_title(request.message))
        conversation_id = conversation.id
        logger.info("Created conversation {} ({!r})", conversation_id, conversation.title)

    storage.create_message(conversation_id, "user", request.message)

    history = storage.get_messages_by_conversation(conversation_id)
    prompt = build_prompt(history)
    logger.debug("Prompt for conversation {}: {} history messages", conversation_id, len(history))

    try:
        reply = chat_model.complete(prompt)
    except Exception as exc:
        classified = classify_upstream_error(exc)
        if classified is None:
            raise
        logger.warning(
            "Upstream failure for conversation {}: {} ({})",
            conversation_id,
            classified.error_type,
            exc,
        )
        raise classified from exc

    if not reply:
        logger.warning("Empty model reply for conversation {}, using fallback", conversation_id)
        reply = FALLBACK_REPLY

    ai_message = storage.create_message(conversation_id, "assistant", reply)
    logger.info("Reply stored: conversation={} message={} len={}", conversation_id, ai_message.id, len(reply))

    return ChatResponse(message=reply, conversation_id=conversation_id, message_id=ai_message.id)
