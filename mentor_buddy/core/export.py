from mentor_buddy.core.config import APP_NAME, ASSISTANT_NAME
from mentor_buddy.schemas.chat import ConversationResponse, MessageResponse

SPEAKER_LABELS = {"user": "You", "assistant": ASSISTANT_NAME}


def export_filename(conversation_id: int) -> str:
    return f"mentor-buddy-chat-{conversation_id}.txt"


def render_transcript(conversation: ConversationResponse, messages: list[MessageResponse]) -> str:
    """Plain text transcript, speaker label then content per message."""
    created = conversation.created_at
    text = f"{APP_NAME} Conversation: {conversation.title}\n"
    text += f"Date: {created.month}/{created.day}/{created.year}\n\n"
    for msg in messages:
        text += f"{SPEAKER_LABELS[msg.role]}:\n{msg.content}\n\n"
    return text
