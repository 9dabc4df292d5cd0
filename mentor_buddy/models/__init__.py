from mentor_buddy.models.conversation import Conversation
from mentor_buddy.models.chat_message import ChatMessage

__all__ = ["Conversation", "ChatMessage"]
