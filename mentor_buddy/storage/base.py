"""
Conversation/message storage interface.

'Storage' is the pluggable persistence backend used by the chat orchestrator
and the API routes. Concrete implementations ('MemStorage', 'DatabaseStorage')
are interchangeable at app construction time.

Known divergences between the two backends, kept on purpose:
- update_conversation_title on an unknown id: MemStorage skips it, the
  database issues an UPDATE touching zero rows. Neither raises.
- create_message on an unknown conversation: MemStorage stores the dangling
  message, the database foreign key rejects it (IntegrityError).
"""

from abc import ABC, abstractmethod

from mentor_buddy.schemas.chat import ConversationResponse, MessageResponse, Role


class Storage(ABC):
    """Abstract repository for conversations and their messages."""

    @abstractmethod
    def create_conversation(self, title: str) -> ConversationResponse:
        pass

    @abstractmethod
    def get_conversation(self, conversation_id: int) -> ConversationResponse | None:
        """None when the id was never issued."""
        pass

    @abstractmethod
    def get_conversations(self) -> list[ConversationResponse]:
        """Most recently updated first."""
        pass

    @abstractmethod
    def update_conversation_title(self, conversation_id: int, title: str) -> None:
        pass

    @abstractmethod
    def create_message(self, conversation_id: int, role: Role, content: str) -> MessageResponse:
        """Store the message and refresh the parent conversation's updated_at."""
        pass

    @abstractmethod
    def get_messages_by_conversation(self, conversation_id: int) -> list[MessageResponse]:
        """Creation order, empty list for unknown conversations."""
        pass
