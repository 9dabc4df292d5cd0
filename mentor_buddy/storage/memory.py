import datetime
import itertools
import threading

from mentor_buddy.schemas.chat import ConversationResponse, MessageResponse, Role
from mentor_buddy.storage.base import Storage


def _now() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class MemStorage(Storage):
    """Process-local storage, lost on restart. Used for dev runs and tests.

    Routes run in FastAPI's threadpool, so every read-modify-write on the
    dicts happens under one lock.
    """

    def __init__(self):
        self._conversations: dict[int, ConversationResponse] = {}
        self._messages: dict[int, MessageResponse] = {}
        self._conversation_ids = itertools.count(1)
        self._message_ids = itertools.count(1)
        self._lock = threading.Lock()

    def create_conversation(self, title: str) -> ConversationResponse:
        with self._lock:
            now = _now()
            conversation = ConversationResponse(
                id=next(self._conversation_ids),
                title=title,
                created_at=now,
                updated_at=now,
            )
            self._conversations[conversation.id] = conversation
            return conversation

    def get_conversation(self, conversation_id: int) -> ConversationResponse | None:
        with self._lock:
            return self._conversations.get(conversation_id)

    def get_conversations(self) -> list[ConversationResponse]:
        with self._lock:
            conversations = list(self._conversations.values())
        return sorted(conversations, key=lambda c: (c.updated_at, c.id), reverse=True)

    def update_conversation_title(self, conversation_id: int, title: str) -> None:
        with self._lock:
            conversation = self._conversations.get(conversation_id)
            if conversation:
                self._conversations[conversation_id] = conversation.model_copy(
                    update={"title": title, "updated_at": max(_now(), conversation.updated_at)}
                )

    def create_message(self, conversation_id: int, role: Role, content: str) -> MessageResponse:
        with self._lock:
            message = MessageResponse(
                id=next(self._message_ids),
                conversation_id=conversation_id,
                role=role,
                content=content,
                created_at=_now(),
            )
            self._messages[message.id] = message

            # parent may be missing here, the message is kept anyway
            conversation = self._conversations.get(conversation_id)
            if conversation:
                self._conversations[conversation_id] = conversation.model_copy(
                    update={"updated_at": max(_now(), conversation.updated_at)}
                )

            return message

    def get_messages_by_conversation(self, conversation_id: int) -> list[MessageResponse]:
        with self._lock:
            messages = [m for m in self._messages.values() if m.conversation_id == conversation_id]
        return sorted(messages, key=lambda m: (m.created_at, m.id))
