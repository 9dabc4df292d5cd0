import datetime

from sqlalchemy.orm import sessionmaker

from mentor_buddy.models.chat_message import ChatMessage
from mentor_buddy.models.conversation import Conversation
from mentor_buddy.schemas.chat import ConversationResponse, MessageResponse, Role
from mentor_buddy.storage.base import Storage


def _now() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def _utc(value: datetime.datetime) -> datetime.datetime:
    """SQLite returns naive timestamps, they were written as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=datetime.timezone.utc)
    return value


def _to_conversation(row: Conversation) -> ConversationResponse:
    return ConversationResponse(
        id=row.id,
        title=row.title,
        created_at=_utc(row.created_at),
        updated_at=_utc(row.updated_at),
    )


def _to_message(row: ChatMessage) -> MessageResponse:
    return MessageResponse(
        id=row.id,
        conversation_id=row.conversation_id,
        role=row.role,
        content=row.content,
        created_at=_utc(row.created_at),
    )


class DatabaseStorage(Storage):
    """SQLAlchemy backed storage, one session per call."""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    @property
    def engine(self):
        return self.session_factory.kw["bind"]

    def create_conversation(self, title: str) -> ConversationResponse:
        now = _now()
        with self.session_factory() as db:
            conversation = Conversation(title=title, created_at=now, updated_at=now)
            db.add(conversation)
            db.commit()
            db.refresh(conversation)
            return _to_conversation(conversation)

    def get_conversation(self, conversation_id: int) -> ConversationResponse | None:
        with self.session_factory() as db:
            conversation = db.query(Conversation).filter(Conversation.id == conversation_id).first()
            return _to_conversation(conversation) if conversation else None

    def get_conversations(self) -> list[ConversationResponse]:
        with self.session_factory() as db:
            rows = (
                db.query(Conversation)
                .order_by(Conversation.updated_at.desc(), Conversation.id.desc())
                .all()
            )
            return [_to_conversation(c) for c in rows]

    def update_conversation_title(self, conversation_id: int, title: str) -> None:
        # unknown id updates zero rows, no error
        with self.session_factory() as db:
            db.query(Conversation).filter(Conversation.id == conversation_id).update(
                {Conversation.title: title, Conversation.updated_at: _now()},
                synchronize_session=False,
            )
            db.commit()

    def create_message(self, conversation_id: int, role: Role, content: str) -> MessageResponse:
        with self.session_factory() as db:
            message = ChatMessage(
                conversation_id=conversation_id,
                role=role,
                content=content,
                created_at=_now(),
            )
            db.add(message)
            # FK violation for an unknown conversation surfaces here
            db.flush()
            db.query(Conversation).filter(Conversation.id == conversation_id).update(
                {Conversation.updated_at: _now()},
                synchronize_session=False,
            )
            db.commit()
            db.refresh(message)
            return _to_message(message)

    def get_messages_by_conversation(self, conversation_id: int) -> list[MessageResponse]:
        with self.session_factory() as db:
            rows = (
                db.query(ChatMessage)
                .filter(ChatMessage.conversation_id == conversation_id)
                .order_by(ChatMessage.created_at, ChatMessage.id)
                .all()
            )
            return [_to_message(m) for m in rows]
