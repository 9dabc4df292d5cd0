from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from mentor_buddy.core.config import get_database_url

Base = declarative_base()


def make_engine(url: str | None = None) -> Engine:
    """Engine for the given url (defaults to DATABASE_URL).

    SQLite needs foreign keys switched on per connection, otherwise
    messages.conversation_id is not enforced.
    """
    url = url or get_database_url()
    if not url.startswith("sqlite"):
        return create_engine(url, pool_pre_ping=True)

    kwargs = {"connect_args": {"check_same_thread": False}}
    if url in ("sqlite://", "sqlite:///:memory:"):
        # in-memory db lives in one connection, share it across threads
        kwargs["poolclass"] = StaticPool
    engine = create_engine(url, **kwargs)

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def init_db(engine: Engine) -> None:
    """Create conversations/messages tables if missing."""
    import mentor_buddy.models  # noqa: F401  registers tables on Base

    Base.metadata.create_all(bind=engine)


engine = make_engine()
SessionLocal = make_session_factory(engine)
