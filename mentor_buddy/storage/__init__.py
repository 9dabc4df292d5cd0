from mentor_buddy.core.config import get_storage_backend
from mentor_buddy.storage.base import Storage
from mentor_buddy.storage.database import DatabaseStorage
from mentor_buddy.storage.memory import MemStorage

__all__ = ["Storage", "MemStorage", "DatabaseStorage", "create_storage"]


def create_storage(backend: str | None = None) -> Storage:
    """Backend from STORAGE_BACKEND unless given explicitly."""
    backend = (backend or get_storage_backend()).lower()
    if backend == "memory":
        return MemStorage()
    if backend == "database":
        from mentor_buddy.db.session import SessionLocal

        return DatabaseStorage(SessionLocal)
    raise ValueError(f"Unknown storage backend: {backend}")
