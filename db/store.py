"""
Key-value document stores.

Each store keeps whole JSON documents under string keys. Writes replace the
full document; there is no field-level update and no cross-key transaction.
"""
import copy
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from .models import Database, Document, DEFAULT_DATABASE_URL

logger = logging.getLogger(__name__)


class DocumentStore(ABC):
    """Persistence interface used by the planner."""

    @abstractmethod
    def load(self, key: str, default: Any = None) -> Any:
        """Return the document stored under key, or default."""

    @abstractmethod
    def save(self, key: str, value: Any) -> None:
        """Replace the document stored under key."""


class MemoryDocumentStore(DocumentStore):
    """In-process store, used for tests and the memory backend."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._documents: Dict[str, Any] = copy.deepcopy(initial) if initial else {}

    def load(self, key: str, default: Any = None) -> Any:
        if key not in self._documents:
            return default
        return copy.deepcopy(self._documents[key])

    def save(self, key: str, value: Any) -> None:
        self._documents[key] = copy.deepcopy(value)

    def keys(self):
        return list(self._documents)


class SQLDocumentStore(DocumentStore):
    """Store backed by a SQLAlchemy database, one row per document."""

    def __init__(self, database_url: str = DEFAULT_DATABASE_URL, database: Optional[Database] = None):
        self.db = database or Database(database_url)
        self.db.init_db()

    def load(self, key: str, default: Any = None) -> Any:
        session = self.db.get_session()
        try:
            document = session.get(Document, key)
            if document is None or document.value is None:
                return default
            return copy.deepcopy(document.value)
        finally:
            self.db.close_session(session)

    def save(self, key: str, value: Any) -> None:
        session = self.db.get_session()
        try:
            session.merge(Document(key=key, value=value))
            session.commit()
            logger.debug(f"Saved document '{key}'")
        except Exception:
            session.rollback()
            raise
        finally:
            self.db.close_session(session)


def create_document_store(backend: str, database_url: str = DEFAULT_DATABASE_URL,
                          supabase_url: Optional[str] = None,
                          supabase_key: Optional[str] = None) -> DocumentStore:
    """
    Create the document store for a backend name.

    Args:
        backend: 'sqlite', 'supabase' or 'memory'
        database_url: SQLAlchemy URL for the sqlite backend
        supabase_url: Supabase project URL
        supabase_key: Supabase API key

    Returns:
        A ready-to-use DocumentStore
    """
    backend = backend.lower()
    if backend == "memory":
        return MemoryDocumentStore()
    if backend == "sqlite":
        return SQLDocumentStore(database_url)
    if backend == "supabase":
        from .supabase_client import SupabaseDocumentStore
        return SupabaseDocumentStore(url=supabase_url, key=supabase_key)
    raise ValueError(f"Unknown store backend '{backend}'. Use sqlite, supabase or memory.")
