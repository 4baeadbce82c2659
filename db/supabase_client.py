"""
Supabase-backed document store.

Documents live in a `documents` table with a text `key` primary key and a
jsonb `value` column.
"""
import os
import logging
from typing import Any, Optional
from supabase import create_client, Client

from .store import DocumentStore

logger = logging.getLogger(__name__)

DOCUMENTS_TABLE = "documents"


class SupabaseDocumentStore(DocumentStore):
    """Supabase client wrapper storing one row per document."""

    def __init__(self, url: Optional[str] = None, key: Optional[str] = None,
                 client: Optional[Client] = None):
        if client is not None:
            self.client = client
            return

        self.url: Optional[str] = url or os.getenv("SUPABASE_URL")
        self.key: Optional[str] = key or os.getenv("SUPABASE_KEY")

        if not self.url or not self.key:
            raise ValueError("Supabase URL and key must be set in environment variables")

        self.client: Client = create_client(self.url, self.key)

    def load(self, key: str, default: Any = None) -> Any:
        """Get the document stored under key."""
        response = self.client.table(DOCUMENTS_TABLE).select("value").eq("key", key).execute()
        if not response.data:
            return default
        value = response.data[0].get("value")
        return default if value is None else value

    def save(self, key: str, value: Any) -> None:
        """Insert or replace the document stored under key."""
        self.client.table(DOCUMENTS_TABLE).upsert({"key": key, "value": value}).execute()
        logger.debug(f"Saved document '{key}' to Supabase")

    def test_connection(self) -> bool:
        """Test the Supabase connection."""
        try:
            self.client.table(DOCUMENTS_TABLE).select("key").limit(1).execute()
            return True
        except Exception as e:
            logger.warning(f"Supabase connection test failed: {e}")
            return False
