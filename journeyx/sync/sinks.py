"""
Document sinks for travel book sync.

A sink writes one document under a composite ``<account>/<document-id>``
key. The gateway owns timeouts and error classification; sinks only
perform the write.
"""

import asyncio
import logging
from typing import Any, Dict, Optional, Protocol

from supabase import Client, create_client

from journeyx.shared import config
from journeyx.shared.errors import ConfigurationError


logger = logging.getLogger(__name__)


class DocumentSink(Protocol):
    """Capability to write one document by composite key."""

    async def write(
        self, account: str, document_id: str, document: Dict[str, Any]
    ) -> None: ...


class InMemoryDocumentSink:
    """Sink that keeps documents in a dict. Used for local runs and tests."""

    def __init__(self):
        self.documents: Dict[str, Dict[str, Any]] = {}

    async def write(
        self, account: str, document_id: str, document: Dict[str, Any]
    ) -> None:
        self.documents[f"{account}/{document_id}"] = document


class SupabaseDocumentSink:
    """
    Sink backed by a Supabase table.

    Each document is upserted as one row keyed by (account, document_id),
    with the full payload in a JSON column.
    """

    def __init__(
        self,
        supabase_url: Optional[str] = None,
        supabase_key: Optional[str] = None,
        table: Optional[str] = None,
    ):
        self.supabase_url = supabase_url or config.SUPABASE_URL
        self.supabase_key = supabase_key or config.SUPABASE_KEY
        self.table = table or config.SYNC_TABLE
        self.client: Optional[Client] = None

    def _get_client(self) -> Client:
        if self.client is None:
            if not self.supabase_url or not self.supabase_key:
                raise ConfigurationError(
                    "Supabase API Key or URL is missing. "
                    "Set SUPABASE_URL and SUPABASE_KEY."
                )
            self.client = create_client(self.supabase_url, self.supabase_key)
        return self.client

    def _upsert(self, account: str, document_id: str, document: Dict[str, Any]) -> None:
        client = self._get_client()
        client.table(self.table).upsert(
            {
                "account": account,
                "document_id": document_id,
                "document": document,
                "updated_at": document.get("updatedAt"),
            },
            on_conflict="account,document_id",
        ).execute()

    async def write(
        self, account: str, document_id: str, document: Dict[str, Any]
    ) -> None:
        logger.info(
            "Upserting travel book",
            extra={"table": self.table, "key": f"{account}/{document_id}"},
        )
        await asyncio.to_thread(self._upsert, account, document_id, document)
