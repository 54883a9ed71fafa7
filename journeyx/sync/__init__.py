"""
Travel book sync.

Publishes validated trip plans to a remote document store through an
injected DocumentSink.
"""

from journeyx.sync.gateway import (
    SYNC_ERROR_MESSAGES,
    SyncGateway,
    SyncResult,
    build_sync_document,
    classify_sync_error,
    sanitize_document_id,
    sanitize_payload,
    sync_error_message,
)
from journeyx.sync.sinks import DocumentSink, InMemoryDocumentSink, SupabaseDocumentSink

__all__ = [
    "SYNC_ERROR_MESSAGES",
    "SyncGateway",
    "SyncResult",
    "build_sync_document",
    "classify_sync_error",
    "sanitize_document_id",
    "sanitize_payload",
    "sync_error_message",
    "DocumentSink",
    "InMemoryDocumentSink",
    "SupabaseDocumentSink",
]
