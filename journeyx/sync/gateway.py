"""
Sync gateway for publishing a trip plan to the travel book store.

Builds the export-book document, sanitizes it for the store, and makes a
single write raced against a client-side timeout. Failures are tagged
with a best-effort category used only to pick a user-facing message;
nothing here retries.
"""

import asyncio
import logging
import re
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from pydantic_core import PydanticUndefined

from journeyx.shared import config
from journeyx.shared.contracts import TripPlan, TripRequest
from journeyx.shared.errors import (
    ConfigurationError,
    PreconditionError,
    SyncError,
    SyncErrorCategory,
    SyncTimeoutError,
)
from journeyx.sync.sinks import DocumentSink
from journeyx.transform import travel_book_to_payload, trip_plan_to_travel_book


logger = logging.getLogger(__name__)

SYNC_SOURCE_TAG = "JourneyXPro"
UNTITLED_BOOK = "未命名旅遊書"
MISSING_ACCOUNT_MESSAGE = "請輸入使用者名稱"

SYNC_ERROR_MESSAGES = {
    SyncErrorCategory.PERMISSION: "權限不足：請檢查旅遊書資料庫的存取規則。",
    SyncErrorCategory.NETWORK: "網路連線問題：無法連接到旅遊書雲端服務。",
    SyncErrorCategory.CONFIG: "配置錯誤：旅遊書雲端服務 API Key 無效或遺失。",
    SyncErrorCategory.TIMEOUT: "同步逾時：旅遊書雲端服務沒有回應，請稍後再試。",
    SyncErrorCategory.GENERIC: "同步失敗，請稍後再試。",
}

_PERMISSION_MARKERS = (
    "permission-denied",
    "permission denied",
    "row-level security",
    "unauthorized",
    "forbidden",
    "401",
    "403",
)
_NETWORK_MARKERS = ("unavailable", "network", "connection", "connect", "unreachable")
_CONFIG_MARKERS = ("api key", "apikey", "invalid key")

_ABSENT = (PydanticUndefined, Ellipsis)


@dataclass
class SyncResult:
    """Identifier and resolved title of a written travel book."""

    file_id: str
    file_name: str


def sanitize_document_id(text: str, now_ms: Optional[int] = None) -> str:
    """
    Derive a URL-safe document identifier from a title.

    Lowercases, collapses every run of characters outside ``[a-z0-9]`` to
    a single ``-`` and trims separators from both ends. Titles with no
    ASCII letters or digits fall back to ``journey-book-<epoch ms>``.
    """
    base = re.sub(r"[^a-z0-9]+", "-", text.strip().lower()).strip("-")
    if base:
        return base
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"journey-book-{now_ms}"


def sanitize_payload(value: Any) -> Any:
    """
    Replace absent markers with None throughout a nested payload.

    Every dict and list is walked, tuples become lists, and pydantic's
    undefined sentinel or Ellipsis become explicit nulls.
    """
    if any(value is marker for marker in _ABSENT):
        return None
    if isinstance(value, dict):
        return {key: sanitize_payload(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [sanitize_payload(item) for item in value]
    return value


def classify_sync_error(error: BaseException) -> SyncErrorCategory:
    """
    Best-effort category for a failed write.

    Structured checks come first; otherwise the error text is inspected.
    Anything unrecognised is GENERIC.
    """
    if isinstance(error, SyncError):
        return error.category
    if isinstance(error, (asyncio.TimeoutError, TimeoutError)):
        return SyncErrorCategory.TIMEOUT
    if isinstance(error, ConfigurationError):
        return SyncErrorCategory.CONFIG

    text = f"{type(error).__name__}: {error}".lower()
    if any(marker in text for marker in _PERMISSION_MARKERS):
        return SyncErrorCategory.PERMISSION
    if isinstance(error, ConnectionError) or any(
        marker in text for marker in _NETWORK_MARKERS
    ):
        return SyncErrorCategory.NETWORK
    if any(marker in text for marker in _CONFIG_MARKERS):
        return SyncErrorCategory.CONFIG
    return SyncErrorCategory.GENERIC


def sync_error_message(error: BaseException) -> str:
    """User-facing message for a sync failure."""
    if isinstance(error, PreconditionError):
        return error.message
    return SYNC_ERROR_MESSAGES[classify_sync_error(error)]


def build_sync_document(
    plan: TripPlan,
    request: Optional[TripRequest],
    title: str,
    updated_at: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Assemble the document written to the travel book store.

    Args:
        plan: Validated trip plan
        request: Originating request, used for party and preferences
        title: Resolved book title
        updated_at: Write timestamp (default: now, UTC)

    Returns:
        Document with the export-book data, metadata and timestamp.
        Optional fields are present with explicit nulls rather than omitted.
    """
    if updated_at is None:
        updated_at = datetime.now(timezone.utc)
    return {
        "data": travel_book_to_payload(trip_plan_to_travel_book(plan), keep_absent=True),
        "metadata": {
            "title": title,
            "destination": plan.destination,
            "duration": plan.duration,
            "totalBudgetEstimate": plan.total_budget_estimate,
            "members": request.party if request else None,
            "preferences": request.preferences if request else None,
            "syncedFrom": SYNC_SOURCE_TAG,
            "tripTitle": plan.trip_title,
        },
        "updatedAt": updated_at.isoformat(),
    }


class SyncGateway:
    """
    Writes trip plans to a document sink, one attempt per call.

    Args:
        sink: Where documents are written
        timeout_seconds: Budget for a single write (default: config)
        clock: Returns epoch milliseconds, used for fallback identifiers
    """

    def __init__(
        self,
        sink: DocumentSink,
        timeout_seconds: Optional[float] = None,
        clock: Optional[Callable[[], int]] = None,
    ):
        self.sink = sink
        self.timeout_seconds = (
            config.SYNC_TIMEOUT_SECONDS if timeout_seconds is None else timeout_seconds
        )
        self._clock = clock or (lambda: int(time.time() * 1000))

    async def upload_travel_book(
        self,
        plan: TripPlan,
        request: Optional[TripRequest],
        account: str,
        title: str,
    ) -> SyncResult:
        """
        Publish a plan as a travel book.

        Raises:
            PreconditionError: Blank account name; nothing is written
            SyncTimeoutError: The write did not settle within the budget
            SyncError: Any other write failure, with a category attached
        """
        trimmed_account = (account or "").strip()
        if not trimmed_account:
            raise PreconditionError(MISSING_ACCOUNT_MESSAGE)

        final_title = (title or "").strip() or plan.trip_title or UNTITLED_BOOK
        file_id = sanitize_document_id(final_title, now_ms=self._clock())
        document = sanitize_payload(build_sync_document(plan, request, final_title))

        _log = f"[account={trimmed_account}] [op=sync] "
        logger.info(
            f"{_log}Writing travel book | file_id={file_id}, "
            f"days={len(document['data'])}, timeout={self.timeout_seconds}s"
        )

        try:
            await asyncio.wait_for(
                self.sink.write(trimmed_account, file_id, document),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            logger.warning(f"{_log}Write timed out after {self.timeout_seconds}s")
            raise SyncTimeoutError(
                f"Sync timed out after {self.timeout_seconds} seconds",
                timeout_seconds=self.timeout_seconds,
            ) from e
        except Exception as e:
            category = classify_sync_error(e)
            logger.exception(f"{_log}Write failed | category={category.value}")
            raise SyncError(
                f"Sync failed: {e}",
                category=category,
                context={"file_id": file_id},
            ) from e

        logger.info(f"{_log}Travel book written | file_id={file_id}")
        return SyncResult(file_id=file_id, file_name=final_title)
