"""
Planning session state machine.

A PlanningSession coordinates one user's planning flow: initial
generation, feedback-driven adjustment, saved-trip history and travel
book sync. Every operation is an explicit transition invoked by the
caller; generation and sync backends are injected.

Only one generation may be in flight per session. Each generation carries
a token, and a completion whose token has been superseded (by a reset,
a selection from history, or the sample plan) is discarded so a stale
response never resurrects a plan the user has moved away from.

Sessions may share one store. Saves and deletes re-read the stored
history and apply their change on top of it.
"""

import json
import logging
import time
import uuid
from typing import Any, Awaitable, Callable, Dict, List, Optional
from urllib.parse import quote

from pydantic import TypeAdapter, ValidationError

from journeyx.session.sample import load_sample_trip
from journeyx.session.states import (
    EMPTY_FEEDBACK_MESSAGE,
    GENERATION_FAILED_MESSAGE,
    GENERATION_IN_FLIGHT_MESSAGE,
    GENERATION_STATUSES,
    MISSING_REQUEST_MESSAGE,
    NOTHING_TO_ADJUST_MESSAGE,
    NOTHING_TO_SAVE_MESSAGE,
    NOTHING_TO_SYNC_MESSAGE,
    SYNC_IN_FLIGHT_MESSAGE,
    SYNC_NOT_CONFIGURED_MESSAGE,
    UNKNOWN_TRIP_MESSAGE,
    SessionStatus,
    sync_success_message,
)
from journeyx.session.store import PersistentStore
from journeyx.shared import config
from journeyx.shared.contracts import (
    GroundingChunk,
    ItineraryResponse,
    SavedTrip,
    TripPlan,
    TripRequest,
)
from journeyx.shared.errors import JourneyXError, PreconditionError
from journeyx.shared.logging import log_state_transition
from journeyx.sync import SyncGateway, SyncResult, sync_error_message
from journeyx.sync.gateway import MISSING_ACCOUNT_MESSAGE


logger = logging.getLogger(__name__)

# Called as generate(request, adjustments, session_id=...)
GenerateFn = Callable[..., Awaitable[ItineraryResponse]]

_saved_trips_adapter = TypeAdapter(List[SavedTrip])


def _error_message(error: BaseException) -> str:
    if isinstance(error, JourneyXError):
        message = error.message
    else:
        message = str(error)
    return message.strip() or GENERATION_FAILED_MESSAGE


class PlanningSession:
    """
    State machine over one planning session.

    Args:
        generate: Async callable ``(request, adjustments, session_id=...)``
            returning an ItineraryResponse
        store: Persistent store holding the saved-trip blob
        sync_gateway: Gateway used for travel book sync (optional)
        session_id: Identifier used in logs (default: random UUID)
        book_app_url: Base URL of the travel book site for sync links
        storage_key: Key of the saved-trip blob in the store
        id_factory: Produces identifiers for saved trips
        clock: Returns epoch milliseconds for saved-trip timestamps
    """

    def __init__(
        self,
        generate: GenerateFn,
        store: PersistentStore,
        sync_gateway: Optional[SyncGateway] = None,
        session_id: Optional[str] = None,
        book_app_url: Optional[str] = None,
        storage_key: str = config.SAVED_TRIPS_KEY,
        id_factory: Optional[Callable[[], str]] = None,
        clock: Optional[Callable[[], int]] = None,
    ):
        self._generate = generate
        self._store = store
        self.sync_gateway = sync_gateway
        self.session_id = session_id or str(uuid.uuid4())
        self.book_app_url = book_app_url or config.TRAVEL_BOOK_APP_URL
        self.storage_key = storage_key
        self._id_factory = id_factory or (lambda: uuid.uuid4().hex)
        self._clock = clock or (lambda: int(time.time() * 1000))
        self._log = f"[session={self.session_id}] [component=session] "

        self.status = SessionStatus.IDLE
        self.current_request: Optional[TripRequest] = None
        self.plan: Optional[TripPlan] = None
        self.grounding_chunks: List[GroundingChunk] = []
        self.error: Optional[str] = None
        self.adjustment_error: Optional[str] = None
        self.is_current_saved = False
        self.is_adjustment_open = False

        self.sync_in_progress = False
        self.sync_error: Optional[str] = None
        self.sync_success_message: Optional[str] = None
        self.last_synced_link: Optional[str] = None

        self._generation_token = 0
        self.saved_trips: List[SavedTrip] = self._load_saved_trips()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _load_saved_trips(self) -> List[SavedTrip]:
        """
        Read the history blob, keeping every record that still validates.

        An unreadable blob counts as empty; a bad record is dropped on its
        own so one corrupt entry never costs the rest of the history.
        """
        blob = self._store.get(self.storage_key)
        if not blob:
            return []
        try:
            records = json.loads(blob)
        except ValueError:
            logger.exception(f"{self._log}Saved trips blob is not JSON, starting empty")
            return []
        if not isinstance(records, list):
            logger.warning(f"{self._log}Saved trips blob is not a list, starting empty")
            return []

        trips = []
        for index, record in enumerate(records):
            try:
                trips.append(SavedTrip.model_validate(record))
            except ValidationError as e:
                logger.warning(
                    f"{self._log}Dropping invalid saved trip | index={index}, "
                    f"errors={e.error_count()}"
                )
        logger.info(f"{self._log}Loaded saved trips | count={len(trips)}")
        return trips

    def _persist_trips(self, trips: List[SavedTrip]) -> None:
        self.saved_trips = trips
        blob = _saved_trips_adapter.dump_json(trips, by_alias=True, exclude_none=True)
        self._store.set(self.storage_key, blob.decode("utf-8"))

    def _transition(
        self,
        event: str,
        status: SessionStatus,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        previous = self.status
        self.status = status
        log_state_transition(
            event,
            self.snapshot(),
            extra={"from": previous.value, "to": status.value, **(extra or {})},
            logger=logger,
        )

    def _ensure_no_generation(self) -> None:
        if self.status in GENERATION_STATUSES:
            raise PreconditionError(GENERATION_IN_FLIGHT_MESSAGE)

    def _abandon_generation(self) -> int:
        self._generation_token += 1
        return self._generation_token

    def _is_current(self, token: int) -> bool:
        return token == self._generation_token and self.status in GENERATION_STATUSES

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    async def submit(self, request: TripRequest) -> None:
        """
        Start a fresh generation for a new request.

        Clears any displayed plan first. On failure the session moves to
        ``error`` but keeps the request so it can be retried.

        Raises:
            PreconditionError: Another generation is in flight
        """
        self._ensure_no_generation()
        token = self._abandon_generation()

        self.current_request = request
        self.plan = None
        self.grounding_chunks = []
        self.error = None
        self.adjustment_error = None
        self.is_current_saved = False
        self._transition(
            "submit", SessionStatus.GENERATING, {"destination": request.destination}
        )

        try:
            response = await self._generate(request, None, session_id=self.session_id)
        except Exception as e:
            if not self._is_current(token):
                logger.info(f"{self._log}Discarding stale generation failure: {e}")
                return
            logger.exception(f"{self._log}Generation failed: {e}")
            self.error = _error_message(e)
            self._transition(
                "generation_failed",
                SessionStatus.ERROR,
                {"error_type": type(e).__name__},
            )
            return

        if not self._is_current(token):
            logger.info(f"{self._log}Discarding stale generation result")
            return

        self.plan = response.plan
        self.grounding_chunks = list(response.grounding_chunks)
        self._transition(
            "generation_succeeded",
            SessionStatus.READY,
            {"days": len(response.plan.days)},
        )

    def open_adjustment(self) -> None:
        """Open the adjustment input and clear the last adjustment error."""
        self.adjustment_error = None
        self.is_adjustment_open = True

    def close_adjustment(self) -> None:
        self.is_adjustment_open = False

    async def adjust(self, feedback: str) -> None:
        """
        Regenerate the current plan with user feedback as extra context.

        The displayed plan stays in place until a new one is ready, and an
        adjustment failure never discards it.

        Raises:
            PreconditionError: No request or plan to adjust, blank
                feedback, or another generation in flight
        """
        self._ensure_no_generation()
        if self.current_request is None:
            self.adjustment_error = MISSING_REQUEST_MESSAGE
            raise PreconditionError(MISSING_REQUEST_MESSAGE)
        if self.plan is None:
            raise PreconditionError(NOTHING_TO_ADJUST_MESSAGE)
        if not feedback or not feedback.strip():
            raise PreconditionError(EMPTY_FEEDBACK_MESSAGE)

        token = self._abandon_generation()
        request = self.current_request
        self.adjustment_error = None
        self._transition("adjust", SessionStatus.ADJUSTING)

        try:
            response = await self._generate(
                request, feedback.strip(), session_id=self.session_id
            )
        except Exception as e:
            if not self._is_current(token):
                logger.info(f"{self._log}Discarding stale adjustment failure: {e}")
                return
            logger.exception(f"{self._log}Adjustment failed: {e}")
            self.adjustment_error = _error_message(e)
            self._transition(
                "adjustment_failed",
                SessionStatus.READY,
                {"error_type": type(e).__name__},
            )
            return

        if not self._is_current(token):
            logger.info(f"{self._log}Discarding stale adjustment result")
            return

        self.plan = response.plan
        self.grounding_chunks = list(response.grounding_chunks)
        self.is_current_saved = False
        self.is_adjustment_open = False
        self._transition(
            "adjustment_succeeded",
            SessionStatus.READY,
            {"days": len(response.plan.days)},
        )

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def save(self) -> SavedTrip:
        """
        Save the current request and plan to the front of the history.

        Raises:
            PreconditionError: There is no current plan
        """
        if self.plan is None or self.current_request is None:
            raise PreconditionError(NOTHING_TO_SAVE_MESSAGE)

        # Re-read first: other sessions may have written since this one loaded
        stored = self._load_saved_trips()
        existing_ids = {trip.id for trip in stored}
        trip_id = self._id_factory()
        while trip_id in existing_ids:
            trip_id = self._id_factory()

        trip = SavedTrip(
            id=trip_id,
            timestamp=self._clock(),
            details=self.current_request,
            response=ItineraryResponse(
                plan=self.plan, grounding_chunks=list(self.grounding_chunks)
            ),
        )
        self._persist_trips([trip, *stored])
        self.is_current_saved = True
        logger.info(
            f"{self._log}Trip saved | id={trip.id}, total={len(self.saved_trips)}"
        )
        return trip

    def select(self, trip_id: str) -> SavedTrip:
        """
        Show a saved trip as the current plan.

        Raises:
            PreconditionError: No saved trip has this identifier
        """
        trip = next((t for t in self.saved_trips if t.id == trip_id), None)
        if trip is None:
            raise PreconditionError(UNKNOWN_TRIP_MESSAGE, context={"trip_id": trip_id})

        self._abandon_generation()
        self.current_request = trip.details
        self.plan = trip.response.plan
        self.grounding_chunks = list(trip.response.grounding_chunks)
        self.error = None
        self.adjustment_error = None
        self.is_current_saved = True
        self._transition("select", SessionStatus.READY, {"trip_id": trip_id})
        return trip

    def delete(self, trip_id: str) -> bool:
        """
        Remove a saved trip. The displayed plan is left untouched.

        Returns:
            True if a record was removed
        """
        stored = self._load_saved_trips()
        remaining = [trip for trip in stored if trip.id != trip_id]
        removed = len(remaining) != len(stored)
        self._persist_trips(remaining)
        logger.info(
            f"{self._log}Trip delete | id={trip_id}, removed={removed}, "
            f"total={len(remaining)}"
        )
        return removed

    def reset(self) -> None:
        """Clear the current request, plan and errors and return to idle."""
        self._abandon_generation()
        self.current_request = None
        self.plan = None
        self.grounding_chunks = []
        self.error = None
        self.adjustment_error = None
        self.is_current_saved = False
        self.is_adjustment_open = False
        self._transition("reset", SessionStatus.IDLE)

    def load_test_plan(self) -> None:
        """Show the built-in sample trip without calling the generator."""
        self._abandon_generation()
        request, plan = load_sample_trip()
        self.current_request = request
        self.plan = plan
        self.grounding_chunks = []
        self.error = None
        self.adjustment_error = None
        self.is_current_saved = False
        self._transition("load_test_plan", SessionStatus.READY)

    # ------------------------------------------------------------------
    # Sync
    # ------------------------------------------------------------------

    def open_sync(self) -> None:
        """Clear the previous sync outcome before a new attempt."""
        self.sync_error = None
        self.sync_success_message = None

    def _build_book_link(self, account: str, file_id: str) -> str:
        return (
            f"{self.book_app_url}?user={quote(account, safe='')}"
            f"&file={quote(file_id, safe='')}"
        )

    async def sync(self, account: str, title: str) -> Optional[SyncResult]:
        """
        Publish the current plan to the travel book store.

        Sync is a side channel: it never changes the plan or generation
        errors. Failures are recorded in ``sync_error``.

        Returns:
            SyncResult on success, None if the write failed

        Raises:
            PreconditionError: No plan, blank account, missing gateway, or
                a sync already running. Nothing is sent in these cases.
        """
        if self.sync_in_progress:
            raise PreconditionError(SYNC_IN_FLIGHT_MESSAGE)
        if self.plan is None or self.current_request is None:
            self.sync_error = NOTHING_TO_SYNC_MESSAGE
            raise PreconditionError(NOTHING_TO_SYNC_MESSAGE)
        if not account or not account.strip():
            self.sync_error = MISSING_ACCOUNT_MESSAGE
            raise PreconditionError(MISSING_ACCOUNT_MESSAGE)
        if self.sync_gateway is None:
            self.sync_error = SYNC_NOT_CONFIGURED_MESSAGE
            raise PreconditionError(SYNC_NOT_CONFIGURED_MESSAGE)

        account = account.strip()
        plan, request = self.plan, self.current_request
        self.sync_in_progress = True
        self.sync_error = None
        self.sync_success_message = None
        if self.status == SessionStatus.READY:
            self._transition("sync", SessionStatus.SYNCING, {"account": account})

        try:
            result = await self.sync_gateway.upload_travel_book(
                plan, request, account, title
            )
        except Exception as e:
            logger.warning(f"{self._log}Sync failed: {e}")
            self.sync_error = sync_error_message(e)
            result = None
        else:
            self.last_synced_link = self._build_book_link(account, result.file_id)
            self.sync_success_message = sync_success_message(result.file_id)
        finally:
            self.sync_in_progress = False

        if self.status == SessionStatus.SYNCING:
            self._transition(
                "sync_succeeded" if result else "sync_failed",
                SessionStatus.READY,
            )
        return result

    # ------------------------------------------------------------------
    # Read-only view
    # ------------------------------------------------------------------

    def snapshot(self) -> Dict[str, Any]:
        """JSON-ready view of the session."""
        return {
            "session_id": self.session_id,
            "status": self.status.value,
            "request": self.current_request.to_wire() if self.current_request else None,
            "plan": self.plan.to_wire() if self.plan else None,
            "grounding_chunks": [chunk.to_wire() for chunk in self.grounding_chunks],
            "error": self.error,
            "adjustment_error": self.adjustment_error,
            "is_current_saved": self.is_current_saved,
            "is_adjustment_open": self.is_adjustment_open,
            "sync_in_progress": self.sync_in_progress,
            "sync_error": self.sync_error,
            "sync_success_message": self.sync_success_message,
            "last_synced_link": self.last_synced_link,
            "saved_trips": [trip.to_wire() for trip in self.saved_trips],
        }
