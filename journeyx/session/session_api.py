"""
FastAPI endpoints for planning sessions.

Each endpoint invokes one session transition and returns the session
snapshot. Sessions live in memory for the lifetime of the process.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field

from journeyx.session.orchestrator import PlanningSession
from journeyx.shared.contracts import TripRequest
from journeyx.shared.errors import PreconditionError
from journeyx.transform import (
    extract_map_markers,
    travel_book_to_payload,
    trip_plan_to_travel_book,
)


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/sessions", tags=["sessions"])

# In-memory session storage (replace with Redis/DB in production)
_sessions: Dict[str, PlanningSession] = {}

# Builds a new PlanningSession; installed by the application entry point
_session_factory: Optional[Callable[[], PlanningSession]] = None


def configure_sessions(factory: Callable[[], PlanningSession]) -> None:
    """Install the session factory and drop any existing sessions."""
    global _session_factory
    _session_factory = factory
    _sessions.clear()


def _get_session(session_id: str) -> PlanningSession:
    session = _sessions.get(session_id)
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Session {session_id} not found",
        )
    return session


def _conflict(e: PreconditionError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)


# ============================================================================
# Request Models
# ============================================================================


class AdjustRequest(BaseModel):
    """Feedback on the current plan."""

    feedback: str = Field(description="What the traveller wants changed")


class SyncRequest(BaseModel):
    """Target of a travel book sync."""

    account: str = Field(description="Travel book account name")
    title: str = Field(default="", description="Travel book title")


# ============================================================================
# Endpoints
# ============================================================================


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_session() -> Dict[str, Any]:
    """Start a new planning session."""
    if _session_factory is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Session factory is not configured",
        )
    session = _session_factory()
    _sessions[session.session_id] = session
    logger.info(f"[session={session.session_id}] [api=create] Session created")
    return session.snapshot()


@router.get("/{session_id}")
async def get_session(session_id: str) -> Dict[str, Any]:
    return _get_session(session_id).snapshot()


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def end_session(session_id: str) -> None:
    _get_session(session_id)
    _sessions.pop(session_id, None)


@router.post("/{session_id}/submit")
async def submit_trip(session_id: str, request: TripRequest) -> Dict[str, Any]:
    """Generate a fresh itinerary for the request."""
    session = _get_session(session_id)
    try:
        await session.submit(request)
    except PreconditionError as e:
        raise _conflict(e)
    return session.snapshot()


@router.post("/{session_id}/adjustment/open")
async def open_adjustment(session_id: str) -> Dict[str, Any]:
    session = _get_session(session_id)
    session.open_adjustment()
    return session.snapshot()


@router.post("/{session_id}/adjustment/close")
async def close_adjustment(session_id: str) -> Dict[str, Any]:
    session = _get_session(session_id)
    session.close_adjustment()
    return session.snapshot()


@router.post("/{session_id}/adjust")
async def adjust_trip(session_id: str, body: AdjustRequest) -> Dict[str, Any]:
    """Regenerate the current itinerary with feedback."""
    session = _get_session(session_id)
    try:
        await session.adjust(body.feedback)
    except PreconditionError as e:
        raise _conflict(e)
    return session.snapshot()


@router.post("/{session_id}/save")
async def save_trip(session_id: str) -> Dict[str, Any]:
    session = _get_session(session_id)
    try:
        session.save()
    except PreconditionError as e:
        raise _conflict(e)
    return session.snapshot()


@router.post("/{session_id}/saved/{trip_id}/select")
async def select_trip(session_id: str, trip_id: str) -> Dict[str, Any]:
    session = _get_session(session_id)
    try:
        session.select(trip_id)
    except PreconditionError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    return session.snapshot()


@router.delete("/{session_id}/saved/{trip_id}")
async def delete_trip(session_id: str, trip_id: str) -> Dict[str, Any]:
    session = _get_session(session_id)
    session.delete(trip_id)
    return session.snapshot()


@router.post("/{session_id}/reset")
async def reset_trip(session_id: str) -> Dict[str, Any]:
    session = _get_session(session_id)
    session.reset()
    return session.snapshot()


@router.post("/{session_id}/sample")
async def load_sample(session_id: str) -> Dict[str, Any]:
    """Show the built-in sample itinerary."""
    session = _get_session(session_id)
    session.load_test_plan()
    return session.snapshot()


@router.post("/{session_id}/sync")
async def sync_trip(session_id: str, body: SyncRequest) -> Dict[str, Any]:
    """Publish the current itinerary to the travel book store."""
    session = _get_session(session_id)
    session.open_sync()
    try:
        await session.sync(body.account, body.title)
    except PreconditionError as e:
        raise _conflict(e)
    return session.snapshot()


@router.get("/{session_id}/markers")
async def get_markers(session_id: str) -> List[Dict[str, Any]]:
    """Map markers for the current plan."""
    session = _get_session(session_id)
    if session.plan is None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="No plan")
    return [
        {**marker.to_wire(), "color": marker.color, "popupLines": marker.popup_lines()}
        for marker in extract_map_markers(session.plan)
    ]


@router.get("/{session_id}/travel-book")
async def get_travel_book(session_id: str) -> List[Dict[str, Any]]:
    """Export-book view of the current plan."""
    session = _get_session(session_id)
    if session.plan is None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="No plan")
    return travel_book_to_payload(trip_plan_to_travel_book(session.plan))
