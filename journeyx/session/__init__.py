"""
Planning session: the state machine that ties generation, history and
sync together for one user.
"""

from journeyx.session.orchestrator import PlanningSession
from journeyx.session.states import SessionStatus
from journeyx.session.store import InMemoryStore, JsonFileStore, PersistentStore

__all__ = [
    "PlanningSession",
    "SessionStatus",
    "InMemoryStore",
    "JsonFileStore",
    "PersistentStore",
]
