# design_rules/session.py
"""
Tracks "one analysis at a time, latest wins".

IDLE -> begin() -> ANALYZING(id) -> complete(id, result) -> COMPLETE(id, result)
A newer begin() supersedes the running request; its late result is dropped.
"""

import logging
import threading
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from .models import DesignElements

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    idle = "idle"
    analyzing = "analyzing"
    complete = "complete"


@dataclass(frozen=True)
class SessionSnapshot:
    state: SessionState
    request_id: Optional[str] = None
    result: Optional[DesignElements] = None
    rule: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state": self.state.value,
            "request_id": self.request_id,
            "designElements": self.result.to_dict() if self.result else None,
            "rule": self.rule,
        }


class AnalysisSession:
    def __init__(self):
        self._lock = threading.Lock()
        self._snapshot = SessionSnapshot(SessionState.idle)

    def begin(self) -> str:
        request_id = uuid.uuid4().hex
        with self._lock:
            previous = self._snapshot
            self._snapshot = SessionSnapshot(SessionState.analyzing, request_id)
        if previous.state is SessionState.analyzing:
            logger.info("request %s supersedes %s", request_id, previous.request_id)
        return request_id

    def complete(self, request_id: str, result: DesignElements, rule: Optional[str] = None) -> bool:
        """Store the result if `request_id` is still current. Returns False for stale results."""
        with self._lock:
            current = self._snapshot
            if current.state is not SessionState.analyzing or current.request_id != request_id:
                logger.info("dropping stale result for %s (current=%s)", request_id, current.request_id)
                return False
            self._snapshot = SessionSnapshot(SessionState.complete, request_id, result, rule)
            return True

    def fail(self, request_id: str) -> bool:
        with self._lock:
            current = self._snapshot
            if current.state is not SessionState.analyzing or current.request_id != request_id:
                return False
            self._snapshot = SessionSnapshot(SessionState.idle)
            return True

    def reset(self) -> None:
        with self._lock:
            self._snapshot = SessionSnapshot(SessionState.idle)

    def snapshot(self) -> SessionSnapshot:
        with self._lock:
            return self._snapshot
