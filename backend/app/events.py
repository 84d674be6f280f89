from __future__ import annotations

import copy
from collections import deque
from typing import Any, Deque, List

from .utils import now_ts


class EventStore:
    """Keep a bounded log of applied actions so clients can poll via HTTP."""

    def __init__(self, max_events: int = 200):
        self._events: Deque[dict[str, Any]] = deque(maxlen=max_events)
        self._seq = 0

    @property
    def latest_seq(self) -> int:
        return self._seq

    def append(self, payload: dict[str, Any]) -> int:
        """Store a new event and return its sequence number."""

        self._seq += 1
        self._events.append(
            {
                "seq": self._seq,
                "timestamp": now_ts(),
                "payload": copy.deepcopy(payload),
            }
        )
        return self._seq

    def list(self, after: int | None = None, limit: int = 200) -> List[dict[str, Any]]:
        """Return events that occur after the given sequence, oldest first."""

        events = [e for e in self._events if after is None or e["seq"] > after]
        return [dict(e, payload=copy.deepcopy(e["payload"])) for e in events[:limit]]

    def reset(self) -> None:
        """Clear stored events.

        Sequence numbers keep increasing so polling clients holding an old
        ``after`` cursor still see whatever is appended next (the reset
        marker) and drop derived state.
        """

        self._events.clear()
