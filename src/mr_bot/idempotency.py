"""
Simple idempotency guard for redelivered Slack events.

Remembers the most recent event ids in memory; nothing is persisted.
"""

from __future__ import annotations

import threading
from collections import OrderedDict


class RecentEventIds:
    def __init__(self, capacity: int = 1024) -> None:
        self.capacity = max(1, capacity)
        self._seen: OrderedDict[str, None] = OrderedDict()
        self._lock = threading.Lock()

    def record_if_new(self, key: str) -> bool:
        """Return True if recorded now (i.e., first time), False if already seen."""
        with self._lock:
            if key in self._seen:
                return False
            self._seen[key] = None
            while len(self._seen) > self.capacity:
                self._seen.popitem(last=False)
            return True

    def __len__(self) -> int:
        return len(self._seen)
