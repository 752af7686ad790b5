"""In-memory ConstantStore, safe to share between threads.

One lock guards the dictionary. It is held for lookups and publishes only,
never while a constant is being computed.
"""

from __future__ import annotations

import logging
import threading
from decimal import Decimal
from typing import final

from decimath.infra.protocols import ConstantId, ConstantKey

logger = logging.getLogger(__name__)


@final
class InMemoryConstantStore:
    """Process-local constant store. Entries are never evicted."""

    def __init__(self) -> None:
        self._entries: dict[ConstantKey, Decimal] = {}
        self._lock = threading.Lock()

    def get(self, key: ConstantKey) -> Decimal | None:
        with self._lock:
            return self._entries.get(key)

    def best(self, constant: ConstantId, precision: int) -> tuple[int, Decimal] | None:
        with self._lock:
            candidates = [
                (prec, value) for (cid, prec), value in self._entries.items()
                if cid is constant and prec >= precision
            ]
        if not candidates:
            return None
        return min(candidates, key=lambda entry: entry[0])

    def publish(self, key: ConstantKey, value: Decimal) -> Decimal:
        """Write-once publish. A concurrent earlier publish wins."""
        with self._lock:
            stored = self._entries.setdefault(key, value)
        if stored is value:
            logger.debug("Published %s at %d digits", key[0].value, key[1])
        return stored

    def count(self) -> int:
        """Test-only helper."""
        with self._lock:
            return len(self._entries)

    def keys(self) -> tuple[ConstantKey, ...]:
        """Test-only helper."""
        with self._lock:
            return tuple(self._entries.keys())
