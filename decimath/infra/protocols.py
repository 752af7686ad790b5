"""Storage protocol behind the constant cache.

Numeric code depends on this abstraction; the in-memory adapter implements
it. A store holds decimal approximations keyed by (constant, precision).

Invariants:
  - publish() is write-once: the first value stored under a key wins, and
    every later publish for that key returns the stored value unchanged.
  - get() never returns a partially written value.
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Protocol, runtime_checkable


class ConstantId(Enum):
    """Constants the cache knows how to compute."""

    PI = "pi"
    E = "e"
    LN2 = "ln2"
    LN10 = "ln10"


type ConstantKey = tuple[ConstantId, int]


@runtime_checkable
class ConstantStore(Protocol):
    """Append-only map of (constant, precision) -> value."""

    def get(self, key: ConstantKey) -> Decimal | None: ...

    def best(self, constant: ConstantId, precision: int) -> tuple[int, Decimal] | None:
        """Return the lowest stored (precision, value) with precision >= the request."""
        ...

    def publish(self, key: ConstantKey, value: Decimal) -> Decimal:
        """Store value unless the key exists. Return the value now stored."""
        ...
