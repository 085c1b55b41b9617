"""
Percentile Histogram Boundary Table
===================================

Fixed set of histogram bucket boundaries for monitoring systems that aggregate
percentile approximations across processes (Prometheus ``histogram_quantile``,
Atlas ``:percentiles``). Every process must publish the same boundaries at every
interval, regardless of where samples were actually observed, so the table is a
pure function of a few constants.

Layout:

    Base: 1, 2, 3

    4 (4^1), delta = 1
        4, 5, 6, ..., 14

    16 (4^2), delta = 5
        16, 21, 26, ..., 56

    64 (4^3), delta = 21
        ...

Each tier starts at a power of 4 and steps by one third of that power while the
value stays below the next power of 4 minus the step. The run for ``2^62``
is empty because its upper limit wraps in 64-bit arithmetic; ``INT64_MAX``
closes the table as a sentinel.
"""
from __future__ import annotations
import operator
import threading
from typing import Iterator, List, Optional, Tuple

import numpy as np

from .core_types import INT64_MAX, INT64_MIN, clamp_int64

# Base-2 digits shifted per tier (tiers are powers of 4)
DIGITS = 2

_UINT64_SPAN = 1 << 64


def _wrap_int64(value: int) -> int:
    """Reduce ``value`` to signed 64-bit two's complement."""
    return ((value - INT64_MIN) % _UINT64_SPAN) + INT64_MIN


class BoundaryTable:
    """Immutable, ascending, duplicate-free int64 boundaries.

    Backed by a read-only numpy array; lookups are binary searches.
    """

    __slots__ = ('_values',)

    def __init__(self, values: np.ndarray):
        arr = np.array(values, dtype=np.int64, copy=True)
        if arr.ndim != 1:
            raise ValueError(f"Boundary table must be one-dimensional, got shape {arr.shape}")
        if arr.size > 1 and not np.all(arr[1:] > arr[:-1]):
            raise ValueError("Boundary table must be strictly increasing")
        # Backed by immutable bytes so the write flag cannot be turned back on
        self._values = np.frombuffer(arr.tobytes(), dtype=np.int64)

    @property
    def values(self) -> np.ndarray:
        """Read-only view of the boundaries."""
        return self._values.view()

    def __len__(self) -> int:
        return int(self._values.size)

    def __iter__(self) -> Iterator[int]:
        return (int(v) for v in self._values)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return self._values[index]
        return int(self._values[index])

    def __contains__(self, value) -> bool:
        try:
            value = operator.index(value)
        except TypeError:
            return False
        if value < INT64_MIN or value > INT64_MAX:
            return False
        idx = int(np.searchsorted(self._values, value, side='left'))
        return idx < self._values.size and int(self._values[idx]) == value

    def __eq__(self, other) -> bool:
        if not isinstance(other, BoundaryTable):
            return NotImplemented
        return np.array_equal(self._values, other._values)

    def __hash__(self) -> int:
        return hash(self._values.tobytes())

    def __repr__(self) -> str:
        if len(self) == 0:
            return "BoundaryTable([])"
        return f"BoundaryTable(n={len(self)}, first={self[0]}, last={self[-1]})"

    def to_list(self) -> List[int]:
        return [int(v) for v in self._values]

    # ---------------- navigable lookups ----------------
    def ceiling(self, value: int) -> Optional[int]:
        """Smallest boundary >= ``value``, or None."""
        if value > INT64_MAX:
            return None
        idx = int(np.searchsorted(self._values, clamp_int64(value), side='left'))
        if idx >= self._values.size:
            return None
        return int(self._values[idx])

    def floor(self, value: int) -> Optional[int]:
        """Largest boundary <= ``value``, or None."""
        if value < INT64_MIN:
            return None
        idx = int(np.searchsorted(self._values, clamp_int64(value), side='right')) - 1
        if idx < 0:
            return None
        return int(self._values[idx])

    def index_range(self, minimum: int, maximum: int) -> Tuple[int, int]:
        """Half-open positions ``[lo, hi)`` of boundaries in ``[minimum, maximum]``."""
        if minimum > maximum or minimum > INT64_MAX or maximum < INT64_MIN:
            return 0, 0
        lo = int(np.searchsorted(self._values, clamp_int64(minimum), side='left'))
        hi = int(np.searchsorted(self._values, clamp_int64(maximum), side='right'))
        return lo, max(lo, hi)


# ============================================================================
# TABLE CONSTRUCTION
# ============================================================================

def _tier_run(exp: int, step: int = DIGITS) -> List[int]:
    """Boundaries contributed by the tier starting at ``2**exp``."""
    current = 1 << exp
    delta = current // 3
    limit = _wrap_int64(current << step) - delta
    run = []
    while current < limit:
        run.append(current)
        current += delta
    return run


def build_boundary_table() -> BoundaryTable:
    """Build the percentile boundary table from scratch.

    Deterministic; prefer :func:`get_boundary_table` for the shared instance.
    """
    boundaries = {1, 2, 3}
    exp = DIGITS
    while exp < 64:
        boundaries.update(_tier_run(exp))
        exp += DIGITS
    boundaries.add(INT64_MAX)
    return BoundaryTable(np.fromiter(sorted(boundaries), dtype=np.int64, count=len(boundaries)))


_TABLE: Optional[BoundaryTable] = None
_TABLE_LOCK = threading.Lock()


def get_boundary_table() -> BoundaryTable:
    """Process-wide boundary table, built once on first use."""
    global _TABLE
    table = _TABLE
    if table is None:
        with _TABLE_LOCK:
            if _TABLE is None:
                _TABLE = build_boundary_table()
            table = _TABLE
    return table
