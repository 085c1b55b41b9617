from __future__ import annotations
from typing import Optional
import operator
import warnings

import numpy as np

from .boundary_table import BoundaryTable, get_boundary_table
from .core_types import BucketWindowWarning, StatsConfig, clamp_int64


def select_buckets(table: BoundaryTable, minimum_expected_value: int,
                   maximum_expected_value: int) -> np.ndarray:
    """
    Boundaries ``b`` of ``table`` with ``minimum <= b <= maximum``, ascending.

    - Both ends inclusive
    - Inverted window (minimum > maximum) yields an empty array and a
      BucketWindowWarning; it is never an error
    - Returns a read-only view into the table, never a mutable copy
    """
    minimum = operator.index(minimum_expected_value)
    maximum = operator.index(maximum_expected_value)

    if minimum > maximum:
        warnings.warn(
            f"Expected-value window is inverted ({minimum} > {maximum}); no buckets selected",
            BucketWindowWarning,
            stacklevel=2,
        )

    lo, hi = table.index_range(minimum, maximum)
    return table.values[lo:hi]


def buckets(stats_config: StatsConfig, table: Optional[BoundaryTable] = None) -> np.ndarray:
    """Percentile buckets for the config's expected-value window.

    Monitoring systems like Prometheus require the same buckets at every
    interval regardless of where samples landed, so the window only trims the
    shared table; it never reshapes it.
    """
    if table is None:
        table = get_boundary_table()
    minimum, maximum = stats_config.expected_window()
    return select_buckets(table, minimum, maximum)


def histogram_buckets(stats_config: StatsConfig,
                      supports_aggregable_percentiles: bool = True,
                      table: Optional[BoundaryTable] = None) -> np.ndarray:
    """Full boundary set an instrument publishes.

    Percentile buckets (plus the expected minimum and maximum) are included
    only when the config asks for a percentile histogram and the backend can
    aggregate them; SLA boundaries are always included.
    """
    parts = [np.asarray([clamp_int64(v) for v in stats_config.sla], dtype=np.int64)]
    if stats_config.is_percentile_histogram and supports_aggregable_percentiles:
        minimum, maximum = stats_config.expected_window()
        parts.append(buckets(stats_config, table))
        parts.append(np.asarray([clamp_int64(minimum), clamp_int64(maximum)], dtype=np.int64))

    # np.unique sorts and de-duplicates
    result = np.unique(np.concatenate(parts))
    return np.frombuffer(result.tobytes(), dtype=np.int64)
