from __future__ import annotations
from dataclasses import dataclass, field, fields, replace
from typing import Any, ClassVar, Mapping, Optional, Tuple
import operator

import numpy as np

# ============================================================================
# NUMERIC LIMITS
# ============================================================================

INT64_MIN = int(np.iinfo(np.int64).min)
INT64_MAX = int(np.iinfo(np.int64).max)


def clamp_int64(value: int) -> int:
    return max(INT64_MIN, min(INT64_MAX, value))


class BucketWindowWarning(UserWarning):
    """Expected-value window selects nothing (minimum above maximum)."""


# ============================================================================
# STATS CONFIGURATION
# ============================================================================

_CAMEL_ALIASES = {
    'minimumExpectedValue': 'minimum_expected_value',
    'maximumExpectedValue': 'maximum_expected_value',
    'percentileHistogram': 'percentile_histogram',
}


@dataclass(frozen=True)
class StatsConfig:
    """Distribution statistics configuration for one histogram instrument.

    Values are in the instrument's base scale (e.g. nanoseconds for timers).
    Unset fields (``None``) are filled from a parent via :meth:`merge` or from
    :attr:`DEFAULT` via :meth:`expected_window`.
    """
    minimum_expected_value: Optional[int] = None
    maximum_expected_value: Optional[int] = None
    percentile_histogram: Optional[bool] = None
    sla: Tuple[int, ...] = field(default_factory=tuple)

    DEFAULT: ClassVar['StatsConfig']

    def __post_init__(self):
        for name in ('minimum_expected_value', 'maximum_expected_value'):
            value = getattr(self, name)
            if value is not None:
                object.__setattr__(self, name, operator.index(value))
        # SLA boundaries behave like a sorted set
        object.__setattr__(self, 'sla', tuple(sorted({operator.index(v) for v in self.sla})))

    @property
    def is_percentile_histogram(self) -> bool:
        return bool(self.percentile_histogram)

    def expected_window(self) -> Tuple[int, int]:
        """Effective (minimum, maximum) pair with defaults applied."""
        minimum = self.minimum_expected_value
        maximum = self.maximum_expected_value
        if minimum is None:
            minimum = StatsConfig.DEFAULT.minimum_expected_value
        if maximum is None:
            maximum = StatsConfig.DEFAULT.maximum_expected_value
        return minimum, maximum

    def merge(self, parent: 'StatsConfig') -> 'StatsConfig':
        """Fill unset fields from ``parent``; fields set here win."""
        return StatsConfig(
            minimum_expected_value=(self.minimum_expected_value
                                    if self.minimum_expected_value is not None
                                    else parent.minimum_expected_value),
            maximum_expected_value=(self.maximum_expected_value
                                    if self.maximum_expected_value is not None
                                    else parent.maximum_expected_value),
            percentile_histogram=(self.percentile_histogram
                                  if self.percentile_histogram is not None
                                  else parent.percentile_histogram),
            sla=self.sla if self.sla else parent.sla,
        )

    def with_window(self, minimum: int, maximum: int) -> 'StatsConfig':
        return replace(self, minimum_expected_value=minimum, maximum_expected_value=maximum)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> 'StatsConfig':
        """Build a config from a plain dict (snake_case or camelCase keys)."""
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in mapping.items():
            name = _CAMEL_ALIASES.get(key, key)
            if name not in known:
                raise KeyError(f"Unknown stats config key: '{key}'")
            kwargs[name] = tuple(value) if name == 'sla' else value
        return cls(**kwargs)


StatsConfig.DEFAULT = StatsConfig(
    minimum_expected_value=1,
    maximum_expected_value=INT64_MAX,
    percentile_histogram=False,
    sla=(),
)
