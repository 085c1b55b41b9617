# percentile_buckets/__init__.py
from __future__ import annotations
from .core_types import (
    INT64_MAX, INT64_MIN, BucketWindowWarning, StatsConfig,
)
from .boundary_table import (
    BoundaryTable, build_boundary_table, get_boundary_table,
)
from .selector import select_buckets, buckets, histogram_buckets
from .frames import buckets_frame

__all__ = [
    'INT64_MAX',
    'INT64_MIN',
    'BucketWindowWarning',
    'StatsConfig',
    'BoundaryTable',
    'build_boundary_table',
    'get_boundary_table',
    'select_buckets',
    'buckets',
    'histogram_buckets',
    'buckets_frame',
]
