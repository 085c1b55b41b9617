"""
Tabular view of bucket boundaries
=================================

Polars frame with one row per bucket, for inspecting how a selection carves
the value space. Upper bounds are inclusive, matching cumulative ``le``
histogram buckets.
"""
from __future__ import annotations
from typing import Iterable, Union
import operator

import numpy as np
import polars as pl

from .boundary_table import BoundaryTable


def buckets_frame(boundaries: Union[BoundaryTable, np.ndarray, Iterable[int]]) -> pl.DataFrame:
    if isinstance(boundaries, BoundaryTable):
        upper = boundaries.values
    elif isinstance(boundaries, np.ndarray):
        if not np.issubdtype(boundaries.dtype, np.integer):
            raise TypeError(f"Bucket boundaries must be integers, got dtype {boundaries.dtype}")
        upper = np.asarray([operator.index(v) for v in boundaries.tolist()], dtype=np.int64)
    else:
        upper = np.asarray([operator.index(v) for v in boundaries], dtype=np.int64)
    if upper.size > 1 and not np.all(upper[1:] > upper[:-1]):
        raise ValueError("Bucket boundaries must be strictly increasing")

    lower = [None] + [int(v) for v in upper[:-1]] if upper.size else []
    return pl.DataFrame(
        {
            'bucket': np.arange(upper.size, dtype=np.uint32),
            'lower_exclusive': pl.Series('lower_exclusive', lower, dtype=pl.Int64),
            'upper_inclusive': pl.Series('upper_inclusive', upper, dtype=pl.Int64),
        }
    )
