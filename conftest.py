import os

import pytest
from hypothesis import settings

from percentile_buckets import StatsConfig, build_boundary_table, get_boundary_table

# Hypothesis profiles; select with HYPOTHESIS_PROFILE=dev|debug
settings.register_profile("ci", max_examples=200, deadline=None)
settings.register_profile("dev", max_examples=25)
settings.register_profile("debug", max_examples=1)
settings.load_profile(os.environ.get("HYPOTHESIS_PROFILE", "ci"))


@pytest.fixture(scope="session")
def table():
    """Shared process-wide boundary table."""
    return get_boundary_table()


@pytest.fixture
def fresh_table():
    """Independently built table, for determinism checks."""
    return build_boundary_table()


@pytest.fixture
def timer_config():
    """Timer-like window: 1ms .. 30s in nanoseconds, with two SLA boundaries."""
    return StatsConfig(
        minimum_expected_value=1_000_000,
        maximum_expected_value=30_000_000_000,
        percentile_histogram=True,
        sla=(100_000_000, 500_000_000),
    )
