import logging

import matplotlib

matplotlib.use("Agg")

import pytest
import structlog
from structlog.testing import capture_logs

from riskdiff.stats.common.normal import reset_normal_cache


@pytest.fixture(autouse=True)
def fresh_normal_cache():
    reset_normal_cache()
    yield
    reset_normal_cache()


@pytest.fixture
def debug_logs():
    """Capture riskdiff's debug events as a list of dicts."""
    saved = structlog.get_config()
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG)
    )
    try:
        with capture_logs() as logs:
            yield logs
    finally:
        structlog.configure(**saved)
