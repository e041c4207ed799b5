"""Shared test fixtures."""

import pytest

from app.services.llm_metrics import reset_metrics
from app.services.location_store import get_location_store


@pytest.fixture(autouse=True)
def fresh_store():
    """Reload place fixtures so reports from one test don't leak into the next."""
    store = get_location_store()
    store.reset()
    reset_metrics()
    yield store
    store.reset()
