from datetime import datetime, timezone

import pytest


@pytest.fixture
def now():
    return datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)
