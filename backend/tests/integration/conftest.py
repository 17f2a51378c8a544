import pytest

from marketplace.clock import utcnow


@pytest.fixture
def now():
    """Routers read the real clock, so integration data is built around it."""
    return utcnow()
