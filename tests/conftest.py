"""
Shared pytest fixtures and configuration.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from focusd.api.app import create_app
from focusd.clock import FixedClock
from focusd.config import Config

WORK_YAML = """\
name: Work
schedule:
  - days: weekdays
    start: "09:00"
    end: "17:00"
"""

DEEP_FOCUS_YAML = """\
name: Deep Focus
schedule:
  - days: [sat, sun]
    start: "22:00"
    end: "02:00"
"""


@pytest.fixture
def config_dir(tmp_path):
    """A configuration directory holding "Work" and "Deep Focus", in that order."""
    d = tmp_path / "focus"
    d.mkdir()
    (d / "01-work.yaml").write_text(WORK_YAML)
    (d / "02-deep-focus.yaml").write_text(DEEP_FOCUS_YAML)
    return d


@pytest.fixture
def cfg(config_dir):
    return Config(config_dir=config_dir, timezone="UTC", reload_interval_s=0)


@pytest.fixture
def clock():
    return FixedClock(1000)


@pytest.fixture
def app(cfg, clock):
    """Create a fresh app instance per test."""
    return create_app(cfg, clock=clock)


@pytest_asyncio.fixture
async def client(app):
    """Async HTTP client wired directly to the ASGI app (no server needed)."""
    async with app.router.lifespan_context(app):
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as ac:
            yield ac
