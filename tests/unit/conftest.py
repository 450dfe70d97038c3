"""Pytest configuration and fixtures for g1c unit tests."""

import logging
import sys
from collections.abc import Generator
from pathlib import Path

import pytest

tests_root = Path(__file__).parent.parent.parent
if str(tests_root) not in sys.path:
    sys.path.insert(0, str(tests_root))

from tests.unit.fakes import FakeInstanceProvider, FakeTerminal  # noqa: E402
from tests.unit.fakes.fake_provider import make_instance  # noqa: E402

from g1c.constants import InstanceStatus  # noqa: E402
from g1c.core.loop import EventLoop  # noqa: E402
from g1c.core.state import DashboardState  # noqa: E402


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Isolate tests from the developer's g1c environment and root logger.

    Yields
    ------
    None
        Control back to the test
    """
    monkeypatch.delenv("G1C_CONFIG", raising=False)
    monkeypatch.delenv("G1C_DEBUG", raising=False)

    root_logger = logging.getLogger()
    original_level = root_logger.level

    yield

    for handler in root_logger.handlers[:]:
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root_logger.removeHandler(handler)
            handler.close()

    root_logger.setLevel(original_level)


@pytest.fixture
def instances():
    """Three instances: A and B running, C stopped."""
    return [
        make_instance("web-a", InstanceStatus.RUNNING, "101", internal_ip="10.0.0.2"),
        make_instance("web-b", InstanceStatus.RUNNING, "102", zone="europe-west1-b"),
        make_instance("db-c", InstanceStatus.TERMINATED, "103", machine_type="n2-standard-4"),
    ]


@pytest.fixture
def state(instances) -> DashboardState:
    dashboard_state = DashboardState()
    dashboard_state.update_instances(instances)
    return dashboard_state


@pytest.fixture
def provider(instances) -> FakeInstanceProvider:
    return FakeInstanceProvider(instances)


@pytest.fixture
def terminal() -> FakeTerminal:
    return FakeTerminal()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def dashboard_loop(provider, terminal, clock) -> EventLoop:
    """EventLoop wired to fakes, not yet started."""
    return EventLoop(
        state=DashboardState(),
        provider=provider,
        terminal=terminal,
        project_id="fake-project",
        region="us-central1",
        refresh_interval=5,
        cli_version_getter=provider.get_cli_version,
        clock=clock,
    )
