"""Hand-written fakes injected into g1c components under test."""

from tests.unit.fakes.fake_provider import FakeInstanceProvider
from tests.unit.fakes.fake_terminal import FakeTerminal

__all__ = ["FakeInstanceProvider", "FakeTerminal"]
