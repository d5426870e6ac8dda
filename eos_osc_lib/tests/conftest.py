"""
Pytest configuration and fixtures for eos_osc_lib tests.
"""

from typing import Any, Dict, List, Optional, Tuple

import pytest

from eos_osc_lib.decoder import address_matches
from eos_osc_lib.profiles import DEFAULT_PARAMETERS


class RecordingHost:
    """In-memory HostInterface that records sends and dispatches like a real host."""

    def __init__(self, parameters: Optional[Dict[str, Any]] = None):
        self.parameters: Dict[str, Any] = dict(DEFAULT_PARAMETERS)
        if parameters:
            self.parameters.update(parameters)
        self.values: Dict[str, Any] = {}
        self.sent: List[Tuple[str, Tuple[Any, ...]]] = []
        self.registrations: List[Tuple[str, Any]] = []

    def register(self, pattern, handler):
        self.registrations.append((pattern, handler))

    def send(self, address, *args):
        self.sent.append((address, args))

    def matches(self, address, pattern):
        return address_matches(address, pattern)

    def get_parameter(self, name):
        return self.parameters.get(name)

    def set_value(self, name, value):
        self.values[name] = value

    def get_value(self, name):
        return self.values.get(name)

    def deliver(self, address: str, *args: Any) -> None:
        """Simulate an inbound message: every matching registration fires."""
        for pattern, handler in self.registrations:
            if address_matches(address, pattern):
                handler(address, list(args))


@pytest.fixture
def host():
    """Recording host with default parameters."""
    return RecordingHost()


@pytest.fixture
def make_host():
    """Factory for recording hosts with parameter overrides."""
    def _make(**parameters):
        return RecordingHost(parameters)
    return _make
