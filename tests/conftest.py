"""Shared fixtures: deterministic clocks, token sources and network probes."""

import itertools
from datetime import datetime, timedelta, timezone

import pytest

from core.errors import ExternalUnavailable
from core.registry import AgentRegistry
from tools.dispatch import ToolDispatcher

START = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Advances one second on every call."""

    def __init__(self, start: datetime = START):
        self.now = start

    def __call__(self) -> datetime:
        current = self.now
        self.now = current + timedelta(seconds=1)
        return current


def sequence(prefix: str):
    counter = itertools.count(1)
    return lambda: f"{prefix}-{next(counter)}"


class FakeProbe:
    def __init__(self, slot=250_000_000, block_time=START, slot_error=None, block_time_error=None):
        self.slot = slot
        self.block_time = block_time
        self.slot_error = slot_error
        self.block_time_error = block_time_error
        self.calls = []

    def get_slot(self) -> int:
        self.calls.append("getSlot")
        if self.slot_error:
            raise self.slot_error
        return self.slot

    def get_block_time(self, slot):
        self.calls.append(("getBlockTime", slot))
        if self.block_time_error:
            raise self.block_time_error
        return self.block_time


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def registry(clock):
    return AgentRegistry(id_source=sequence("agent"), address_source=sequence("addr"), clock=clock)


@pytest.fixture
def probe():
    return FakeProbe()


@pytest.fixture
def failing_probe():
    return FakeProbe(slot_error=ExternalUnavailable("getSlot timed out after 10s"))


@pytest.fixture
def dispatcher(registry, probe):
    return ToolDispatcher(registry, probe, network="devnet")
