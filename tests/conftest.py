"""Shared fixtures for hostwatch tests."""

import sys
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from pathlib import Path

# Ensure hostwatch is importable without installation
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest

from hostwatch.errors import ProviderUnavailable
from hostwatch.monitor.sampler import Snapshot

BASE_TIME = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


class FakeStatsProvider:
    """In-memory SystemStatsProvider fed from a list of readings."""

    def __init__(self, readings, hostname="web-01"):
        # readings: list of (cpu_usages, used, total) or an Exception to raise on refresh_all
        self.readings = list(readings)
        self._hostname = hostname
        self._current = None
        self.calls: list[str] = []

    def refresh_cpu(self) -> None:
        self.calls.append("refresh_cpu")

    def refresh_all(self) -> None:
        self.calls.append("refresh_all")
        reading = self.readings.pop(0)
        if isinstance(reading, Exception):
            raise reading
        self._current = reading

    def _require(self):
        if self._current is None:
            raise ProviderUnavailable("not refreshed")
        return self._current

    def cpu_usages(self):
        return list(self._require()[0])

    def used_memory(self) -> int:
        return self._require()[1]

    def total_memory(self) -> int:
        return self._require()[2]

    def hostname(self) -> str:
        return self._hostname


@pytest.fixture
def make_snapshot() -> Callable[..., Snapshot]:
    """Factory for Snapshots one second apart."""

    def _make(cpu=(10.0,), used=10, total=100, tick=0, hostname="web-01") -> Snapshot:
        return Snapshot(
            timestamp=BASE_TIME + timedelta(seconds=tick),
            hostname=hostname,
            cpu_usages=tuple(cpu),
            memory_used=used,
            memory_total=total,
        )

    return _make


@pytest.fixture
def fake_provider() -> Callable[..., FakeStatsProvider]:
    return FakeStatsProvider


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    return lambda: BASE_TIME
