"""
Hysteresis Detector for hostwatch

Debounces raw per-tick measurements into alert events. Every stream (one per
CPU core plus one for memory) runs the same two-counter state machine:

    breach:     high_cycles += 1
                if high_cycles >= cycles_for_alert and ok_cycles >= cycles_between_alert:
                    emit alert, ok_cycles = 0
    no breach:  high_cycles = 0, ok_cycles += 1

A stream that stays saturated alerts once and then stays silent until it has
recovered for cycles_between_alert ticks and breached again for
cycles_for_alert ticks.

The detector is not thread-safe; the monitor loop is its only caller.

Author: hostwatch Team
SPDX-License-Identifier: Apache-2.0
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from hostwatch.config import MonitorConfig
from hostwatch.monitor.sampler import Snapshot

logger = logging.getLogger(__name__)

# Counters saturate here instead of growing for the life of the process.
COUNTER_CEILING = 2**31 - 1

TIMESTAMP_FORMAT = "%m-%d-%y %H:%M:%S UTC"


class StreamKind(Enum):
    CPU = "cpu"
    MEMORY = "memory"


@dataclass(frozen=True)
class StreamId:
    """Identifies one monitored metric."""

    kind: StreamKind
    index: int | None = None

    @classmethod
    def cpu(cls, index: int) -> "StreamId":
        return cls(StreamKind.CPU, index)

    @classmethod
    def memory(cls) -> "StreamId":
        return cls(StreamKind.MEMORY)

    def __str__(self) -> str:
        if self.kind is StreamKind.CPU:
            return f"CPU{self.index}"
        return "memory"


@dataclass
class StreamState:
    """Hysteresis counters for one stream."""

    high_cycles: int = 0
    ok_cycles: int = 0


@dataclass(frozen=True)
class AlertEvent:
    """A debounced alert, ready for dispatch."""

    stream_id: StreamId
    timestamp: datetime
    hostname: str
    measured_value: float
    message_text: str


def _saturating_inc(value: int) -> int:
    return value + 1 if value < COUNTER_CEILING else COUNTER_CEILING


class HysteresisDetector:
    """
    Per-stream hysteresis over a sequence of Snapshots.

    The stream set is fixed by the first snapshot evaluated. States live in
    an index-addressed list: CPU core i at position i, memory last.
    """

    def __init__(self, config: MonitorConfig):
        self.config = config
        self._cpu_count: int | None = None
        self._states: list[StreamState] = []

    @property
    def stream_ids(self) -> list[StreamId]:
        if self._cpu_count is None:
            return []
        return [StreamId.cpu(i) for i in range(self._cpu_count)] + [StreamId.memory()]

    @property
    def states(self) -> dict[StreamId, StreamState]:
        """Copy of the current counters, keyed by stream."""
        return {
            stream_id: StreamState(state.high_cycles, state.ok_cycles)
            for stream_id, state in zip(self.stream_ids, self._states)
        }

    def _init_streams(self, cpu_count: int) -> None:
        self._cpu_count = cpu_count
        self._states = [
            StreamState(high_cycles=0, ok_cycles=self.config.cycles_between_alert)
            for _ in range(cpu_count + 1)
        ]
        logger.debug(f"Tracking {cpu_count} CPU streams and memory")

    def _step(self, state: StreamState, breached: bool) -> bool:
        """Advance one stream by one tick. Returns True if it should alert."""
        if not breached:
            state.high_cycles = 0
            state.ok_cycles = _saturating_inc(state.ok_cycles)
            return False

        state.high_cycles = _saturating_inc(state.high_cycles)
        if (
            state.high_cycles >= self.config.cycles_for_alert
            and state.ok_cycles >= self.config.cycles_between_alert
        ):
            state.ok_cycles = 0
            return True
        return False

    def memory_breached(self, used: int, total: int) -> bool:
        # Integer comparison of used/total against the percent threshold.
        return used * 100 > total * self.config.mem_usage_threshold_percent

    def evaluate(self, snapshot: Snapshot) -> list[AlertEvent]:
        """
        Advance every stream with one snapshot.

        Returns:
            Alert events for this tick: CPU streams by core index, then memory

        Raises:
            ValueError: if the snapshot's core count differs from the first one
        """
        if self._cpu_count is None:
            self._init_streams(snapshot.cpu_count)
        elif snapshot.cpu_count != self._cpu_count:
            raise ValueError(
                f"Snapshot has {snapshot.cpu_count} CPU cores, expected {self._cpu_count}"
            )

        ts = snapshot.timestamp.strftime(TIMESTAMP_FORMAT)
        events = []

        for i, usage in enumerate(snapshot.cpu_usages):
            if self._step(self._states[i], usage > self.config.cpu_usage_threshold):
                events.append(
                    AlertEvent(
                        stream_id=StreamId.cpu(i),
                        timestamp=snapshot.timestamp,
                        hostname=snapshot.hostname,
                        measured_value=usage,
                        message_text=f"{ts} {snapshot.hostname}: High CPU{i} usage: {usage:.1f}%",
                    )
                )

        mem_breached = self.memory_breached(snapshot.memory_used, snapshot.memory_total)
        if self._step(self._states[-1], mem_breached):
            percent = snapshot.memory_percent
            threshold = self.config.mem_usage_threshold_percent
            events.append(
                AlertEvent(
                    stream_id=StreamId.memory(),
                    timestamp=snapshot.timestamp,
                    hostname=snapshot.hostname,
                    measured_value=percent,
                    message_text=(
                        f"{ts} {snapshot.hostname}: High memory usage: "
                        f"{percent:.1f}% (>{threshold}%)"
                    ),
                )
            )

        for event in events:
            logger.info(f"Alert raised for {event.stream_id}: {event.measured_value:.1f}")
        return events
