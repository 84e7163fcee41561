"""
Monitor Loop for hostwatch

Drives the tick cadence: prime the sampler, wait one interval, take a
snapshot, run the detector, dispatch the resulting alerts, repeat. Ticks are
strictly sequential on the calling thread; only alert delivery fans out.

Author: hostwatch Team
SPDX-License-Identifier: Apache-2.0
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field

from hostwatch.config import MonitorConfig
from hostwatch.errors import ProviderUnavailable
from hostwatch.monitor.detector import AlertEvent, HysteresisDetector
from hostwatch.monitor.dispatcher import AlertDispatcher, DispatchOutcome
from hostwatch.monitor.sampler import MetricSampler, Snapshot

logger = logging.getLogger(__name__)


@dataclass
class TickResult:
    """Everything produced by one completed tick."""

    snapshot: Snapshot
    events: list[AlertEvent] = field(default_factory=list)
    outcomes: list[DispatchOutcome] = field(default_factory=list)


@dataclass
class MonitorStats:
    """Counters for a monitoring session."""

    ticks: int = 0
    skipped_ticks: int = 0
    alerts_raised: int = 0
    alerts_delivered: int = 0
    alerts_failed: int = 0


class MonitorLoop:
    """
    Fixed-interval sampling loop.

    Runs until stop() is called (from a signal handler or another thread);
    the stop request is honoured between ticks, never in the middle of one.

    Example:
        loop = MonitorLoop(sampler, detector, dispatcher, interval=1.0)
        signal.signal(signal.SIGTERM, lambda *_: loop.stop())
        loop.run()
    """

    def __init__(
        self,
        sampler: MetricSampler,
        detector: HysteresisDetector,
        dispatcher: AlertDispatcher,
        interval: float = 1.0,
        on_tick: Callable[[TickResult], None] | None = None,
    ):
        self.sampler = sampler
        self.detector = detector
        self.dispatcher = dispatcher
        self.interval = max(0.0, interval)
        self.on_tick = on_tick
        self.stats = MonitorStats()

        self._stop_event = threading.Event()
        self._running = False

    @classmethod
    def from_config(
        cls,
        config: MonitorConfig,
        sampler: MetricSampler,
        dispatcher: AlertDispatcher,
        on_tick: Callable[[TickResult], None] | None = None,
    ) -> "MonitorLoop":
        return cls(
            sampler,
            HysteresisDetector(config),
            dispatcher,
            interval=config.refresh_interval,
            on_tick=on_tick,
        )

    @property
    def is_running(self) -> bool:
        return self._running

    def stop(self) -> None:
        """Ask the loop to exit before its next tick."""
        self._stop_event.set()

    def _invoke_callback(self, result: TickResult) -> None:
        if not self.on_tick:
            return
        try:
            self.on_tick(result)
        except Exception as e:
            logger.warning(f"on_tick callback error: {e}")

    def tick(self) -> TickResult | None:
        """
        Run one tick.

        Returns:
            TickResult, or None if the tick was skipped (stats unavailable)
            or interrupted by stop() while waiting
        """
        try:
            self.sampler.prime()
        except ProviderUnavailable as e:
            logger.warning(f"Skipping tick, CPU refresh failed: {e}")
            self.stats.skipped_ticks += 1
            self._stop_event.wait(timeout=self.interval)
            return None

        if self._stop_event.wait(timeout=self.interval):
            return None

        try:
            snapshot = self.sampler.sample()
        except ProviderUnavailable as e:
            logger.warning(f"Skipping tick, system stats unavailable: {e}")
            self.stats.skipped_ticks += 1
            return None

        events = self.detector.evaluate(snapshot)
        outcomes = self.dispatcher.dispatch(events)

        self.stats.ticks += 1
        self.stats.alerts_raised += len(events)
        self.stats.alerts_delivered += sum(1 for o in outcomes if o.ok)
        self.stats.alerts_failed += sum(1 for o in outcomes if not o.ok)

        result = TickResult(snapshot=snapshot, events=events, outcomes=outcomes)
        self._invoke_callback(result)
        return result

    def run(self, max_ticks: int | None = None) -> MonitorStats:
        """
        Tick until stop() is called or max_ticks ticks have been attempted.

        A stop() issued before run() starts makes it return without ticking.

        Returns:
            Session statistics
        """
        if self._running:
            logger.warning("Monitor loop already running")
            return self.stats

        self._running = True
        logger.info(f"Monitor loop started with interval={self.interval}s")

        attempted = 0
        try:
            while not self._stop_event.is_set():
                if max_ticks is not None and attempted >= max_ticks:
                    break
                self.tick()
                attempted += 1
        finally:
            self._running = False
            self._stop_event.clear()
            logger.info(
                f"Monitor loop stopped after {self.stats.ticks} tick(s), "
                f"{self.stats.alerts_raised} alert(s)"
            )

        return self.stats
