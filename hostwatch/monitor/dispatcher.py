"""
Alert Dispatcher for hostwatch

Sends one tick's alert events concurrently and waits for all of them (a
bounded fork-join). Each event gets its own worker thread, so a slow or
failing delivery never blocks the others. Outcomes are reported back to the
caller only; nothing is retried and detector state is never touched.

Author: hostwatch Team
SPDX-License-Identifier: Apache-2.0
"""

import logging
import time
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass

from hostwatch.monitor.detector import AlertEvent
from hostwatch.notify import Notifier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AlertRoute:
    """Sender and destination used for every alert."""

    sender: str
    destination: str


@dataclass(frozen=True)
class DispatchOutcome:
    """Result of delivering a single alert."""

    @property
    def ok(self) -> bool:
        return isinstance(self, Delivered)


@dataclass(frozen=True)
class Delivered(DispatchOutcome):
    transport_status: int | str


@dataclass(frozen=True)
class Failed(DispatchOutcome):
    error_detail: str


class AlertDispatcher:
    """
    Concurrent, per-tick alert delivery.

    Example:
        dispatcher = AlertDispatcher(notifier, AlertRoute("447860099299", "41793026727"))
        outcomes = dispatcher.dispatch(events)
        failed = [o for o in outcomes if not o.ok]
    """

    def __init__(self, notifier: Notifier, route: AlertRoute, timeout: float = 10.0):
        """
        Args:
            notifier: Delivery transport
            route: Sender/destination passed to every send
            timeout: Seconds to wait for the whole batch before giving up on
                     unfinished sends
        """
        self.notifier = notifier
        self.route = route
        self.timeout = timeout

    def _send(self, event: AlertEvent) -> DispatchOutcome:
        try:
            status = self.notifier.send(self.route.destination, self.route.sender, event.message_text)
        except Exception as e:
            logger.warning(f"Alert for {event.stream_id} failed: {e}")
            return Failed(error_detail=str(e) or type(e).__name__)

        logger.info(f"Alert: {event.message_text} => {status}")
        return Delivered(transport_status=status)

    def dispatch(self, events: Sequence[AlertEvent]) -> list[DispatchOutcome]:
        """
        Deliver events concurrently.

        Returns:
            One outcome per event, in input order. Sends still running when
            the timeout expires are reported as Failed and left to finish in
            the background.
        """
        if not events:
            return []

        start = time.monotonic()
        executor = ThreadPoolExecutor(
            max_workers=len(events), thread_name_prefix="hostwatch-alert"
        )
        try:
            futures = [executor.submit(self._send, event) for event in events]
            wait(futures, timeout=self.timeout)
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        outcomes: list[DispatchOutcome] = []
        for event, future in zip(events, futures):
            if future.done() and not future.cancelled():
                outcomes.append(future.result())
            else:
                logger.warning(
                    f"Alert for {event.stream_id} timed out after {self.timeout:.1f}s"
                )
                outcomes.append(Failed(error_detail=f"timed out after {self.timeout:.1f}s"))

        delivered = sum(1 for o in outcomes if o.ok)
        logger.debug(
            f"Dispatched {len(outcomes)} alert(s), {delivered} delivered, "
            f"in {time.monotonic() - start:.2f}s"
        )
        return outcomes
