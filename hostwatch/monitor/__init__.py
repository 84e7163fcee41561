"""
hostwatch Monitor Module

Sampling, hysteresis detection and alert dispatch for host CPU and memory.
"""

from hostwatch.monitor.detector import (
    AlertEvent,
    HysteresisDetector,
    StreamId,
    StreamKind,
    StreamState,
)
from hostwatch.monitor.dispatcher import (
    AlertDispatcher,
    AlertRoute,
    Delivered,
    DispatchOutcome,
    Failed,
)
from hostwatch.monitor.loop import MonitorLoop, MonitorStats, TickResult
from hostwatch.monitor.sampler import (
    MetricSampler,
    PsutilStatsProvider,
    Snapshot,
    SystemStatsProvider,
)

__all__ = [
    "AlertDispatcher",
    "AlertEvent",
    "AlertRoute",
    "Delivered",
    "DispatchOutcome",
    "Failed",
    "HysteresisDetector",
    "MetricSampler",
    "MonitorLoop",
    "MonitorStats",
    "PsutilStatsProvider",
    "Snapshot",
    "StreamId",
    "StreamKind",
    "StreamState",
    "SystemStatsProvider",
    "TickResult",
]
