"""
Metric Sampler for hostwatch

Turns a SystemStatsProvider into one immutable Snapshot per tick.

Important Notes:
    - CPU usage is PER CORE; memory is system-wide
    - CPU percentages are deltas, so a reading is only meaningful after
      prime() and one elapsed interval (the monitor loop does this)
    - Disk, network and process metrics are not collected

Author: hostwatch Team
SPDX-License-Identifier: Apache-2.0
"""

import logging
import platform
import socket
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Protocol

import psutil

from hostwatch.errors import ProviderUnavailable

logger = logging.getLogger(__name__)

BYTES_PER_GIB = 1024**3


class SystemStatsProvider(Protocol):
    """Source of raw host metrics, refreshed on demand."""

    def refresh_cpu(self) -> None: ...

    def refresh_all(self) -> None: ...

    def cpu_usages(self) -> Sequence[float]: ...

    def used_memory(self) -> int: ...

    def total_memory(self) -> int: ...

    def hostname(self) -> str: ...


@dataclass(frozen=True)
class Snapshot:
    """Host metrics for a single tick."""

    timestamp: datetime
    hostname: str
    cpu_usages: tuple[float, ...]
    memory_used: int
    memory_total: int

    @property
    def cpu_count(self) -> int:
        return len(self.cpu_usages)

    @property
    def memory_percent(self) -> float:
        if self.memory_total <= 0:
            return 0.0
        return self.memory_used * 100 / self.memory_total


@dataclass(frozen=True)
class SystemInfo:
    """Static host description shown at startup."""

    os_name: str
    kernel_version: str
    os_version: str
    hostname: str
    cpu_count: int
    memory_total: int
    swap_total: int

    @property
    def memory_gib(self) -> int:
        return self.memory_total // BYTES_PER_GIB

    @property
    def swap_gib(self) -> int:
        return self.swap_total // BYTES_PER_GIB


class PsutilStatsProvider:
    """
    SystemStatsProvider backed by psutil.

    psutil.cpu_percent(interval=None) reports usage since its previous call,
    so refresh_cpu() only resets that baseline and refresh_all() captures the
    readings that the accessors return.
    """

    def __init__(self):
        self._cpu_usages: list[float] | None = None
        self._memory = None

    def refresh_cpu(self) -> None:
        psutil.cpu_percent(interval=None, percpu=True)

    def refresh_all(self) -> None:
        self._cpu_usages = [float(u) for u in psutil.cpu_percent(interval=None, percpu=True)]
        self._memory = psutil.virtual_memory()

    def cpu_usages(self) -> list[float]:
        if self._cpu_usages is None:
            raise ProviderUnavailable("CPU usage requested before the first refresh")
        return list(self._cpu_usages)

    def used_memory(self) -> int:
        if self._memory is None:
            raise ProviderUnavailable("Memory usage requested before the first refresh")
        return int(self._memory.used)

    def total_memory(self) -> int:
        if self._memory is None:
            raise ProviderUnavailable("Memory total requested before the first refresh")
        return int(self._memory.total)

    def hostname(self) -> str:
        return socket.gethostname()


def describe_system() -> SystemInfo:
    """Collect the static host description for the startup banner."""
    try:
        return SystemInfo(
            os_name=platform.system() or "unknown",
            kernel_version=platform.release() or "unknown",
            os_version=platform.version() or "unknown",
            hostname=socket.gethostname(),
            cpu_count=psutil.cpu_count(logical=True) or 0,
            memory_total=int(psutil.virtual_memory().total),
            swap_total=int(psutil.swap_memory().total),
        )
    except (OSError, RuntimeError, psutil.Error) as e:
        raise ProviderUnavailable(f"Cannot describe system: {e}") from e


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class MetricSampler:
    """
    Produces Snapshots from a SystemStatsProvider.

    Example:
        sampler = MetricSampler(PsutilStatsProvider())
        sampler.prime()
        time.sleep(1)
        snapshot = sampler.sample()
        print(snapshot.cpu_usages)
    """

    def __init__(
        self,
        provider: SystemStatsProvider,
        clock: Callable[[], datetime] | None = None,
    ):
        """
        Args:
            provider: Stats source
            clock: Returns the timestamp stamped on each snapshot (default: now, UTC)
        """
        self.provider = provider
        self._clock = clock or _utc_now

    def prime(self) -> None:
        """Reset the CPU measurement baseline ahead of the next sample()."""
        try:
            self.provider.refresh_cpu()
        except ProviderUnavailable:
            raise
        except Exception as e:
            raise ProviderUnavailable(f"CPU refresh failed: {e}") from e

    def sample(self) -> Snapshot:
        """
        Refresh the provider and read a Snapshot.

        Raises:
            ProviderUnavailable: if the provider cannot produce a reading
        """
        try:
            self.provider.refresh_all()
            cpu_usages = tuple(float(u) for u in self.provider.cpu_usages())
            memory_used = int(self.provider.used_memory())
            memory_total = int(self.provider.total_memory())
            hostname = self.provider.hostname()
        except ProviderUnavailable:
            raise
        except Exception as e:
            raise ProviderUnavailable(f"Failed to read system stats: {e}") from e

        if not cpu_usages:
            raise ProviderUnavailable("Provider reported no CPU cores")

        snapshot = Snapshot(
            timestamp=self._clock(),
            hostname=hostname,
            cpu_usages=cpu_usages,
            memory_used=memory_used,
            memory_total=memory_total,
        )
        logger.debug(
            f"Sampled {snapshot.cpu_count} cores, memory {snapshot.memory_percent:.1f}%"
        )
        return snapshot
