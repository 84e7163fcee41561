"""
Unit Tests for the metric sampler

Tests Snapshot, MetricSampler error mapping and the psutil-backed provider.
"""

from unittest.mock import MagicMock, patch

import psutil
import pytest

from hostwatch.errors import ProviderUnavailable
from hostwatch.monitor.sampler import (
    MetricSampler,
    PsutilStatsProvider,
    Snapshot,
    SystemInfo,
    describe_system,
)


class TestSnapshot:
    """Tests for the Snapshot dataclass."""

    def test_derived_values(self, make_snapshot):
        snapshot = make_snapshot(cpu=(10.0, 20.0, 30.0, 40.0), used=6, total=8)

        assert snapshot.cpu_count == 4
        assert snapshot.memory_percent == pytest.approx(75.0)

    def test_zero_total_memory(self, make_snapshot):
        assert make_snapshot(used=0, total=0).memory_percent == pytest.approx(0.0)

    def test_immutable(self, make_snapshot):
        snapshot = make_snapshot()
        with pytest.raises(AttributeError):
            snapshot.memory_used = 1


class TestMetricSampler:
    """Tests for MetricSampler."""

    def test_sample_reads_provider(self, fake_provider, fixed_clock):
        provider = fake_provider([((12.5, 99.0), 300, 1000)], hostname="db-02")
        sampler = MetricSampler(provider, clock=fixed_clock)

        snapshot = sampler.sample()

        assert isinstance(snapshot, Snapshot)
        assert snapshot.timestamp == fixed_clock()
        assert snapshot.hostname == "db-02"
        assert snapshot.cpu_usages == (12.5, 99.0)
        assert snapshot.memory_used == 300
        assert snapshot.memory_total == 1000

    def test_prime_then_sample_refresh_order(self, fake_provider):
        provider = fake_provider([((1.0,), 1, 2)])
        sampler = MetricSampler(provider)

        sampler.prime()
        sampler.sample()

        assert provider.calls == ["refresh_cpu", "refresh_all"]

    def test_default_clock_is_utc(self, fake_provider):
        sampler = MetricSampler(fake_provider([((1.0,), 1, 2)]))
        snapshot = sampler.sample()
        assert snapshot.timestamp.utcoffset().total_seconds() == 0

    def test_provider_unavailable_propagates(self, fake_provider):
        provider = fake_provider([ProviderUnavailable("collector offline")])
        sampler = MetricSampler(provider)

        with pytest.raises(ProviderUnavailable, match="collector offline"):
            sampler.sample()

    def test_other_errors_become_provider_unavailable(self, fake_provider):
        provider = fake_provider([OSError("permission denied")])
        sampler = MetricSampler(provider)

        with pytest.raises(ProviderUnavailable, match="permission denied"):
            sampler.sample()

    def test_no_cores_is_unavailable(self, fake_provider):
        sampler = MetricSampler(fake_provider([((), 1, 2)]))

        with pytest.raises(ProviderUnavailable, match="no CPU cores"):
            sampler.sample()

    def test_prime_error_becomes_provider_unavailable(self):
        provider = MagicMock()
        provider.refresh_cpu.side_effect = RuntimeError("boom")
        sampler = MetricSampler(provider)

        with pytest.raises(ProviderUnavailable, match="boom"):
            sampler.prime()


class TestPsutilStatsProvider:
    """Tests for the psutil-backed provider."""

    def test_read_before_refresh_is_unavailable(self):
        provider = PsutilStatsProvider()

        with pytest.raises(ProviderUnavailable):
            provider.cpu_usages()
        with pytest.raises(ProviderUnavailable):
            provider.used_memory()
        with pytest.raises(ProviderUnavailable):
            provider.total_memory()

    @patch("hostwatch.monitor.sampler.psutil")
    def test_refresh_all_captures_readings(self, mock_psutil):
        mem = MagicMock()
        mem.used = 8 * 1024**3
        mem.total = 16 * 1024**3
        mock_psutil.virtual_memory.return_value = mem
        mock_psutil.cpu_percent.return_value = [45, 97.5]

        provider = PsutilStatsProvider()
        provider.refresh_all()

        mock_psutil.cpu_percent.assert_called_with(interval=None, percpu=True)
        assert provider.cpu_usages() == [45.0, 97.5]
        assert provider.used_memory() == 8 * 1024**3
        assert provider.total_memory() == 16 * 1024**3

    @patch("hostwatch.monitor.sampler.psutil")
    def test_refresh_cpu_only_resets_baseline(self, mock_psutil):
        provider = PsutilStatsProvider()
        provider.refresh_cpu()

        mock_psutil.cpu_percent.assert_called_once_with(interval=None, percpu=True)
        mock_psutil.virtual_memory.assert_not_called()
        with pytest.raises(ProviderUnavailable):
            provider.cpu_usages()

    @patch("hostwatch.monitor.sampler.socket.gethostname", return_value="edge-7")
    def test_hostname(self, _mock_hostname):
        assert PsutilStatsProvider().hostname() == "edge-7"


class TestDescribeSystem:
    """Tests for the startup system description."""

    @patch("hostwatch.monitor.sampler.platform")
    @patch("hostwatch.monitor.sampler.psutil")
    def test_describe_system(self, mock_psutil, mock_platform):
        mock_platform.system.return_value = "Linux"
        mock_platform.release.return_value = "6.8.0"
        mock_platform.version.return_value = "#1 SMP"
        mock_psutil.cpu_count.return_value = 8
        mock_psutil.virtual_memory.return_value.total = 32 * 1024**3
        mock_psutil.swap_memory.return_value.total = 2 * 1024**3 + 5

        info = describe_system()

        assert isinstance(info, SystemInfo)
        assert info.os_name == "Linux"
        assert info.kernel_version == "6.8.0"
        assert info.cpu_count == 8
        assert info.memory_gib == 32
        assert info.swap_gib == 2

    @patch("hostwatch.monitor.sampler.psutil")
    def test_describe_system_failure(self, mock_psutil):
        mock_psutil.Error = psutil.Error
        mock_psutil.virtual_memory.side_effect = OSError("no /proc")

        with pytest.raises(ProviderUnavailable, match="no /proc"):
            describe_system()

    @patch("hostwatch.monitor.sampler.psutil")
    def test_describe_system_psutil_error(self, mock_psutil):
        mock_psutil.Error = psutil.Error
        mock_psutil.swap_memory.side_effect = psutil.AccessDenied(msg="swap hidden")

        with pytest.raises(ProviderUnavailable, match="Cannot describe system"):
            describe_system()
