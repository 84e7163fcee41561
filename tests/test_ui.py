"""
Tests for the hostwatch terminal UI

Output is captured by swapping the shared console's rich Console for a
recording one.
"""

import pytest
from rich.console import Console as RichConsole

import hostwatch.ui as ui
from hostwatch.monitor.loop import MonitorStats
from hostwatch.ui.console import HostwatchConsole, console
from hostwatch.ui.theme import HOSTWATCH_THEME


@pytest.fixture
def recorded(monkeypatch):
    rich_console = RichConsole(record=True, theme=HOSTWATCH_THEME, width=100, color_system=None)
    monkeypatch.setattr(console, "_console", rich_console)
    return rich_console


class TestConsole:
    """Tests for the themed console singleton."""

    def test_singleton(self):
        assert HostwatchConsole() is console

    def test_alert(self, recorded):
        console.alert("web-01: High CPU0 usage: 97.2%")
        assert "High CPU0 usage: 97.2%" in recorded.export_text()

    def test_info(self, recorded):
        console.info("Monitoring every 1.0s")
        assert "Monitoring every 1.0s" in recorded.export_text()

    def test_exports(self):
        assert sorted(ui.__all__) == [
            "console",
            "show_error",
            "summary_panel",
            "system_panel",
            "welcome_banner",
        ]


class TestPanels:
    """Tests for the banner, summary and error panels."""

    def test_summary_panel(self, recorded):
        ui.summary_panel(MonitorStats(ticks=4, alerts_raised=2, alerts_delivered=1, alerts_failed=1))
        text = recorded.export_text()
        assert "Ticks: 4" in text
        assert "Failed: 1" in text

    def test_show_error(self, recorded):
        ui.show_error("Invalid configuration", "cycles_for_alert must be at least 1", suggested_fix="Use 1 or more")
        text = recorded.export_text()
        assert "Invalid configuration" in text
        assert "Use 1 or more" in text
