"""hostwatch Panels - startup banner and session summary."""

from rich.panel import Panel

from .console import console


def welcome_banner() -> None:
    console.rule("[brand]hostwatch[/]")
    console.print("[muted]WhatsApp alerts for sustained CPU and memory pressure[/]")
    console.blank()


def system_panel(info) -> None:
    """Print the host description (a hostwatch.monitor.sampler.SystemInfo)."""
    rows = [
        ("System", f"{info.os_name} {info.kernel_version}"),
        ("OS version", info.os_version),
        ("Host name", info.hostname),
        ("CPUs", str(info.cpu_count)),
        ("Memory", f"{info.memory_gib} GiB"),
        ("Swap", f"{info.swap_gib} GiB"),
    ]
    width = max(len(label) for label, _ in rows) + 1
    lines = [f"[muted]{label + ':':<{width}}[/] {value}" for label, value in rows]
    console.print(Panel("\n".join(lines), title="[brand]─ SYSTEM [/]", border_style="brand", padding=(1, 2)))


def summary_panel(stats) -> None:
    """Print session counters (a hostwatch.monitor.loop.MonitorStats)."""
    lines = [
        f"[muted]Ticks:[/] {stats.ticks}",
        f"[muted]Skipped ticks:[/] {stats.skipped_ticks}",
        f"[muted]Alerts raised:[/] {stats.alerts_raised}",
        f"[muted]Delivered:[/] [success]{stats.alerts_delivered}[/]",
        f"[muted]Failed:[/] [error]{stats.alerts_failed}[/]" if stats.alerts_failed else "[muted]Failed:[/] 0",
    ]
    console.print(Panel("\n".join(lines), title="─ SESSION ", border_style="panel_border", padding=(1, 2)))
