import argparse
import logging
import signal
import sys

from rich.logging import RichHandler

from hostwatch import __version__
from hostwatch.config import load_config, load_notifier_settings
from hostwatch.env_loader import load_env
from hostwatch.errors import ConfigurationInvalid, ProviderUnavailable
from hostwatch.monitor import (
    AlertDispatcher,
    AlertRoute,
    MetricSampler,
    MonitorLoop,
    PsutilStatsProvider,
)
from hostwatch.monitor.sampler import describe_system
from hostwatch.notify import build_notifier
from hostwatch.ui import console, show_error, summary_panel, system_panel, welcome_banner

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console.rich, rich_tracebacks=True, show_path=verbose)],
        force=True,
    )
    # Suppress noisy log messages in normal operation
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hostwatch",
        description="Alert on sustained high CPU or memory usage via WhatsApp",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  hostwatch                              # Monitor with defaults (~/.hostwatch/config.yaml if present)
  hostwatch --dry-run                    # Print alerts instead of sending them
  hostwatch --cpu-threshold 95 --cycles-for-alert 30
  hostwatch --config /etc/hostwatch.yaml

Environment Variables:
  WA_SENDER           WhatsApp sender number registered with Infobip
  WA_DESTINATION      WhatsApp number that receives alerts
  IB_API_KEY          Infobip API key
  IB_BASE_URL         Infobip base URL (default: https://api.infobip.com)
  HOSTWATCH_*         Threshold overrides (see README)
        """,
    )

    parser.add_argument("--version", "-V", action="version", version=f"hostwatch {__version__}")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug logging")
    parser.add_argument("--config", "-c", metavar="PATH", help="YAML configuration file")
    parser.add_argument(
        "--dry-run", action="store_true", help="Print alerts to the terminal instead of sending"
    )
    parser.add_argument("--cpu-threshold", type=float, help="Per-core CPU usage percent")
    parser.add_argument("--mem-threshold", type=int, help="Memory usage percent")
    parser.add_argument(
        "--cycles-for-alert", type=int, help="Consecutive high ticks before alerting"
    )
    parser.add_argument(
        "--cycles-between-alert", type=int, help="Recovered ticks required before re-alerting"
    )
    parser.add_argument("--interval", type=float, help="Seconds between samples")
    parser.add_argument("--dispatch-timeout", type=float, help="Seconds to wait for alert delivery")
    parser.add_argument("--ticks", type=int, help=argparse.SUPPRESS)

    return parser


def _overrides(args: argparse.Namespace) -> dict:
    return {
        "cpu_usage_threshold": args.cpu_threshold,
        "mem_usage_threshold_percent": args.mem_threshold,
        "cycles_for_alert": args.cycles_for_alert,
        "cycles_between_alert": args.cycles_between_alert,
        "refresh_interval": args.interval,
        "dispatch_timeout": args.dispatch_timeout,
    }


def main(argv: list[str] | None = None) -> int:
    # Load .env files before any configuration is read
    load_env()

    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        config = load_config(args.config, overrides=_overrides(args))
        settings = load_notifier_settings(require_route=not args.dry_run)
    except ConfigurationInvalid as e:
        show_error(
            "Invalid configuration",
            str(e),
            suggested_fix="Set WA_SENDER, WA_DESTINATION and IB_API_KEY, or run with --dry-run",
        )
        return 1

    welcome_banner()

    sampler = MetricSampler(PsutilStatsProvider())
    try:
        system_panel(describe_system())
        # Stats must be readable before the loop starts
        sampler.prime()
        sampler.sample()
    except ProviderUnavailable as e:
        show_error("System stats unavailable", str(e))
        return 1

    notifier = build_notifier(settings, dry_run=args.dry_run)
    dispatcher = AlertDispatcher(
        notifier,
        AlertRoute(sender=settings.sender, destination=settings.destination),
        timeout=config.dispatch_timeout,
    )
    loop = MonitorLoop.from_config(config, sampler, dispatcher)

    def _handle_signal(signum, _frame):
        logger.info(f"Received signal {signum}, stopping after the current tick")
        loop.stop()

    previous_handlers = {
        sig: signal.signal(sig, _handle_signal) for sig in (signal.SIGINT, signal.SIGTERM)
    }

    console.info(
        f"Checking for system anomalies every {config.refresh_interval:g}s "
        f"(CPU > {config.cpu_usage_threshold:g}%, memory > {config.mem_usage_threshold_percent}%)"
    )
    try:
        stats = loop.run(max_ticks=args.ticks)
    finally:
        notifier.close()
        for sig, handler in previous_handlers.items():
            signal.signal(sig, handler)

    summary_panel(stats)
    return 0


if __name__ == "__main__":
    sys.exit(main())
