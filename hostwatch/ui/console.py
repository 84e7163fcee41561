"""hostwatch Console - Themed console singleton used by the launcher and dry-run alerts."""

from typing import Optional

from rich.console import Console as RichConsole

from .theme import HOSTWATCH_THEME, SYMBOLS


class HostwatchConsole:
    """Themed console shared by every hostwatch UI component."""

    _instance: Optional['HostwatchConsole'] = None

    def __new__(cls) -> 'HostwatchConsole':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._console = RichConsole(theme=HOSTWATCH_THEME)
        return cls._instance

    @property
    def rich(self) -> RichConsole:
        """Underlying rich console, for RichHandler logging."""
        return self._console

    def print(self, *args, **kwargs) -> None:
        self._console.print(*args, **kwargs)

    def info(self, message: str) -> None:
        self._console.print(f"[info_symbol]{SYMBOLS['info']}[/] [info]{message}[/]")

    def alert(self, message: str) -> None:
        self._console.print(f"{SYMBOLS['alert']} [alert]{message}[/]")

    def blank(self) -> None:
        self._console.print()

    def rule(self, title: str = "") -> None:
        self._console.rule(title, style="panel_border")


console = HostwatchConsole()
