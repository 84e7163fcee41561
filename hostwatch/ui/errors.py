"""hostwatch Errors - Structured error display with context and fixes."""

from typing import Dict, Optional

from rich.panel import Panel

from .console import console
from .theme import SYMBOLS


def show_error(title: str, message: str, context: Optional[Dict[str, str]] = None, suggested_fix: Optional[str] = None) -> None:
    lines = [f"[error]{SYMBOLS['error']} FAILED:[/] [primary]{title}[/]", "", f"  [error]Error:[/] {message}"]
    if context:
        lines.append("")
        for key, value in context.items():
            display_value = value if len(value) < 50 else value[:47] + "..."
            lines.append(f"  [secondary]{key}:[/] {display_value}")
    console.print(Panel("\n".join(lines), border_style="error", padding=(1, 2)))
    if suggested_fix:
        console.print(Panel(f"[primary]{suggested_fix}[/]", title="[success]─ SUGGESTED FIX [/]", border_style="success", padding=(0, 2)))
