"""hostwatch UI - Terminal output components."""

from .console import console
from .errors import show_error
from .panels import welcome_banner, system_panel, summary_panel

__all__ = ["console", "show_error", "welcome_banner", "system_panel", "summary_panel"]
