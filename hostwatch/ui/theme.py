"""
hostwatch UI Theme - Color constants and styling definitions.
"""

from rich.style import Style
from rich.theme import Theme

COLORS = {
    "success": "#22c55e",
    "error": "#ef4444",
    "info": "#3b82f6",
    "alert": "#f97316",
    "secondary": "#6b7280",
    "primary": "#ffffff",
    "brand": "#06b6d4",
    "panel_border": "#4b5563",
    "muted": "#9ca3af",
}

SYMBOLS = {
    "error": "✗",
    "info": "●",
    "alert": "🚨",
}

HOSTWATCH_THEME = Theme({
    "success": Style(color=COLORS["success"], bold=True),
    "error": Style(color=COLORS["error"], bold=True),
    "info": Style(color=COLORS["info"]),
    "alert": Style(color=COLORS["alert"], bold=True),
    "secondary": Style(color=COLORS["secondary"], dim=True),
    "primary": Style(color=COLORS["primary"]),
    "brand": Style(color=COLORS["brand"], bold=True),
    "muted": Style(color=COLORS["muted"]),
    "panel_border": Style(color=COLORS["panel_border"]),
    "info_symbol": Style(color=COLORS["info"]),
})
