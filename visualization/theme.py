"""Shared Plotly theme tokens for Stockroom visualizations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


@dataclass(frozen=True)
class ThemeTokens:
    label_font: str = "Inter"
    label_size: int = 12
    grid_color: str = "#E2E8F0"
    axis_color: str = "#64748B"
    text_color: str = "#64748B"
    tooltip_background: str = "#FFFFFF"
    tooltip_border: str = "#E2E8F0"
    tooltip_text: str = "#1E293B"
    items_added_color: str = "#22C55E"
    items_added_fill: str = "rgba(34, 197, 94, 0.25)"
    requests_color: str = "#F59E0B"
    requests_fill: str = "rgba(245, 158, 11, 0.25)"
    activity_color: str = "#3182CE"
    cost_bar_color: str = "#10B981"
    count_bar_color: str = "#22C55E"
    placeholder_note_color: str = "#94A3B8"


_LIGHT = ThemeTokens()
_DARK = ThemeTokens(
    grid_color="#334155",
    axis_color="#94A3B8",
    text_color="#CBD5E1",
    tooltip_background="#1E293B",
    tooltip_border="#334155",
    tooltip_text="#E2E8F0",
)


def theme_tokens(theme: Theme | str = Theme.LIGHT) -> ThemeTokens:
    """Return the visualization tokens for ``theme``.

    Unknown theme names fall back to the light palette.
    """

    try:
        resolved = Theme(theme)
    except ValueError:
        resolved = Theme.LIGHT
    return _DARK if resolved is Theme.DARK else _LIGHT
