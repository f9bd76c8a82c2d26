from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import matplotlib
import numpy as np
from matplotlib.colors import ListedColormap, to_hex

DEFAULT_PALETTES = {"light": "Set2", "dark": "tab10"}
UNKNOWN_COLORS = {"light": "#9ca3af", "dark": "#4b5563"}
FALLBACK_COLOR = "#3b82f6"
CONTINUOUS_SAMPLES = 10


@dataclass(slots=True, frozen=True)
class ThemeColors:
    foreground: str
    halo: str
    unknown: str


THEMES = {
    "light": ThemeColors(foreground="#1f2937", halo="white", unknown=UNKNOWN_COLORS["light"]),
    "dark": ThemeColors(foreground="#e5e7eb", halo="#111827", unknown=UNKNOWN_COLORS["dark"]),
}


def theme_colors(theme: str) -> ThemeColors:
    try:
        return THEMES[theme]
    except KeyError as exc:
        raise ValueError(f"Unsupported theme: {theme!r}.") from exc


def palette_colors(palette: str | Sequence[str] | None, theme: str = "light") -> list[str]:
    """Resolve a colormap name or explicit color list into hex strings."""
    if palette is None:
        if theme not in DEFAULT_PALETTES:
            raise ValueError(f"Unsupported theme: {theme!r}.")
        palette = DEFAULT_PALETTES[theme]
    if isinstance(palette, str):
        try:
            cmap = matplotlib.colormaps[palette]
        except KeyError as exc:
            raise ValueError(f"Unknown color palette: {palette!r}.") from exc
        if isinstance(cmap, ListedColormap) and len(cmap.colors) <= 20:
            return [to_hex(color) for color in cmap.colors]
        return [to_hex(color) for color in cmap(np.linspace(0.0, 1.0, CONTINUOUS_SAMPLES))]
    return [to_hex(color) for color in palette]


@dataclass(frozen=True)
class ColorScale:
    domain: tuple[str, ...]
    range: tuple[str, ...]
    unknown: str

    def __call__(self, key: str) -> str:
        try:
            return self.range[self.domain.index(key)]
        except ValueError:
            return self.unknown

    def as_dict(self) -> dict[str, str]:
        return dict(zip(self.domain, self.range))


def build_color_scale(
    series: Sequence[str],
    *,
    palette: str | Sequence[str] | None = None,
    theme: str = "light",
) -> ColorScale:
    """Assign palette colors to series in order, cycling when series outnumber colors."""
    colors = palette_colors(palette, theme)
    domain = tuple(series)
    if colors:
        assigned = tuple(colors[index % len(colors)] for index in range(len(domain)))
    else:
        assigned = tuple(FALLBACK_COLOR for _ in domain)
    return ColorScale(domain=domain, range=assigned, unknown=theme_colors(theme).unknown)
