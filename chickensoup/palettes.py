"""
Colour schemes for the soup.

Each scheme defines:
  - broth:     Background colour behind the droplets (RGB)
  - backdrop:  Window colour around the bowl (RGB)
  - oil_fill:  Semi-transparent droplet body (RGBA, alpha 0–255)
  - oil_rim:   Darker droplet outline (RGBA)
  - highlight: Centre colour of the specular glint (RGBA)

Droplets carry a small ``color_offset``; :func:`tint` turns it into a
slight hue shift so neighbouring droplets are not all identical.
"""

from __future__ import annotations

import colorsys
from dataclasses import dataclass
from typing import Dict, List, Tuple

RGB = Tuple[int, int, int]
RGBA = Tuple[int, int, int, int]


@dataclass(frozen=True)
class ColorScheme:
    """Immutable colour scheme for a bowl of soup."""
    name: str
    broth: RGB
    backdrop: RGB
    oil_fill: RGBA
    oil_rim: RGBA
    highlight: RGBA
    rim_width: float = 2.0

    @property
    def highlight_clear(self) -> RGBA:
        """Highlight colour at zero alpha (outer gradient stop)."""
        r, g, b, _ = self.highlight
        return (r, g, b, 0)


# ── Built-in schemes ─────────────────────────────────────────────────────

SCHEMES: Dict[str, ColorScheme] = {
    "golden": ColorScheme(
        name="Golden Broth",
        broth=(244, 196, 48), backdrop=(248, 213, 104),
        oil_fill=(255, 245, 150, 102), oil_rim=(218, 165, 32, 153),
        highlight=(255, 255, 255, 153),
    ),
    "consomme": ColorScheme(
        name="Clear Consommé",
        broth=(222, 176, 96), backdrop=(236, 204, 150),
        oil_fill=(255, 236, 180, 96), oil_rim=(176, 128, 50, 150),
        highlight=(255, 255, 255, 160),
    ),
    "miso": ColorScheme(
        name="Miso",
        broth=(196, 140, 72), backdrop=(214, 170, 112),
        oil_fill=(250, 220, 140, 110), oil_rim=(150, 96, 36, 160),
        highlight=(255, 250, 235, 150),
    ),
}

DEFAULT_SCHEME = "golden"


def _clamp_rgb(r: float, g: float, b: float) -> RGB:
    return (
        max(0, min(255, int(r * 255))),
        max(0, min(255, int(g * 255))),
        max(0, min(255, int(b * 255))),
    )


def tint(color: RGBA, offset: float) -> RGBA:
    """Shift the hue of *color* by a small fraction of the wheel.

    An offset of 0.2 moves the hue about 7°, enough to tell droplets
    apart without leaving the warm range.
    """
    if offset == 0:
        return color
    h, s, v = colorsys.rgb_to_hsv(color[0] / 255, color[1] / 255, color[2] / 255)
    r, g, b = colorsys.hsv_to_rgb((h + offset * 0.1) % 1.0, s, v)
    return _clamp_rgb(r, g, b) + (color[3],)


# ── Accessors ─────────────────────────────────────────────────────────────

def get_scheme(name: str) -> ColorScheme:
    if name not in SCHEMES:
        available = ", ".join(sorted(SCHEMES.keys()))
        raise KeyError(f"Unknown scheme '{name}'. Available: {available}")
    return SCHEMES[name]


def list_schemes() -> List[str]:
    return sorted(SCHEMES.keys())
