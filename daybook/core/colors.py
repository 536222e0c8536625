"""
Category color assignment
Picks an unused color from a fixed vivid palette, generating one when the palette runs out
"""

import random
from typing import Iterable, Optional

VIVID_COLORS = (
    "#FF6B6B", "#4ECDC4", "#FFD93D", "#6BCF7F", "#95A5A6",
    "#9B59B6", "#3498DB", "#E67E22", "#1ABC9C", "#E74C3C",
    "#F39C12", "#FF2D95", "#FF1493", "#2ECC71", "#FF6347",
    "#20B2AA", "#FF69B4", "#BA55D3", "#FF8C00", "#32CD32",
    "#DC143C", "#00CED1", "#FFD700", "#8A2BE2", "#FF4500",
    "#00FA9A", "#7B68EE", "#40E0D0",
)

DEFAULT_CATEGORY_COLOR = "#95A5A6"


def assign_color(used_colors: Iterable[str], rng: Optional[random.Random] = None) -> str:
    """Return a palette color not in ``used_colors``, or a generated one.

    The choice among the remaining palette entries is random so that new
    categories do not always walk the palette in the same order.
    """
    rng = rng or random
    used = {c.upper() for c in used_colors if c}
    available = [c for c in VIVID_COLORS if c.upper() not in used]

    if available:
        return rng.choice(available)

    return random_vivid_color(rng)


def random_vivid_color(rng: Optional[random.Random] = None) -> str:
    rng = rng or random
    hue = rng.randrange(0, 360)
    saturation = 70 + rng.randrange(0, 30)
    lightness = 50 + rng.randrange(0, 20)
    return hsl_to_hex(hue, saturation, lightness)


def hsl_to_hex(h: float, s: float, l: float) -> str:
    """Convert HSL (degrees, percent, percent) to ``#rrggbb``."""
    l /= 100
    a = s * min(l, 1 - l) / 100

    def channel(n: int) -> str:
        k = (n + h / 30) % 12
        color = l - a * max(min(k - 3, 9 - k, 1), -1)
        return f"{_round_half_up(255 * color):02x}"

    return f"#{channel(0)}{channel(8)}{channel(4)}"


def _round_half_up(value: float) -> int:
    # round() is banker's rounding, channels round .5 upwards
    return int(value + 0.5)
