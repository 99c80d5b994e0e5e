"""Color utilities for CSS to ODF conversion."""

import math
import re
from typing import List, Optional, Tuple

HEX_COLOR = re.compile(r"^#([0-9a-f]{3,8})$", re.IGNORECASE)
RGB_FUNCTION = re.compile(r"^rgba?\(([^)]*)\)$", re.IGNORECASE)

NAMED_COLORS = {
    'black': '#000000',
    'white': '#ffffff',
    'red': '#ff0000',
    'green': '#008000',
    'blue': '#0000ff',
    'yellow': '#ffff00',
    'cyan': '#00ffff',
    'magenta': '#ff00ff',
    'gray': '#808080',
    'grey': '#808080',
    'orange': '#ffa500',
    'purple': '#800080',
    'brown': '#a52a2a',
    'pink': '#ffc0cb',
    'navy': '#000080',
    'maroon': '#800000',
    'olive': '#808000',
    'teal': '#008080',
    'silver': '#c0c0c0',
    'lime': '#00ff00',
    'aqua': '#00ffff',
    'fuchsia': '#ff00ff',
}


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _parse_channel(part: str) -> int:
    """Parse one rgb() channel; unparsable channels count as 0."""
    part = part.strip()
    try:
        if part.endswith('%'):
            number = float(part[:-1])
            if not math.isfinite(number):
                return 0
            return _round_half_up(number / 100.0 * 255)
        number = float(part)
        if not math.isfinite(number):
            return 0
        return _round_half_up(number)
    except ValueError:
        return 0


def _split_channels(inner: str) -> List[str]:
    # rgb(1, 2, 3) and rgb(1 2 3 / 50%) both appear in computed styles
    if ',' in inner:
        return [part for part in inner.split(',')]
    return [part for part in re.split(r"[\s/]+", inner.strip()) if part]


def rgb_to_hex(rgb: Tuple[int, int, int]) -> str:
    """Convert an RGB triple to #rrggbb, clamping every channel to [0, 255]."""
    return '#' + ''.join(f"{max(0, min(255, int(c))):02x}" for c in rgb)


def normalize_color(value: Optional[str], default: Optional[str] = None) -> Optional[str]:
    """
    Normalize a CSS color to a lower-case 6-digit hex string.

    Args:
        value: CSS color (#rgb, #rgba, #rrggbb, #rrggbbaa, rgb(), rgba() or a basic name)
        default: Value returned when the color cannot be parsed

    Returns:
        Color like "#aabbcc", or default when unparsable
    """
    if not value or not isinstance(value, str):
        return default

    trimmed = value.strip().lower()
    if not trimmed:
        return default

    match = HEX_COLOR.match(trimmed)
    if match:
        digits = match.group(1)
        if len(digits) in (3, 4):
            # Alpha digit of #rgba is not representable downstream
            return '#' + ''.join(c * 2 for c in digits[:3])
        if len(digits) in (6, 8):
            return '#' + digits[:6]
        return default

    match = RGB_FUNCTION.match(trimmed)
    if match:
        channels = _split_channels(match.group(1))
        if len(channels) < 3:
            return default
        r, g, b = (_parse_channel(part) for part in channels[:3])
        return rgb_to_hex((r, g, b))

    if trimmed in NAMED_COLORS:
        return NAMED_COLORS[trimmed]

    return default
