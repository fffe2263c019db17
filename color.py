"""Color values and their URI-safe encoding.

The encoder rounds each channel half away from zero, so 20.5 becomes 21 and
30.5 becomes 31. The result is visible in every generated data URI.
"""

import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from numbers import Real
from typing import Any, Optional, Union
from urllib.parse import quote

import webcolors

Number = Union[int, float]

# webcolors reads #rgb and #rrggbb; the alpha digits of #rgba/#rrggbbaa are split off here.
ALPHA_HEX_RE = re.compile(r"^(#[0-9a-fA-F]{3})([0-9a-fA-F])$|^(#[0-9a-fA-F]{6})([0-9a-fA-F]{2})$")
_NUM = r"([+-]?(?:\d+\.?\d*|\.\d+))"
RGB_RE = re.compile(
    rf"^rgba?\(\s*{_NUM}\s*,\s*{_NUM}\s*,\s*{_NUM}\s*(?:,\s*{_NUM}\s*)?\)$",
    re.IGNORECASE,
)


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


@dataclass(frozen=True)
class Color:
    red: Number
    green: Number
    blue: Number
    alpha: Number = 1.0

    def __post_init__(self):
        for channel in (self.red, self.green, self.blue):
            if not _is_number(channel) or not 0 <= channel <= 255:
                raise ValueError(f"Color channel must be a number in [0, 255], got {channel!r}")
        if not _is_number(self.alpha) or not 0 <= self.alpha <= 1:
            raise ValueError(f"Color alpha must be a number in [0, 1], got {self.alpha!r}")

    @property
    def opaque(self) -> bool:
        return self.alpha == 1


BLACK = Color(0, 0, 0)


def _parse_hex(text: str) -> Color:
    alpha = 1.0
    m = ALPHA_HEX_RE.match(text)
    if m:
        text, digits = (m.group(1), m.group(2)) if m.group(1) else (m.group(3), m.group(4))
        alpha = int(digits * (2 // len(digits)), 16) / 255
    rgb = webcolors.hex_to_rgb(text)
    return Color(rgb.red, rgb.green, rgb.blue, alpha=alpha)


def parse_color(value: Any) -> Optional[Color]:
    """Interpret value as a color, or return None if it is not one.

    Accepts Color instances, (r, g, b) and (r, g, b, a) tuples, hex strings,
    rgb()/rgba() strings, CSS3 color names and "transparent".
    """
    if isinstance(value, Color):
        return value

    try:
        if isinstance(value, tuple):
            if len(value) in (3, 4):
                return Color(*value)
            return None

        if not isinstance(value, str):
            return None

        text = value.strip()
        if text.startswith("#"):
            return _parse_hex(text)

        m = RGB_RE.match(text)
        if m:
            r, g, b, a = m.groups()
            channels = [float(c) if "." in c else int(c) for c in (r, g, b)]
            if a is None:
                return Color(*channels)
            return Color(*channels, alpha=float(a))

        if text.lower() == "transparent":
            return Color(0, 0, 0, 0)

        rgb = webcolors.name_to_rgb(text)
        return Color(rgb.red, rgb.green, rgb.blue)
    except ValueError:
        return None


def round_channel(value: Number) -> int:
    """Round half away from zero."""
    return int(Decimal(str(value)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def format_number(value: Number) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return repr(value) if isinstance(value, float) else str(value)


def encode_color(color: Color) -> str:
    """Return color as a percent-escaped rgb()/rgba() string for data URIs."""
    r, g, b = (round_channel(c) for c in (color.red, color.green, color.blue))
    if color.opaque:
        text = f"rgb({r},{g},{b})"
    else:
        text = f"rgba({r},{g},{b},{format_number(color.alpha)})"
    return quote(text, safe="")
