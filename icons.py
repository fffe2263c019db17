"""Icon resolution: registry lookup, color cascade and CSS output.

A call runs the cascade color <- config.color, fill_color <- color,
stroke_color <- color, url <- config.url. Problems never raise. Each one is
logged and reported as an IconWarning subclass, then the call degrades to a
fallback.
"""

import logging
import re
import warnings
from collections import OrderedDict
from dataclasses import dataclass
from numbers import Real
from typing import Any, List, Optional, Sequence, Union

from color import BLACK, encode_color, format_number, parse_color
from registry import Registry
from utils import IconConfig

DEFAULT_POSITION = "0 50%"
DEFAULT_SIZE = "2rem 2rem"
DEFAULT_REPEAT = "no-repeat"


class _Default:
    def __repr__(self):
        return "DEFAULT"


# Marks an argument the caller left out. None is a real value: "do not recolor".
DEFAULT: Any = _Default()

CssValue = Union[str, Real, Sequence[Union[str, Real]]]
QUOTED_RE = re.compile(r"""(["'])(.*?)\1""")


class IconWarning(UserWarning):
    pass


class NotFoundWarning(IconWarning):
    pass


class InvalidColorWarning(IconWarning):
    pass


def wrap_url(data: str) -> str:
    return f'url("{data}")'


def css_value(value: CssValue) -> str:
    """Render a position/size/repeat argument as a bare CSS token list."""
    if isinstance(value, str):
        return " ".join(QUOTED_RE.sub(r"\2", value).split())
    if isinstance(value, Real) and not isinstance(value, bool):
        return format_number(value)
    if isinstance(value, (list, tuple)):
        return " ".join(css_value(v) for v in value)
    raise TypeError(f"Unsupported CSS value {value!r}")


@dataclass(frozen=True)
class StyleBundle:
    image: Optional[str]
    repeat: str
    position: str
    size: str

    def declarations(self) -> "OrderedDict[str, str]":
        decls = OrderedDict()
        if self.image is not None:
            decls["background-image"] = self.image
        decls["background-repeat"] = self.repeat
        decls["background-position"] = self.position
        decls["background-size"] = self.size
        return decls

    def to_css(self, selector: str, indent: str = "  ") -> str:
        body = "".join(f"{indent}{prop}: {value};\n" for prop, value in self.declarations().items())
        return f"{selector} {{\n{body}}}\n"


def _warn(message: str, category, stacklevel: int):
    # Every call is logged, even when the warnings filter drops a repeat.
    logging.warning(message)
    warnings.warn(message, category, stacklevel=stacklevel + 1)


class IconResolver:
    def __init__(self, registry: Registry, config: IconConfig = IconConfig()):
        self.registry = registry
        self.config = config

    def _encode_channel(self, icon: str, kind: str, value: Any, stacklevel: int) -> Optional[str]:
        if value is None:
            return None
        parsed = parse_color(value)
        if parsed is None:
            _warn(
                f"{kind} {value!r} for icon {icon} is not a valid color, defaulting to black",
                InvalidColorWarning,
                stacklevel + 1,
            )
            parsed = BLACK
        return encode_color(parsed)

    def _resolve(self, icon, color, fill_color, stroke_color, url, stacklevel: int) -> Optional[str]:
        # stacklevel is what warnings.warn would need here to point at the public caller.
        if color is DEFAULT:
            color = self.config.color
        if fill_color is DEFAULT:
            fill_color = color
        if stroke_color is DEFAULT:
            stroke_color = color
        if url is DEFAULT:
            url = self.config.url

        if not isinstance(icon, str):
            _warn(
                f"Icon {icon!r} not found, check that it is spelled correctly",
                NotFoundWarning,
                stacklevel,
            )
            return None

        entry = self.registry.lookup(icon)
        if entry is None:
            _warn(f"Icon {icon} does not exist", NotFoundWarning, stacklevel)
            return None

        if color is not None and parse_color(color) is None:
            _warn(
                f"Color {color!r} for icon {icon} is not valid, defaulting to black",
                InvalidColorWarning,
                stacklevel,
            )
            fill = stroke = encode_color(BLACK)
        else:
            fill = self._encode_channel(icon, "Fill color", fill_color, stacklevel)
            stroke = self._encode_channel(icon, "Stroke color", stroke_color, stacklevel)

        logging.debug(f"Resolving {icon} with fill={fill} stroke={stroke} url={url}")
        data = entry.template(fill, stroke)
        return wrap_url(data) if url else data

    def resolve_icon(
        self,
        icon: Any,
        color: Any = DEFAULT,
        fill_color: Any = DEFAULT,
        stroke_color: Any = DEFAULT,
        url: Any = DEFAULT,
    ) -> Optional[str]:
        """Return the image for icon, or None after a NotFoundWarning.

        color/fill_color/stroke_color take a Color, a CSS color string, an
        (r, g, b[, a]) tuple, or None to keep the icon's embedded colors.

        An invalid color makes both fill and stroke black. Otherwise fill and
        stroke resolve separately, so color=None with fill_color="red"
        recolors the fill and leaves the stroke as drawn.
        """
        return self._resolve(icon, color, fill_color, stroke_color, url, stacklevel=3)

    def list_icons(self, folder: Optional[str] = None) -> List[str]:
        """Names of icons in folder, in registry order. None selects top-level icons."""
        return [name for name, entry in self.registry.entries() if entry.folder == folder]

    def compose_icon_style(
        self,
        icon: Any,
        color: Any = DEFAULT,
        position: CssValue = DEFAULT_POSITION,
        size: CssValue = DEFAULT_SIZE,
        repeat: CssValue = DEFAULT_REPEAT,
        fill_color: Any = DEFAULT,
        stroke_color: Any = DEFAULT,
    ) -> StyleBundle:
        image = self._resolve(icon, color, fill_color, stroke_color, url=True, stacklevel=3)
        return StyleBundle(
            image=image,
            repeat=css_value(repeat),
            position=css_value(position),
            size=css_value(size),
        )
