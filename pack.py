#!python3
"""Pack a registry manifest into a stylesheet of icon classes (library/icons.css)."""

import argparse
import logging
import warnings
from pathlib import Path
from typing import Optional

from icons import (
    DEFAULT,
    DEFAULT_POSITION,
    DEFAULT_REPEAT,
    DEFAULT_SIZE,
    IconResolver,
    IconWarning,
)
from registry import load_registry
from utils import IconConfig, icon_class_name, setup_logging

MANIFEST = Path("sources/icons.json")
OUTPUT = Path("library/icons.css")


def pack(
    resolver: IconResolver,
    folder: Optional[str] = DEFAULT,
    prefix: str = "icon",
    position: str = DEFAULT_POSITION,
    size: str = DEFAULT_SIZE,
    repeat: str = DEFAULT_REPEAT,
) -> str:
    """Return one CSS rule per icon, in registry order.

    folder limits output to one folder (None for top-level icons); leave it
    out to pack every icon.
    """
    if folder is DEFAULT:
        names = resolver.registry.names()
    else:
        names = resolver.list_icons(folder)

    rules = []
    for name in names:
        style = resolver.compose_icon_style(name, position=position, size=size, repeat=repeat)
        rules.append(style.to_css(f".{icon_class_name(name, prefix)}"))
    return "\n".join(rules)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Pack an icon registry into icons.css")
    parser.add_argument(
        "--manifest",
        type=Path,
        default=MANIFEST,
        help="Registry manifest written by compile_icons.py",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=OUTPUT,
        help="Output stylesheet",
    )
    parser.add_argument("--color", default=None, help="Recolor icons (CSS color)")
    parser.add_argument("--prefix", default="icon", help="Class name prefix")
    parser.add_argument(
        "--folder",
        default=DEFAULT,
        help="Only pack icons in this folder ('' for top-level icons)",
    )
    parser.add_argument("--position", default=DEFAULT_POSITION)
    parser.add_argument("--size", default=DEFAULT_SIZE)
    parser.add_argument("--repeat", default=DEFAULT_REPEAT)
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    setup_logging()
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)
    # Already logged by the resolver.
    warnings.simplefilter("ignore", IconWarning)

    resolver = IconResolver(load_registry(args.manifest), IconConfig(color=args.color))
    folder = None if args.folder == "" else args.folder
    css = pack(resolver, folder, args.prefix, args.position, args.size, args.repeat)

    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(css)
    print(f"Wrote icon classes to {args.output}")
