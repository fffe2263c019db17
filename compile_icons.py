#!python3
"""Compile a directory of SVG icons into a registry manifest (sources/icons.json)."""

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from lxml import etree
from tqdm import tqdm

from registry import IconEntry, Registry, save_registry
from svg import compile_svg
from utils import setup_logging

SOURCES = Path("sources/svg/")
MANIFEST = Path("sources/icons.json")


def get_icon_folder(path: Path, root: Path) -> Optional[str]:
    """Icons directly under root have no folder; others use their directory path."""
    parent = path.parent.relative_to(root)
    return None if parent == Path(".") else parent.as_posix()


def compile_directory(root: Path, progress: bool = True) -> Registry:
    """Compile every SVG under root, in sorted path order.

    Icons that fail to compile, or reuse a name already taken, are logged and
    skipped.
    """
    if not root.is_dir():
        raise FileNotFoundError(f"SVG directory {root} does not exist")

    svgs = sorted(root.rglob("*.svg"))
    if not svgs:
        logging.warning(f"No SVG files found in {root}")

    entries: List[IconEntry] = []
    seen = {}
    for path in tqdm(svgs, desc="Compiling SVGs", unit=" files", disable=not progress):
        name = path.stem
        if name in seen:
            logging.error(f"{path}: icon {name} already defined by {seen[name]}, skipping...")
            continue

        try:
            template = compile_svg(path)
        except (etree.XMLSyntaxError, ValueError) as e:
            logging.error(f"{path}: {e}, skipping...")
            continue

        seen[name] = path
        entries.append(IconEntry(name, get_icon_folder(path, root), template))

    return Registry(entries)


def main(args):
    registry = compile_directory(args.svg_dir, progress=not args.quiet)
    save_registry(registry, args.output)
    print(f"Icons compiled: {len(registry)}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Compile SVG icons into a recolorable icon registry."
    )
    parser.add_argument(
        "--svg-dir",
        type=Path,
        default=SOURCES,
        help="Directory containing source SVGs; subdirectories become folders",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=MANIFEST,
        help="Registry manifest to write",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Hide the progress bar",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    args = parser.parse_args()

    setup_logging()
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    main(args)
