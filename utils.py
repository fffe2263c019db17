from dataclasses import dataclass
import logging
import re
from typing import Any, Optional


COLORS = {
    "DEBUG": "\033[36m",  # cyan
    "INFO": "\033[32m",  # green
    "WARNING": "\033[33m",  # yellow
    "ERROR": "\033[31m",  # red
    "CRITICAL": "\033[1;31m",  # bold red
}
COLOR_RESET = "\033[0m"

CLASS_NAME_RE = re.compile(r"[^A-Za-z0-9_-]+")


class ColorFormatter(logging.Formatter):
    def format(self, record):
        color = COLORS.get(record.levelname, "")
        record.levelname = f"{color}{record.levelname}{COLOR_RESET}"
        return super().format(record)


def setup_logging():
    handler = logging.StreamHandler()
    handler.setFormatter(ColorFormatter("%(levelname)s %(message)s"))
    logging.root.addHandler(handler)
    logging.root.setLevel(logging.INFO)


def icon_class_name(name: str, prefix: str = "icon") -> str:
    slug = CLASS_NAME_RE.sub("-", name).strip("-")
    return f"{prefix}-{slug}" if prefix else slug


@dataclass(frozen=True)
class IconConfig:
    """Defaults applied by IconResolver when a call leaves an argument out.

    color: default color for every icon. None means icons keep their
        embedded colors.
    url: wrap results in url(...) unless the call says otherwise.
    """

    color: Optional[Any] = None
    url: bool = True
