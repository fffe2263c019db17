import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Tuple

from svg import SvgTemplate

# template(fill, stroke) -> image payload. Colors arrive already encoded, or
# None to keep the icon's embedded colors.
Template = Callable[[Optional[str], Optional[str]], str]


@dataclass(frozen=True)
class IconEntry:
    name: str
    folder: Optional[str]
    template: Template

    def __post_init__(self):
        if not self.name:
            raise ValueError(f"Icon name must not be empty (folder={self.folder})")


class Registry:
    """Read-only, ordered collection of icons keyed by name."""

    def __init__(self, entries: Iterable[IconEntry] = ()):
        self._entries: Dict[str, IconEntry] = {}
        for entry in entries:
            if entry.name in self._entries:
                raise ValueError(f"Icon {entry.name} duplicately defined.")
            self._entries[entry.name] = entry

    def lookup(self, name: str) -> Optional[IconEntry]:
        return self._entries.get(name)

    def entries(self) -> List[Tuple[str, IconEntry]]:
        return list(self._entries.items())

    def names(self) -> List[str]:
        return list(self._entries)

    def __contains__(self, name) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[IconEntry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self):
        return f"Registry({len(self)} icons)"


def save_registry(registry: Registry, path: Path):
    """Write a registry of SvgTemplate icons as a JSON manifest, in order."""
    records = []
    for entry in registry:
        if not isinstance(entry.template, SvgTemplate):
            raise TypeError(f"Icon {entry.name}: template cannot be serialized")
        records.append({"name": entry.name, "folder": entry.folder, **entry.template.to_dict()})

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(records, indent=2))
    logging.info(f"Wrote {len(records)} icons to {path}")


def load_registry(path: Path) -> Registry:
    records = json.loads(path.read_text())
    if not isinstance(records, list):
        raise ValueError(f"{path}: expected a list of icons")

    entries = []
    for record in records:
        try:
            template = SvgTemplate.from_dict(record)
            entries.append(IconEntry(record["name"], record.get("folder"), template))
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"{path}: malformed icon record {record!r}") from e

    logging.debug(f"Loaded {len(entries)} icons from {path}")
    return Registry(entries)
