from pathlib import Path

import pytest

from icons import IconResolver
from registry import IconEntry, Registry

SVG_NS = 'xmlns="http://www.w3.org/2000/svg"'


class RecordingTemplate:
    def __init__(self, name):
        self.name = name
        self.calls = []

    def __call__(self, fill, stroke):
        self.calls.append((fill, stroke))
        return f"data:{self.name};fill={fill};stroke={stroke}"


@pytest.fixture
def registry():
    return Registry(
        [
            IconEntry("facebook", "social", RecordingTemplate("facebook")),
            IconEntry("check", None, RecordingTemplate("check")),
            IconEntry("twitter", "social", RecordingTemplate("twitter")),
            IconEntry("logo", None, RecordingTemplate("logo")),
        ]
    )


@pytest.fixture
def resolver(registry):
    return IconResolver(registry)


@pytest.fixture
def write_svg(tmp_path):
    def _write(relative: str, body: str, attrs: str = 'viewBox="0 0 24 24"') -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"<svg {SVG_NS} {attrs}>{body}</svg>")
        return path

    return _write
