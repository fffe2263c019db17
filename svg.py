import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional
from urllib.parse import quote

from lxml import etree

from color import BLACK, parse_color

SVG_NS = "http://www.w3.org/2000/svg"
TRANSLATE_RE = re.compile(r"^\s*translate\(\s*([^,\s]+)\s*[,\s]\s*([^)]+)\s*\)\s*$")

DATA_PREFIX = "data:image/svg+xml;charset=utf8,"
# Characters left readable in the payload; everything else is percent-escaped.
DATA_SAFE = " /:=;'.-_"
SLOTS = {"fill": "__FILL__", "stroke": "__STROKE__"}


@dataclass(frozen=True)
class SvgTemplate:
    """A URI-encoded SVG whose black fills and strokes are recolorable slots.

    Calling the template with encoded colors substitutes them into the slots.
    A None color puts back the literal the source file used.
    """

    data: str
    originals: Dict[str, str] = field(default_factory=dict)

    def __call__(self, fill: Optional[str] = None, stroke: Optional[str] = None) -> str:
        data = self.data
        for kind, value in (("fill", fill), ("stroke", stroke)):
            if SLOTS[kind] not in data:
                continue
            data = data.replace(SLOTS[kind], value if value is not None else self.originals[kind])
        return data

    def to_dict(self):
        return {"data": self.data, "originals": dict(self.originals)}

    @classmethod
    def from_dict(cls, record) -> "SvgTemplate":
        """Rebuild a template from to_dict() output.

        Raises ValueError if a slot in data has no original color to fall back to.
        """
        template = cls(data=record["data"], originals=dict(record.get("originals", {})))
        for kind, marker in SLOTS.items():
            if marker in template.data and kind not in template.originals:
                raise ValueError(f"{kind} slot has no original color")
        return template


def _is_black(value: str) -> bool:
    return parse_color(value) == BLACK


def cleanup_svg(path: Path) -> etree._Element:
    """Parse path and strip everything that does not affect rendering.

    Raises ValueError if the SVG has neither a viewBox nor a usable size.
    """
    tree = etree.parse(str(path))
    etree.strip_elements(tree, etree.Comment, with_tail=False)

    root = tree.getroot()

    # Remove all elements and attributes with non-svg namespaces
    for elem in root.xpath(".|.//*"):  # type: ignore
        qname = etree.QName(elem)
        if qname.namespace != SVG_NS or qname.localname == "defs":
            parent = elem.getparent()
            if parent is not None:
                parent.remove(elem)
            continue

        for attr_name in list(elem.attrib.keys()):
            if "}" in attr_name or attr_name.startswith("-inkscape"):
                del elem.attrib[attr_name]

        if "style" in elem.attrib:
            style_parts = [
                part.strip()
                for part in elem.attrib["style"].split(";")
                if part.strip() and not part.strip().startswith("-inkscape")
            ]
            if style_parts:
                elem.attrib["style"] = ";".join(style_parts)
            else:
                del elem.attrib["style"]

    etree.cleanup_namespaces(tree)

    width = root.get("width")
    height = root.get("height")
    if width and height:
        if not root.get("viewBox"):
            try:
                root.set("viewBox", f"0 0 {float(width)} {float(height)}")
            except ValueError:
                raise ValueError(f"{path}: Could not parse width/height ({width}, {height})")
        del root.attrib["width"]
        del root.attrib["height"]
    elif not root.get("viewBox"):
        raise ValueError(f"{path}: Neither viewBox nor size attributes found")

    # Fold a lone wrapping translate() into the viewBox origin.
    vb = root.get("viewBox")
    children = [c for c in root if isinstance(c.tag, str)]
    if len(children) == 1 and etree.QName(children[0]).localname == "g":
        g = children[0]
        m = TRANSLATE_RE.match(g.get("transform", ""))
        parts = vb.split()
        if m and len(parts) == 4:
            try:
                tx, ty = float(m.group(1)), float(m.group(2))
                min_x, min_y, vw, vh = (float(p) for p in parts)
            except ValueError:
                logging.debug(f"{path}: Leaving untranslatable transform in place")
            else:
                root.set("viewBox", f"{min_x - tx} {min_y - ty} {vw} {vh}")
                del g.attrib["transform"]

    return root


def mark_color_slots(root: etree._Element) -> Dict[str, str]:
    """Replace black fill and stroke values under root with slot markers.

    Returns the first literal seen for each slot kind.
    """
    originals: Dict[str, str] = {}

    for elem in root.iter():
        if not isinstance(elem.tag, str):
            continue

        for kind, marker in SLOTS.items():
            value = elem.get(kind)
            if value and _is_black(value):
                originals.setdefault(kind, value.strip())
                elem.set(kind, marker)

        style = elem.get("style")
        if not style:
            continue
        declarations = []
        for part in style.split(";"):
            prop, sep, value = part.partition(":")
            kind = prop.strip().lower()
            if sep and kind in SLOTS and _is_black(value):
                originals.setdefault(kind, value.strip())
                part = f"{prop.strip()}:{SLOTS[kind]}"
            declarations.append(part)
        elem.set("style", ";".join(declarations))

    return originals


def to_data_uri(markup: str) -> str:
    return DATA_PREFIX + quote(markup, safe=DATA_SAFE)


def compile_svg(path: Path) -> SvgTemplate:
    root = cleanup_svg(path)
    originals = mark_color_slots(root)
    markup = etree.tostring(root, encoding="unicode")
    if not originals:
        logging.debug(f"{path}: no black fill or stroke to recolor")
    return SvgTemplate(
        data=to_data_uri(markup),
        originals={kind: quote(value, safe="") for kind, value in originals.items()},
    )
