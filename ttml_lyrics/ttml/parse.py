from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import Iterator

from ttml_lyrics.errors import MalformedInput

from .model import (
    Fragment,
    LyricUnit,
    MetadataBlock,
    Node,
    Section,
    Span,
    TimedDocument,
    TimingMode,
    Variant,
)

logger = logging.getLogger(__name__)


def _local(name: str) -> str:
    # "{http://www.w3.org/ns/ttml}p" -> "p"
    return name.rsplit("}", 1)[-1]


def _attr(el: ET.Element, name: str) -> str | None:
    """Attribute by local name, so itunes:key / xml:lang are read as key / lang."""
    for k, v in el.attrib.items():
        if _local(k) == name:
            return v
    return None


def _child(el: ET.Element | None, name: str) -> ET.Element | None:
    if el is None:
        return None
    return next((c for c in el if _local(c.tag) == name), None)


def _children(el: ET.Element | None, name: str) -> list[ET.Element]:
    if el is None:
        return []
    return [c for c in el if _local(c.tag) == name]


def _iter_nodes(el: ET.Element) -> Iterator[Node]:
    # ElementTree keeps character data in .text / .tail
    if el.text:
        yield el.text
    for child in el:
        yield _span(child)
        if child.tail:
            yield child.tail


def _span(el: ET.Element) -> Span:
    text = _attr(el, "text")
    if text is None:
        text = "".join(el.itertext())
    return Span(tag=_local(el.tag), begin=_attr(el, "begin"), end=_attr(el, "end"), text=text)


def _unit(el: ET.Element) -> LyricUnit:
    return LyricUnit(
        key=_attr(el, "key"),
        begin=_attr(el, "begin"),
        text_attr=_attr(el, "text"),
        nodes=tuple(_iter_nodes(el)),
    )


def _variants(container: ET.Element | None, name: str) -> tuple[Variant, ...]:
    out: list[Variant] = []
    for v in _children(container, name):
        fragments = [
            Fragment(key=key, text_attr=_attr(t, "text"), nodes=tuple(_iter_nodes(t)))
            for t in v.iter()
            if _local(t.tag) == "text" and (key := _attr(t, "for")) is not None
        ]
        out.append(Variant.from_fragments(_attr(v, "lang"), fragments))
    return tuple(out)


def _metadata(root: ET.Element) -> MetadataBlock | None:
    itunes = _child(_child(_child(root, "head"), "metadata"), "iTunesMetadata")
    if itunes is None:
        return None
    return MetadataBlock(
        translations=_variants(_child(itunes, "translations"), "translation"),
        transliterations=_variants(_child(itunes, "transliterations"), "transliteration"),
    )


def parse_ttml(raw: str) -> TimedDocument:
    """
    Read a TTML lyrics document into a TimedDocument.

    Only the structure the converters consume is checked: the root must be
    <tt> and it must have a <body>. Everything else is optional.
    """
    try:
        root = ET.fromstring(raw)
    except ET.ParseError as e:
        raise MalformedInput(f"Cannot parse TTML: {e}") from e

    if _local(root.tag) != "tt":
        raise MalformedInput(f"Root element is <{_local(root.tag)}>, expected <tt>")
    body = _child(root, "body")
    if body is None:
        raise MalformedInput("TTML document has no <body>")

    sections = tuple(Section(units=tuple(_unit(p) for p in section)) for section in body)
    doc = TimedDocument(
        lang=_attr(root, "lang"),
        timing=TimingMode.from_attr(_attr(root, "timing")),
        sections=sections,
        metadata=_metadata(root),
    )
    logger.debug(
        "Parsed TTML: lang=%s timing=%s sections=%d",
        doc.lang,
        doc.timing.value,
        len(doc.sections),
    )
    return doc
