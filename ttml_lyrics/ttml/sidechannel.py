from __future__ import annotations

from dataclasses import dataclass

from ttml_lyrics.lrc.timecode import format_timestamp

from .model import Fragment, MetadataBlock, Node, TimedDocument, Variant, flat_text

__all__ = ["SideChannels", "TimedText", "flat_text", "timed_text"]


@dataclass(frozen=True, slots=True)
class TimedText:
    start: str  # rendered timestamp of the first timed span, "" when there is none
    body: str
    has_span: bool


def timed_text(nodes: tuple[Node, ...], *, keep_untimed_elements: bool = False) -> TimedText:
    """
    Render a fragment span by span: each timed span becomes "[mm:ss.cc]text",
    literal data is kept verbatim. Untimed <span>s are always dropped; other
    elements contribute their text only with keep_untimed_elements.
    """
    parts: list[str] = []
    start = ""
    for node in nodes:
        if isinstance(node, str):
            parts.append(node)
            continue
        if node.tag != "span":
            if keep_untimed_elements:
                parts.append(node.text)
            continue
        if not node.is_timed:
            continue
        ts = format_timestamp(node.begin)
        if not start:
            start = ts
        parts.append(ts + node.text)
    return TimedText(start=start, body="".join(parts), has_span=bool(start))


@dataclass(frozen=True, slots=True)
class SideChannels:
    """
    Translation/transliteration lookup for one document.

    In simplified-only policy translations come from the zh-Hans variant,
    otherwise from the first translation variant. Transliterations always
    come from the first transliteration variant. Lookups never fail: a
    missing block, variant or key resolves to None.
    """

    translation_variant: Variant | None
    transliteration_variant: Variant | None
    simplified_only: bool = False

    @classmethod
    def for_document(cls, doc: TimedDocument) -> "SideChannels":
        meta = doc.metadata or MetadataBlock()
        simplified = doc.simplified_variant
        return cls(
            translation_variant=simplified if simplified is not None else meta.first_translation(),
            transliteration_variant=meta.first_transliteration(),
            simplified_only=simplified is not None,
        )

    def translation(self, key: str | None) -> Fragment | None:
        if self.translation_variant is None:
            return None
        return self.translation_variant.fragment(key)

    def transliteration(self, key: str | None) -> Fragment | None:
        if self.transliteration_variant is None:
            return None
        return self.transliteration_variant.fragment(key)

    def translation_text(self, key: str | None) -> str:
        frag = self.translation(key)
        return frag.text if frag is not None else ""

    def transliteration_text(self, key: str | None) -> str:
        frag = self.transliteration(key)
        return frag.text if frag is not None else ""
