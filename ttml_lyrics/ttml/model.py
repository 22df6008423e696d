from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Union

TRADITIONAL_CHINESE = "zh-Hant"
SIMPLIFIED_CHINESE = "zh-Hans"


class TimingMode(Enum):
    LINE = "Line"
    WORD = "Word"
    NONE = "None"

    @classmethod
    def from_attr(cls, value: str | None) -> "TimingMode":
        # anything other than Word/None (including absent) is line timing
        if value == cls.WORD.value:
            return cls.WORD
        if value == cls.NONE.value:
            return cls.NONE
        return cls.LINE


@dataclass(frozen=True, slots=True)
class Span:
    """An element child of a lyric line or fragment (usually a timed <span>)."""

    tag: str
    begin: str | None
    end: str | None
    text: str

    @property
    def is_timed(self) -> bool:
        return self.tag == "span" and bool(self.begin)


# literal character data or an element, in document order
Node = Union[str, Span]


def flat_text(text_attr: str | None, nodes: tuple[Node, ...]) -> str:
    """
    Text of a line or fragment: the `text` attribute verbatim when present,
    otherwise literal data and element text concatenated in order.
    """
    if text_attr is not None:
        return text_attr
    return "".join(n if isinstance(n, str) else n.text for n in nodes)


@dataclass(frozen=True, slots=True)
class LyricUnit:
    key: str | None
    begin: str | None
    text_attr: str | None
    nodes: tuple[Node, ...] = ()

    @property
    def text(self) -> str:
        return flat_text(self.text_attr, self.nodes)


@dataclass(frozen=True, slots=True)
class Section:
    units: tuple[LyricUnit, ...]


@dataclass(frozen=True, slots=True)
class Fragment:
    key: str
    text_attr: str | None
    nodes: tuple[Node, ...] = ()

    @property
    def text(self) -> str:
        return flat_text(self.text_attr, self.nodes)


@dataclass(frozen=True, slots=True)
class Variant:
    lang: str | None
    # for-key -> fragment; first fragment wins on duplicate keys
    fragments: dict[str, Fragment] = field(default_factory=dict)

    @classmethod
    def from_fragments(cls, lang: str | None, fragments: list[Fragment]) -> "Variant":
        index: dict[str, Fragment] = {}
        for frag in fragments:
            index.setdefault(frag.key, frag)
        return cls(lang=lang, fragments=index)

    def fragment(self, key: str | None) -> Fragment | None:
        if key is None:
            return None
        return self.fragments.get(key)


@dataclass(frozen=True, slots=True)
class MetadataBlock:
    translations: tuple[Variant, ...] = ()
    transliterations: tuple[Variant, ...] = ()

    def first_translation(self) -> Variant | None:
        return self.translations[0] if self.translations else None

    def first_transliteration(self) -> Variant | None:
        return self.transliterations[0] if self.transliterations else None

    def translation_for(self, lang: str) -> Variant | None:
        return next((v for v in self.translations if v.lang == lang), None)


@dataclass(frozen=True, slots=True)
class TimedDocument:
    lang: str | None
    timing: TimingMode
    sections: tuple[Section, ...]
    metadata: MetadataBlock | None = None

    def units(self) -> Iterator[LyricUnit]:
        for section in self.sections:
            yield from section.units

    @property
    def simplified_variant(self) -> Variant | None:
        """The zh-Hans translation of a zh-Hant document, if there is one."""
        if self.lang != TRADITIONAL_CHINESE or self.metadata is None:
            return None
        return self.metadata.translation_for(SIMPLIFIED_CHINESE)

    @property
    def simplified_only(self) -> bool:
        return self.simplified_variant is not None
