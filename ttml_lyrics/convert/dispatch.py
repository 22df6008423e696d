from __future__ import annotations

import logging
from enum import Enum

from ttml_lyrics.errors import ConversionError
from ttml_lyrics.ttml.model import TimedDocument, TimingMode
from ttml_lyrics.ttml.parse import parse_ttml

from .line_timing import convert_line_timed
from .word_timing import convert_word_timed

logger = logging.getLogger(__name__)


class OutputFormat(str, Enum):
    RAW = "raw"
    LRC = "lrc"

    @classmethod
    def parse(cls, value: "str | OutputFormat") -> "OutputFormat":
        if isinstance(value, OutputFormat):
            return value
        v = (value or "").strip().lower()
        if v in ("raw", "ttml"):
            return cls.RAW
        if v == "lrc":
            return cls.LRC
        raise ConversionError(f"Unknown output format: {value!r} (expected lrc or raw)")


def convert_untimed(doc: TimedDocument) -> list[str]:
    out: list[str] = []
    for unit in doc.units():
        line = unit.text.strip()
        if line:
            out.append(line)
    return out


_CONVERTERS = {
    TimingMode.WORD: convert_word_timed,
    TimingMode.NONE: convert_untimed,
    TimingMode.LINE: convert_line_timed,
}


def convert_document(doc: TimedDocument) -> str:
    logger.debug("Converting %s-timed document (simplified_only=%s)", doc.timing.value, doc.simplified_only)
    return "\n".join(_CONVERTERS[doc.timing](doc))


def ttml_to_lrc(raw: str) -> str:
    return convert_document(parse_ttml(raw))


def convert(raw: str, output_format: "str | OutputFormat" = OutputFormat.LRC) -> str:
    """
    Convert a TTML lyrics document.

    RAW returns the document untouched; LRC parses it and renders LRC lines
    joined with "\\n" (no trailing newline). Raises MalformedInput,
    MalformedTimestamp or NoSynchronizedLyrics; there is no partial output.
    """
    if OutputFormat.parse(output_format) is OutputFormat.RAW:
        return raw
    return ttml_to_lrc(raw)
