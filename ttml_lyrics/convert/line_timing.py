from __future__ import annotations

import logging

from ttml_lyrics.errors import NoSynchronizedLyrics
from ttml_lyrics.lrc.timecode import format_timestamp
from ttml_lyrics.script.cjk import is_cjk
from ttml_lyrics.ttml.model import TimedDocument
from ttml_lyrics.ttml.sidechannel import SideChannels

logger = logging.getLogger(__name__)


def convert_line_timed(doc: TimedDocument) -> list[str]:
    """
    One begin time per line. Each line emits the original text, then its
    translation and transliteration (the latter only for CJK text), all
    sharing the line's timestamp. In simplified-only policy just the
    zh-Hans translation is emitted.
    """
    side = SideChannels.for_document(doc)
    out: list[str] = []

    for unit in doc.units():
        if not unit.begin:
            raise NoSynchronizedLyrics(f"Line {unit.key or '?'} has no begin time")
        ts = format_timestamp(unit.begin)
        text = unit.text
        trans_text = side.translation_text(unit.key)

        if side.simplified_only:
            if trans_text:
                out.append(ts + trans_text)
            continue

        out.append(ts + text)
        if trans_text:
            out.append(ts + trans_text)
        translit_text = side.transliteration_text(unit.key)
        if translit_text and is_cjk(text):
            out.append(ts + translit_text)

    logger.debug("Line-timed conversion produced %d lines", len(out))
    return out
