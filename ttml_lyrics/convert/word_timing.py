from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ttml_lyrics.lrc.timecode import format_timestamp
from ttml_lyrics.script.cjk import is_cjk
from ttml_lyrics.ttml.model import LyricUnit, Span, TimedDocument
from ttml_lyrics.ttml.sidechannel import SideChannels, timed_text

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _LineState:
    """Accumulator for one lyric line, reset per unit."""

    syllables: list[str] = field(default_factory=list)
    spans_seen: int = 0
    end_ts: str = ""
    translit_line: str = ""
    trans_line: str = ""


def _translit_line(side: SideChannels, unit: LyricUnit, line_start: str) -> str:
    frag = side.transliteration(unit.key)
    if frag is None:
        return ""
    rendered = timed_text(frag.nodes)
    if not rendered.body:
        return ""
    return (rendered.start or line_start) + rendered.body


def _trans_line(side: SideChannels, unit: LyricUnit, line_start: str) -> str:
    frag = side.translation(unit.key)
    if frag is None:
        return ""
    if side.simplified_only:
        rendered = timed_text(frag.nodes, keep_untimed_elements=True)
        if rendered.has_span:
            return rendered.body
    # not re-timed per word: one timestamp at the line's first span
    return line_start + frag.text


def _walk_line(unit: LyricUnit, side: SideChannels) -> _LineState:
    state = _LineState()
    for node in unit.nodes:
        if isinstance(node, str):
            # separators before the first span are noise
            if state.spans_seen:
                state.syllables.append(node)
            continue
        if not isinstance(node, Span) or not node.begin:
            continue

        begin_ts = format_timestamp(node.begin)
        state.end_ts = format_timestamp(node.end)
        state.syllables.append(begin_ts + node.text)

        if state.spans_seen == 0:
            state.translit_line = _translit_line(side, unit, begin_ts)
            state.trans_line = _trans_line(side, unit, begin_ts)
        state.spans_seen += 1
    return state


def convert_word_timed(doc: TimedDocument) -> list[str]:
    """
    Syllable-timed lines: every span gets its own inline timestamp and the
    last span's end time is appended as a trailing timestamp on every line
    emitted for the unit.
    """
    side = SideChannels.for_document(doc)
    out: list[str] = []

    for unit in doc.units():
        state = _walk_line(unit, side)

        if side.simplified_only:
            if state.trans_line:
                out.append(state.trans_line + state.end_ts)
            continue

        original = "".join(state.syllables)
        out.append(original + state.end_ts)
        if state.trans_line:
            out.append(state.trans_line + state.end_ts)
        if state.translit_line and is_cjk(original):
            out.append(state.translit_line + state.end_ts)

    logger.debug("Word-timed conversion produced %d lines", len(out))
    return out
