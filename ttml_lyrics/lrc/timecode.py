from __future__ import annotations

import re
from dataclasses import dataclass

from ttml_lyrics.errors import MalformedTimestamp

# Tried in order for values containing a colon.
_COLON_PATTERNS = (
    re.compile(r"(?P<h>\d+):(?P<m>\d+):(?P<s>\d+)\.(?P<frac>\d+)"),  # H:M:S.fff
    re.compile(r"(?P<m>\d+):(?P<s>\d+)\.(?P<frac>\d+)"),  # M:S.fff
    re.compile(r"(?P<m>\d+):(?P<s>\d+)"),  # M:S
)
_SECONDS_PATTERN = re.compile(r"(?P<s>\d+)\.(?P<frac>\d+)")  # S.fff


@dataclass(frozen=True, slots=True)
class Timestamp:
    minutes: int
    seconds: int
    hundredths: int

    def render(self) -> str:
        return render_timestamp(self.minutes, self.seconds, self.hundredths)


def _match(raw: str) -> re.Match[str] | None:
    if ":" in raw:
        for pattern in _COLON_PATTERNS:
            m = pattern.fullmatch(raw)
            if m:
                return m
        return None
    return _SECONDS_PATTERN.fullmatch(raw)


def parse_timestamp(raw: str | None) -> Timestamp:
    """
    Parse a TTML clock value into LRC minutes/seconds/hundredths.

    The fraction is read as milliseconds and truncated to hundredths
    ("1.345" -> 34, "1.500" -> 50). Hours are folded into minutes.
    """
    if not raw:
        raise MalformedTimestamp(f"Empty timestamp: {raw!r}")
    m = _match(raw.strip())
    if m is None:
        raise MalformedTimestamp(f"Unrecognized timestamp: {raw!r}")

    parts = m.groupdict()
    hours = int(parts.get("h") or 0)
    minutes = int(parts.get("m") or 0) + hours * 60
    seconds = int(parts["s"])
    frac = parts.get("frac")
    # digits past milliseconds are dropped
    hundredths = int(frac[:3]) // 10 if frac else 0
    return Timestamp(minutes=minutes, seconds=seconds, hundredths=hundredths)


def render_timestamp(minutes: int, seconds: int, hundredths: int) -> str:
    # minutes may exceed two digits, they are never truncated
    return f"[{minutes:02d}:{seconds:02d}.{hundredths:02d}]"


def format_timestamp(raw: str | None) -> str:
    return parse_timestamp(raw).render()
