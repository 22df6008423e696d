from __future__ import annotations

from ttml_lyrics.convert.dispatch import OutputFormat, convert, ttml_to_lrc
from ttml_lyrics.errors import (
    ConversionError,
    MalformedInput,
    MalformedTimestamp,
    NoSynchronizedLyrics,
)

__version__ = "0.1.0"

__all__ = [
    "ConversionError",
    "MalformedInput",
    "MalformedTimestamp",
    "NoSynchronizedLyrics",
    "OutputFormat",
    "convert",
    "ttml_to_lrc",
]
