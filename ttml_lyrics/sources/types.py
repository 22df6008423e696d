from __future__ import annotations

from dataclasses import dataclass

SYLLABLE_LYRICS = "syllable-lyrics"


@dataclass(frozen=True, slots=True)
class LyricsRequest:
    song_id: str
    storefront: str = "us"
    lyrics_type: str = SYLLABLE_LYRICS
    language: str = "en-US"

    @property
    def display(self) -> str:
        return f"{self.storefront}/{self.song_id} ({self.lyrics_type}, {self.language})"
