from __future__ import annotations

from .types import LyricsRequest


class LyricsSource:
    """Retrieves a raw TTML document. Raises NotFound / TransportError."""

    name: str

    def fetch(self, request: LyricsRequest) -> str:
        raise NotImplementedError
