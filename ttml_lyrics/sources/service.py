from __future__ import annotations

import logging
from dataclasses import dataclass

from ttml_lyrics.config import AppConfig
from ttml_lyrics.convert.dispatch import OutputFormat, convert

from .apple_music import AppleMusicSource
from .base import LyricsSource
from .types import LyricsRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LyricsResponse:
    text: str
    source: str
    output_format: OutputFormat


class LyricsService:
    def __init__(self, cfg: AppConfig, source: LyricsSource | None = None):
        self.cfg = cfg
        self.source = source or self._build_source(cfg)

    @staticmethod
    def _build_source(cfg: AppConfig) -> LyricsSource:
        return AppleMusicSource(
            authorization_token=cfg.authorization_token,
            media_user_token=cfg.media_user_token,
            timeout_s=cfg.api_timeout_s,
            max_retries=cfg.api_max_retries,
            backoff_base_s=cfg.api_backoff_base_s,
        )

    def request_for(
        self,
        song_id: str,
        *,
        storefront: str | None = None,
        lyrics_type: str | None = None,
        language: str | None = None,
    ) -> LyricsRequest:
        return LyricsRequest(
            song_id=song_id,
            storefront=storefront or self.cfg.storefront,
            lyrics_type=lyrics_type or self.cfg.lyrics_type,
            language=language or self.cfg.language,
        )

    def get_lyrics(
        self, request: LyricsRequest, output_format: str | OutputFormat | None = None
    ) -> LyricsResponse:
        """Fetch the TTML for `request` and convert it (or pass it through for raw)."""
        fmt = OutputFormat.parse(output_format or self.cfg.output_format)
        raw = self.source.fetch(request)
        logger.info("Fetched lyrics for %s from %s", request.display, self.source.name)
        return LyricsResponse(text=convert(raw, fmt), source=self.source.name, output_format=fmt)
