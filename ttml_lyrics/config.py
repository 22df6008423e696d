from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

# config.json keys that save_config() accepts
CONFIG_KEYS = (
    "storefront",
    "language",
    "lyrics_type",
    "output_format",
    "authorization_token",
    "media_user_token",
)


def _config_dir() -> Path:
    xdg = os.getenv("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "ttml-lyrics"
    return Path.home() / ".config" / "ttml-lyrics"


def _config_file() -> Path:
    return _config_dir() / "config.json"


@dataclass(frozen=True)
class AppConfig:
    config_dir: Path

    # Request defaults
    storefront: str
    language: str
    lyrics_type: str  # "lyrics" (line timed) | "syllable-lyrics" (word timed)
    output_format: str  # "lrc" | "raw"

    # Credentials
    authorization_token: str
    media_user_token: str

    # HTTP
    api_timeout_s: float
    api_max_retries: int
    api_backoff_base_s: float


def _load_file(config_dir: Path) -> dict[str, Any]:
    cfg_path = config_dir / "config.json"
    if not cfg_path.exists():
        return {}
    try:
        data = json.loads(cfg_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable config %s: %s", cfg_path, e)
        return {}
    return data if isinstance(data, dict) else {}


def _pick(data: dict[str, Any], key: str, env: str, default: str) -> str:
    # Priority: config.json → env → default
    value = data.get(key)
    if value:
        return str(value)
    return os.getenv(env) or default


def load_config() -> AppConfig:
    config_dir = _config_dir()
    data = _load_file(config_dir)

    return AppConfig(
        config_dir=config_dir,
        storefront=_pick(data, "storefront", "TTML_LYRICS_STOREFRONT", "us"),
        language=_pick(data, "language", "TTML_LYRICS_LANGUAGE", "en-US"),
        lyrics_type=_pick(data, "lyrics_type", "TTML_LYRICS_TYPE", "syllable-lyrics"),
        output_format=_pick(data, "output_format", "TTML_LYRICS_FORMAT", "lrc"),
        authorization_token=_pick(data, "authorization_token", "TTML_LYRICS_AUTH_TOKEN", ""),
        media_user_token=_pick(data, "media_user_token", "TTML_LYRICS_MEDIA_USER_TOKEN", ""),
        api_timeout_s=float(os.getenv("TTML_LYRICS_API_TIMEOUT", "10.0")),
        api_max_retries=int(os.getenv("TTML_LYRICS_API_MAX_RETRIES", "3")),
        api_backoff_base_s=float(os.getenv("TTML_LYRICS_API_BACKOFF_BASE", "1.0")),
    )


def save_config(**values: str | None) -> Path:
    """Merge non-empty values into config.json and return its path."""
    unknown = set(values) - set(CONFIG_KEYS)
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}")

    cfg_path = _config_file()
    cfg_path.parent.mkdir(parents=True, exist_ok=True)
    data = _load_file(cfg_path.parent)
    for k, v in values.items():
        if v:
            data[k] = v
    cfg_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    return cfg_path
