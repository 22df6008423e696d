from __future__ import annotations

from typing import Any

import pytest
import requests


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None):
        self.status_code = status_code
        self._payload = payload

    def json(self) -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class FakeSession:
    """Replays queued responses (or exceptions) and records each call."""

    def __init__(self, *responses: FakeResponse | Exception):
        self.responses = list(responses)
        self.calls: list[dict[str, Any]] = []

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"url": url, **kwargs})
        res = self.responses.pop(0)
        if isinstance(res, Exception):
            raise res
        return res


@pytest.fixture
def fake_session():
    return FakeSession


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    for name in (
        "TTML_LYRICS_STOREFRONT",
        "TTML_LYRICS_LANGUAGE",
        "TTML_LYRICS_TYPE",
        "TTML_LYRICS_FORMAT",
        "TTML_LYRICS_AUTH_TOKEN",
        "TTML_LYRICS_MEDIA_USER_TOKEN",
    ):
        monkeypatch.delenv(name, raising=False)
    return tmp_path / "ttml-lyrics"
