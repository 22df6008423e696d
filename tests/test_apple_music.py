from __future__ import annotations

import pytest
import requests

import ttml_lyrics.sources.apple_music as apple_music
from ttml_lyrics.sources.apple_music import AppleMusicSource
from ttml_lyrics.sources.errors import ConfigurationError, NotFound, TransportError
from ttml_lyrics.sources.types import LyricsRequest

TOKEN = "m" * 60
TTML = '<tt xmlns="http://www.w3.org/ns/ttml"><body/></tt>'


def _source(session, **kwargs):
    return AppleMusicSource(
        authorization_token="dev-token",
        media_user_token=kwargs.pop("media_user_token", TOKEN),
        max_retries=kwargs.pop("max_retries", 2),
        backoff_base_s=0,
        session=session,
        **kwargs,
    )


def test_short_media_user_token_rejected_before_network(fake_session):
    session = fake_session()
    with pytest.raises(ConfigurationError):
        _source(session, media_user_token="short").fetch(LyricsRequest("1"))
    assert session.calls == []


def test_fetch_builds_authenticated_request(fake_session, fake_response):
    session = fake_session(fake_response(200, {"data": [{"attributes": {"ttml": TTML}}]}))
    req = LyricsRequest(song_id="123", storefront="jp", lyrics_type="lyrics", language="ja")

    assert _source(session).fetch(req) == TTML

    call = session.calls[0]
    assert call["url"] == "https://amp-api.music.apple.com/v1/catalog/jp/songs/123/lyrics"
    assert call["params"] == {"l": "ja", "extend": "ttmlLocalizations"}
    assert call["headers"]["Authorization"] == "Bearer dev-token"
    assert call["headers"]["Origin"] == "https://music.apple.com"
    assert call["cookies"] == {"media-user-token": TOKEN}


def test_falls_back_to_localizations(fake_session, fake_response):
    payload = {"data": [{"attributes": {"ttml": "", "ttmlLocalizations": TTML}}]}
    assert _source(fake_session(fake_response(200, payload))).fetch(LyricsRequest("1")) == TTML


@pytest.mark.parametrize(
    "response_args",
    [
        (404, None),
        (200, {"errors": [{"status": "404"}]}),
        (200, {"data": []}),
        (200, {"data": [{"attributes": {}}]}),
        (200, {"data": ["oops"]}),
        (200, {"data": [{"attributes": "oops"}]}),
        (200, ["not", "an", "object"]),
    ],
)
def test_not_found(fake_session, fake_response, response_args):
    with pytest.raises(NotFound):
        _source(fake_session(fake_response(*response_args))).fetch(LyricsRequest("1"))


def test_retries_then_succeeds(fake_session, fake_response, monkeypatch):
    monkeypatch.setattr(apple_music.time, "sleep", lambda s: None)
    session = fake_session(
        requests.ConnectionError("reset"),
        fake_response(200, {"data": [{"attributes": {"ttml": TTML}}]}),
    )
    assert _source(session).fetch(LyricsRequest("1")) == TTML
    assert len(session.calls) == 2


def test_gives_up_with_transport_error(fake_session, fake_response, monkeypatch):
    monkeypatch.setattr(apple_music.time, "sleep", lambda s: None)
    session = fake_session(requests.Timeout("slow"), fake_response(500, None), fake_response(500, None))
    with pytest.raises(TransportError):
        _source(session, max_retries=3).fetch(LyricsRequest("1"))
    assert len(session.calls) == 3


def test_non_json_body_is_not_retried(fake_session, fake_response, monkeypatch):
    sleeps: list[float] = []
    monkeypatch.setattr(apple_music.time, "sleep", sleeps.append)
    bad_body = requests.exceptions.JSONDecodeError("Expecting value", "<html>", 0)
    session = fake_session(fake_response(200, bad_body))
    with pytest.raises(TransportError):
        _source(session, max_retries=3).fetch(LyricsRequest("1"))
    assert len(session.calls) == 1
    assert sleeps == []
