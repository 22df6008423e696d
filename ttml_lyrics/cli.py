from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import typer

from ttml_lyrics.config import load_config, save_config
from ttml_lyrics.convert.dispatch import OutputFormat, convert
from ttml_lyrics.errors import ConversionError
from ttml_lyrics.logging_setup import setup_logging
from ttml_lyrics.sources.errors import SourceError
from ttml_lyrics.sources.service import LyricsService


app = typer.Typer(no_args_is_help=True, add_completion=False)


def _fail(message: str) -> NoReturn:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(code=1)


def _write(data: str, out: Path | None) -> None:
    if out:
        out.write_text(data + "\n", encoding="utf-8")
    else:
        typer.echo(data)


def _output_format(fmt: str) -> OutputFormat:
    try:
        return OutputFormat.parse(fmt)
    except ConversionError:
        raise typer.BadParameter("format must be one of: lrc, raw")


@app.command("convert")
def convert_cmd(
    ttml_path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="TTML file"),
    fmt: str = typer.Option("lrc", "--format", case_sensitive=False, help="lrc|raw"),
    out: Path | None = typer.Option(None, "--out", help="Output file (default: stdout)"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """Convert a TTML lyrics file to LRC."""
    setup_logging(debug)
    output_format = _output_format(fmt)
    text = ttml_path.read_text(encoding="utf-8")
    try:
        data = convert(text, output_format)
    except ConversionError as e:
        _fail(str(e))
    _write(data, out)


@app.command()
def fetch(
    song_id: str,
    storefront: str | None = typer.Option(None, "--storefront", "-s", help="Catalog region, e.g. us, jp"),
    language: str | None = typer.Option(None, "--language", "-l", help="Preferred language, e.g. en-US"),
    lyrics_type: str | None = typer.Option(None, "--type", "-t", help="lyrics | syllable-lyrics"),
    fmt: str | None = typer.Option(None, "--format", case_sensitive=False, help="lrc|raw"),
    out: Path | None = typer.Option(None, "--out", help="Output file (default: stdout)"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """
    Fetch lyrics for a catalog song and convert them.

    Tokens come from config.json or TTML_LYRICS_AUTH_TOKEN /
    TTML_LYRICS_MEDIA_USER_TOKEN.
    """
    setup_logging(debug)
    cfg = load_config()
    output_format = _output_format(fmt or cfg.output_format)
    service = LyricsService(cfg)
    request = service.request_for(song_id, storefront=storefront, lyrics_type=lyrics_type, language=language)
    try:
        res = service.get_lyrics(request, output_format)
    except (SourceError, ConversionError) as e:
        _fail(str(e))
    _write(res.text, out)


@app.command()
def config(
    storefront: str | None = typer.Option(None, "--storefront"),
    language: str | None = typer.Option(None, "--language"),
    lyrics_type: str | None = typer.Option(None, "--type"),
    fmt: str | None = typer.Option(None, "--format"),
    authorization_token: str | None = typer.Option(None, "--authorization-token"),
    media_user_token: str | None = typer.Option(None, "--media-user-token"),
):
    """Save default request options and tokens to config.json."""
    if fmt is not None:
        fmt = _output_format(fmt).value
    path = save_config(
        storefront=storefront,
        language=language,
        lyrics_type=lyrics_type,
        output_format=fmt,
        authorization_token=authorization_token,
        media_user_token=media_user_token,
    )
    typer.echo(f"Config saved: {path}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
