import json
import sys

import click

from .chords import format_offset, normalize_offset, transpose_text
from .config import load_config
from .exceptions import FetchError, UnsupportedSourceError, WorshipSheetError
from .log import log, setup_logging
from .models import RenderedSong, Song
from .registry import get_source
from .selector import ScriptMode, mode_labels, render_song
from .sources.base import SongSource

LANGUAGE_LABELS = {
    "english": "English",
    "tamil": "Tamil",
    "kannada": "Kannada",
}


def _fail(exc: Exception) -> None:
    """Report *exc* on stderr and exit with status 1."""
    msg = f"Error: {exc}"
    if isinstance(exc, FetchError) and exc.status_code == 0:
        msg = f"Error: Could not reach {exc.url}"
    log.debug("command_failed", error=str(exc))
    click.echo(msg, err=True)
    sys.exit(1)


def _source(ctx: click.Context) -> SongSource:
    try:
        source = get_source(ctx.obj["location"])
    except UnsupportedSourceError as exc:
        _fail(exc)
    # Only the API source has a timeout
    if hasattr(source, "timeout"):
        source.timeout = ctx.obj["config"].api_timeout
    return source


def _parse_mode(ctx, param, value: str) -> ScriptMode:
    try:
        return ScriptMode.parse(value)
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc


def _read_record(file) -> dict:
    try:
        return json.load(file)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"not valid JSON: {exc}") from exc


def _summary_line(song: Song) -> str:
    language = LANGUAGE_LABELS.get(song.primary_language, song.primary_language)
    return f"{song.id}  {song.title}  ({language}, {song.views} views)"


def _echo_songs(songs: list[Song]) -> None:
    if not songs:
        click.echo("No songs found.")
        return
    for song in songs:
        click.echo(_summary_line(song))


def _echo_rendered(song: Song, rendered: RenderedSong, mode: ScriptMode) -> None:
    click.echo(click.style(song.title, bold=True))
    details = [LANGUAGE_LABELS.get(song.primary_language, song.primary_language)]
    if song.artist:
        details.insert(0, song.artist)
    if song.categories:
        details.append(", ".join(song.categories))
    click.echo(" · ".join(details))

    labels = mode_labels(song)
    if labels:
        original, secondary = labels
        if mode is ScriptMode.SECONDARY:
            click.echo(f"Script: {original} / [{secondary}]")
        else:
            click.echo(f"Script: [{original}] / {secondary}")

    click.echo()
    if rendered.chord_set is None:
        click.echo("No chords available yet.")
    else:
        click.echo(
            f"Key: {rendered.key}  Transpose: {format_offset(rendered.offset)}"
            f"  ({rendered.chord_set.difficulty})"
        )
        for segments in rendered.chord_lines:
            click.echo(
                "".join(
                    click.style(s.text, fg="magenta", bold=True) if s.is_chord else s.text
                    for s in segments
                )
            )

    click.echo()
    click.echo(click.style("Lyrics", bold=True))
    click.echo(rendered.lyrics or "Lyrics coming soon.")

    if song.youtube_url:
        click.echo()
        click.echo(f"Video: {song.youtube_url}")


@click.group()
@click.option("--config", "config_path", default=None, metavar="PATH",
              type=click.Path(exists=True, dir_okay=False),
              help="YAML settings file.")
@click.option("--source", "location", default=None, metavar="LOCATION",
              help="Song store: JSON file path or API base URL.")
@click.option("-v", "--verbose", is_flag=True, default=False,
              help="Debug JSON logs on stderr.")
@click.pass_context
def main(ctx: click.Context, config_path: str | None, location: str | None, verbose: bool) -> None:
    """Show worship songs with transposable chord charts and manage the song store.

    \b
    Song stores:
      - a local JSON file (default: songs.json)
      - a song API base URL, e.g. http://localhost:5000 (read-only)
    """
    config = load_config(config_path)
    setup_logging("DEBUG" if verbose else config.log_level)
    ctx.obj = {"config": config, "location": location or config.source}


@main.command("list")
@click.option("--language", default=None, help="Primary language, e.g. tamil.")
@click.option("--category", default=None, help="Category, e.g. worship.")
@click.option("--difficulty", default=None, help="easy, advanced or mixed.")
@click.option("-q", "--query", default=None, help="Text to look for in the title.")
@click.pass_context
def list_cmd(ctx, language, category, difficulty, query) -> None:
    """List songs sorted by title."""
    source = _source(ctx)
    try:
        songs = source.list_songs(language=language, category=category,
                                  difficulty=difficulty, query=query)
    except WorshipSheetError as exc:
        _fail(exc)
    _echo_songs(songs)


@main.command()
@click.argument("song_id")
@click.option("-t", "--transpose", "steps", default=0, show_default=True, type=int,
              help="Semitones to shift the chords (negative = down).")
@click.option("-m", "--mode", default="original", show_default=True, callback=_parse_mode,
              help="Script: original or secondary (also tamil/tanglish, kannada/english).")
@click.pass_context
def show(ctx, song_id: str, steps: int, mode: ScriptMode) -> None:
    """Show a song's chord chart and lyrics."""
    source = _source(ctx)
    try:
        song = source.get_song(song_id)
    except WorshipSheetError as exc:
        _fail(exc)
    _echo_rendered(song, render_song(song, mode, steps), mode)


@main.command("transpose")
@click.argument("chart", type=click.File("r", encoding="utf-8"), default="-")
@click.option("-s", "--steps", required=True, type=int,
              help="Semitones to shift the chords (negative = down).")
def transpose_cmd(chart, steps: int) -> None:
    """Transpose a plain-text chord chart (file or stdin) and print it."""
    click.echo(transpose_text(chart.read(), normalize_offset(steps)), nl=False)


@main.command()
@click.option("--limit", default=None, type=int, help="Number of songs (default from config).")
@click.pass_context
def latest(ctx, limit: int | None) -> None:
    """List the most recently added songs."""
    source = _source(ctx)
    try:
        songs = source.latest(limit or ctx.obj["config"].default_limit)
    except WorshipSheetError as exc:
        _fail(exc)
    _echo_songs(songs)


@main.command()
@click.option("--limit", default=None, type=int, help="Number of songs (default from config).")
@click.pass_context
def popular(ctx, limit: int | None) -> None:
    """List the most viewed songs."""
    source = _source(ctx)
    try:
        songs = source.popular(limit or ctx.obj["config"].default_limit)
    except WorshipSheetError as exc:
        _fail(exc)
    _echo_songs(songs)


@main.command()
@click.argument("record", type=click.File("r", encoding="utf-8"))
@click.pass_context
def add(ctx, record) -> None:
    """Add a song from a JSON record file."""
    source = _source(ctx)
    try:
        song = source.create_song(_read_record(record))
    except WorshipSheetError as exc:
        _fail(exc)
    click.echo(f"Created {song.id}")


@main.command()
@click.argument("song_id")
@click.argument("record", type=click.File("r", encoding="utf-8"))
@click.pass_context
def update(ctx, song_id: str, record) -> None:
    """Update a song with the fields in a JSON record file."""
    source = _source(ctx)
    try:
        song = source.update_song(song_id, _read_record(record))
    except WorshipSheetError as exc:
        _fail(exc)
    click.echo(f"Updated {song.id}")


@main.command()
@click.argument("song_id")
@click.confirmation_option(prompt="Delete this song?")
@click.pass_context
def delete(ctx, song_id: str) -> None:
    """Delete a song."""
    source = _source(ctx)
    try:
        source.delete_song(song_id)
    except WorshipSheetError as exc:
        _fail(exc)
    click.echo(f"Deleted {song_id}")
