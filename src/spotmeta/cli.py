#!/usr/bin/env python3
"""Command-line interface for spotmeta.

This CLI is primarily for debugging and development.
For production use, import spotmeta as a library.
"""

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass

import click
from pydantic import BaseModel
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from spotmeta.client import BackendClient
from spotmeta.config import ResolutionDepth
from spotmeta.exceptions import SpotMetaError
from spotmeta.models.domain import Album, Artist, Playlist, SearchResults, Track
from spotmeta.services import MetadataResolver
from spotmeta.settings import Settings, get_settings

logger = logging.getLogger("spotmeta")


@dataclass
class CliContext:
    """Options shared by all commands."""

    settings: Settings
    as_json: bool = False

    def create_client(self) -> BackendClient:
        return BackendClient(self.settings.backend_config())

    def create_resolver(self, client: BackendClient) -> MetadataResolver:
        return MetadataResolver(
            client, self.settings.resolver_config(), service=self.settings.service
        )


def setup_logging(verbose: bool = False, level: str = "WARNING") -> None:
    """Configure logging with Rich handler.

    Logs go to stderr so that --json output on stdout stays parseable.

    Args:
        verbose: If True, set log level to DEBUG regardless of ``level``.
        level: Log level name from settings.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, level),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(
                console=Console(stderr=True), rich_tracebacks=True, show_path=False
            )
        ],
        force=True,
    )


def _duration(ms: int) -> str:
    seconds = ms // 1000
    return f"{seconds // 60}:{seconds % 60:02d}"


def print_track(console: Console, track: Track) -> None:
    """Print a track and its credited artists."""
    table = Table(show_header=False, title=track.uri)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Title", track.title)
    table.add_row("Artist", track.artist)
    table.add_row("Album", track.album_title or "")
    table.add_row("Duration", _duration(track.duration))
    table.add_row("Cover URL", track.art_url)
    table.add_row("Stream URL", track.stream_url)
    console.print(table)
    if track.artists:
        print_artists(console, track.artists)
    _print_omitted(console, track.omitted)


def print_artists(console: Console, artists: list[Artist]) -> None:
    table = Table(show_header=True, header_style="bold")
    table.add_column("Artist ID")
    table.add_column("Name")
    table.add_column("Top Tracks", justify="right")
    table.add_column("Albums", justify="right")
    table.add_column("Singles", justify="right")
    for artist in artists:
        table.add_row(
            artist.artist_id,
            artist.name,
            str(len(artist.top_tracks)),
            str(len(artist.albums)),
            str(len(artist.singles)),
        )
    console.print(table)


def print_artist(console: Console, artist: Artist) -> None:
    """Print an artist with its top tracks."""
    print_artists(console, [artist])
    print_tracks(console, artist.top_tracks, title="Top tracks")
    _print_omitted(console, artist.omitted)


def print_tracks(console: Console, tracks: list[Track], title: str) -> None:
    table = Table(show_header=True, header_style="bold", title=title)
    table.add_column("#", justify="right")
    table.add_column("Track ID")
    table.add_column("Title")
    table.add_column("Artist")
    table.add_column("Duration", justify="right")
    for i, track in enumerate(tracks, start=1):
        table.add_row(
            str(i),
            track.track_id,
            track.title,
            track.artist,
            _duration(track.duration) if track.duration else "",
        )
    console.print(table)


def print_album(console: Console, album: Album) -> None:
    """Print an album with its discs."""
    year = str(album.release_date.year) if album.release_date else ""
    console.print(f"[bold]{album.title}[/bold] by {album.artist} {year}".rstrip())
    console.print(album.art_url)
    if album.artists:
        print_artists(console, album.artists)
    for disc in album.discs:
        print_tracks(console, disc.tracks, title=f"Disc {disc.number + 1}")
    _print_omitted(console, album.omitted)


def print_playlist(console: Console, playlist: Playlist) -> None:
    """Print a playlist and its items."""
    console.print(f"[bold]{playlist.name}[/bold] ({playlist.uri})")
    if playlist.description:
        console.print(playlist.description)
    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Track URI")
    table.add_column("Added By")
    for i, item in enumerate(playlist.items, start=1):
        table.add_row(str(i), item.track_uri, item.added_by)
    console.print(table)
    suffix = " (truncated)" if playlist.truncated else ""
    console.print(f"\n{len(playlist.items)} of {playlist.length} item(s){suffix}")


def print_search(console: Console, results: SearchResults) -> None:
    """Print search hits of all kinds."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("Kind")
    table.add_column("Name")
    table.add_column("ID")
    table.add_column("URI")
    for hit in results.hits():
        table.add_row(
            hit.kind or "?",
            hit.name,
            "/".join(hit.ids),
            hit.uri,
        )
    console.print(table)


def _print_omitted(console: Console, omitted: list[str]) -> None:
    if omitted:
        console.print(
            f"[yellow]{len(omitted)} nested reference(s) could not be resolved:"
            f"[/yellow] {', '.join(omitted)}"
        )


def _echo_json(model: BaseModel) -> None:
    click.echo(json.dumps(model.model_dump(mode="json"), indent=2, ensure_ascii=False))


def _run(
    ctx: CliContext,
    action: Callable[[MetadataResolver], BaseModel],
    printer: Callable[[Console, BaseModel], None],
) -> None:
    """Run a resolver call and report the result or the error."""
    console = Console()
    try:
        with ctx.create_client() as client:
            result = action(ctx.create_resolver(client))
    except SpotMetaError as e:
        logger.error(str(e))
        if ctx.as_json and isinstance(e.partial, BaseModel):
            _echo_json(e.partial)
        raise click.ClickException(str(e)) from e
    except Exception as e:
        logger.exception("Unexpected error")
        raise click.ClickException(f"Unexpected error: {e}") from e

    if ctx.as_json:
        _echo_json(result)
    else:
        printer(console, result)


@click.group()
@click.option("--host", help="Backend host (default: $SPOTMETA_HOST).")
@click.option("--password", help="Backend credential (default: $SPOTMETA_PASSWORD).")
@click.option(
    "--depth",
    type=click.Choice([d.value for d in ResolutionDepth]),
    help="Nested resolution depth (default: one-level).",
)
@click.option("--workers", type=click.IntRange(min=1), help="Sibling fetch threads.")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(
    ctx: click.Context,
    host: str | None,
    password: str | None,
    depth: str | None,
    workers: int | None,
    as_json: bool,
    verbose: bool,
) -> None:
    """Resolve music service references into nested metadata."""
    settings = get_settings()
    overrides: dict[str, object] = {}
    if host:
        overrides["host"] = host
    if password:
        overrides["password"] = password
    if depth:
        overrides["depth"] = ResolutionDepth(depth)
    if workers:
        overrides["max_workers"] = workers
    if overrides:
        settings = settings.model_copy(update=overrides)

    setup_logging(verbose, settings.log_level)
    ctx.obj = CliContext(settings=settings, as_json=as_json)


@main.command(name="track")
@click.argument("url", metavar="TRACK_URL")
@click.pass_obj
def track_cmd(ctx: CliContext, url: str) -> None:
    """Resolve a track and its credited artists.

    TRACK_URL is a web URL or a URI like spotify:track:<id>.
    """
    _run(ctx, lambda r: r.resolve_track(url), print_track)  # type: ignore[arg-type]


@main.command(name="artist")
@click.argument("url", metavar="ARTIST_URL")
@click.pass_obj
def artist_cmd(ctx: CliContext, url: str) -> None:
    """Resolve an artist and its top tracks."""
    _run(ctx, lambda r: r.resolve_artist(url), print_artist)  # type: ignore[arg-type]


@main.command(name="album")
@click.argument("url", metavar="ALBUM_URL")
@click.pass_obj
def album_cmd(ctx: CliContext, url: str) -> None:
    """Resolve an album, its artists and discs."""
    _run(ctx, lambda r: r.resolve_album(url), print_album)  # type: ignore[arg-type]


@main.command(name="playlist")
@click.argument("url", metavar="PLAYLIST_URL")
@click.pass_obj
def playlist_cmd(ctx: CliContext, url: str) -> None:
    """Resolve a playlist.

    PLAYLIST_URL looks like spotify:user:<user>:playlist:<id> or
    https://open.spotify.com/user/<user>/playlist/<id>.
    """
    _run(
        ctx,
        lambda r: r.resolve_playlist(url),
        print_playlist,  # type: ignore[arg-type]
    )


@main.command(name="resolve")
@click.argument("url", metavar="URL")
@click.pass_obj
def resolve_cmd(ctx: CliContext, url: str) -> None:
    """Resolve any supported reference."""
    printers: dict[type, Callable[[Console, BaseModel], None]] = {
        Track: print_track,  # type: ignore[dict-item]
        Artist: print_artist,  # type: ignore[dict-item]
        Album: print_album,  # type: ignore[dict-item]
        Playlist: print_playlist,  # type: ignore[dict-item]
    }
    _run(
        ctx,
        lambda r: r.resolve(url),
        lambda console, result: printers[type(result)](console, result),
    )


@main.command(name="search")
@click.argument("query")
@click.pass_obj
def search_cmd(ctx: CliContext, query: str) -> None:
    """Search tracks, albums, artists and playlists."""
    _run(ctx, lambda r: r.search(query), print_search)  # type: ignore[arg-type]


if __name__ == "__main__":
    main()
