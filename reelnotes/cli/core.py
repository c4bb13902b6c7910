"""CLI for reelnotes."""

import json
import logging
from pathlib import Path

import click

from ..backup import BackupManager
from ..config import STORE_PATH_ENV
from ..models import Annotation, AnnotationCollection, Movie, Series, UserSeries, season_episode_counts
from ..store import AnnotationStore, StoreError
from .display_helpers import display_annotation, format_annotation, select_annotation


@click.group()
@click.option(
    "--store",
    "store_path",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar=STORE_PATH_ENV,
    help="Annotation store file",
)
@click.option("--verbose", "-v", is_flag=True, help="Log store activity")
@click.pass_context
def cli(ctx: click.Context, store_path: Path | None, verbose: bool) -> None:
    """reelnotes - Keep ratings and notes for the movies and series you watch."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    ctx.ensure_object(dict)
    ctx.obj["store"] = AnnotationStore(store_path)


def load_or_empty(store: AnnotationStore) -> AnnotationCollection:
    """Load the collection; a store that was never saved is an empty collection."""
    if not store.exists():
        return AnnotationCollection()
    try:
        return store.load()
    except StoreError as e:
        raise click.ClickException(f"Failed to load {store.path}: {e}") from e


def backups_for(ctx: click.Context) -> BackupManager:
    """Backup manager for the store the command runs against."""
    store: AnnotationStore = ctx.obj["store"]
    return BackupManager(store.path)


def save_with_backup(store: AnnotationStore, collection: AnnotationCollection, reason: str) -> None:
    """Back up the committed store file, then save over it."""
    try:
        BackupManager(store.path).create_backup_file(f"pre_{reason}")
    except OSError as e:
        raise click.ClickException(f"Failed to back up {store.path}: {e}") from e

    try:
        store.save(collection)
    except StoreError as e:
        raise click.ClickException(f"Failed to save {store.path}: {e}") from e


def _select_or_exit(collection: AnnotationCollection, query: str) -> Annotation:
    annotation = select_annotation(collection, query)
    if annotation is None:
        raise click.exceptions.Exit(1)
    return annotation


@cli.command()
@click.argument("kind", type=click.Choice(["movie", "series"]))
@click.argument("record_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--rating", "-r", type=click.FloatRange(0, 10), help="Your rating (0-10)")
@click.option("--note", "-n", help="Note")
@click.pass_context
def add(ctx: click.Context, kind: str, record_file: Path, rating: float | None, note: str | None) -> None:
    """Annotate a movie or series from a catalog record JSON file.

    Adding a record that is already annotated refreshes its catalog data and,
    for series, grows the season/episode notes to the record's season data.
    """
    store: AnnotationStore = ctx.obj["store"]

    try:
        data = json.loads(record_file.read_text(encoding="utf-8"))
        if kind == "movie":
            movie = Movie.from_dict(data)
        else:
            series = Series.from_dict(data)
            episode_counts = season_episode_counts(data)
    except (OSError, ValueError) as e:
        raise click.ClickException(f"Invalid {kind} record in {record_file}: {e}") from e

    collection = load_or_empty(store)

    if kind == "movie":
        annotation = collection.annotate_movie(movie)
        annotation.movie = movie
    else:
        annotation = collection.annotate_series(series)
        annotation.series = series
        annotation.sync_seasons(episode_counts)

    if rating is not None:
        annotation.user_rating = rating
    if note is not None:
        annotation.note = note

    save_with_backup(store, collection, "add")
    click.echo(f"Saved: {format_annotation(annotation)}")


@cli.command()
@click.argument("query")
@click.argument("rating", type=click.FloatRange(0, 10))
@click.pass_context
def rate(ctx: click.Context, query: str, rating: float) -> None:
    """Set your rating (0-10) for an annotated title."""
    store: AnnotationStore = ctx.obj["store"]
    collection = load_or_empty(store)
    annotation = _select_or_exit(collection, query)

    annotation.user_rating = rating
    save_with_backup(store, collection, "rate")
    click.echo(f"Rated: {format_annotation(annotation)} {rating:.1f}")


@cli.command()
@click.argument("query")
@click.argument("text")
@click.pass_context
def note(ctx: click.Context, query: str, text: str) -> None:
    """Set the overall note for an annotated title."""
    store: AnnotationStore = ctx.obj["store"]
    collection = load_or_empty(store)
    annotation = _select_or_exit(collection, query)

    annotation.note = text
    save_with_backup(store, collection, "note")
    click.echo(f"Noted: {format_annotation(annotation)}")


def _select_series(collection: AnnotationCollection, query: str) -> UserSeries:
    annotation = _select_or_exit(collection, query)
    if not isinstance(annotation, UserSeries):
        raise click.ClickException(f"{format_annotation(annotation)} is not a series")
    return annotation


@cli.command(name="season-note")
@click.argument("query")
@click.argument("season", type=click.IntRange(min=1))
@click.argument("text")
@click.pass_context
def season_note(ctx: click.Context, query: str, season: int, text: str) -> None:
    """Set the note for a season of an annotated series."""
    store: AnnotationStore = ctx.obj["store"]
    collection = load_or_empty(store)
    user_series = _select_series(collection, query)

    user_series.season(season).note = text
    save_with_backup(store, collection, "season_note")
    click.echo(f"Noted: {format_annotation(user_series)} season {season}")


@cli.command(name="episode-note")
@click.argument("query")
@click.argument("season", type=click.IntRange(min=1))
@click.argument("episode", type=click.IntRange(min=1))
@click.argument("text")
@click.pass_context
def episode_note(ctx: click.Context, query: str, season: int, episode: int, text: str) -> None:
    """Set the note for an episode of an annotated series."""
    store: AnnotationStore = ctx.obj["store"]
    collection = load_or_empty(store)
    user_series = _select_series(collection, query)

    user_series.season(season).set_episode_note(episode, text)
    save_with_backup(store, collection, "episode_note")
    click.echo(f"Noted: {format_annotation(user_series)} S{season:02d}E{episode:02d}")


@cli.command()
@click.argument("query")
@click.pass_context
def show(ctx: click.Context, query: str) -> None:
    """Show an annotated title with all its notes."""
    store: AnnotationStore = ctx.obj["store"]
    collection = load_or_empty(store)
    display_annotation(_select_or_exit(collection, query))


from . import backups as _backups  # noqa: F401,E402
from . import browse as _browse  # noqa: F401,E402


def main() -> None:
    """Entry point."""
    cli()


if __name__ == "__main__":
    main()
