"""Shared display and selection helpers for CLI."""

import click

from ..config import DEFAULT_DISPLAY_LIMIT
from ..listing import ListEntry
from ..models import Annotation, AnnotationCollection, UserSeries
from ..utils import annotation_kind, annotation_title, find_annotations, format_rating


def format_annotation(annotation: Annotation) -> str:
    return f"[{annotation_kind(annotation)}] {annotation_title(annotation)}"


def select_annotation(
    collection: AnnotationCollection, query: str, max_results: int = DEFAULT_DISPLAY_LIMIT
) -> Annotation | None:
    """Resolve a title query to one annotation, asking when several titles match.

    Exact title matches are listed before fuzzy ones. Returns None when
    nothing matches.
    """
    matches = find_annotations(collection.annotations(), query)[:max_results]
    if not matches:
        click.echo(f"No annotated titles match '{query}'")
        return None

    if len(matches) == 1:
        return matches[0]

    click.echo(f"'{query}' matches {len(matches)} titles:")
    for i, annotation in enumerate(matches, 1):
        click.echo(f"  {i}. {format_annotation(annotation)}")

    choice = click.prompt("Which one", type=click.IntRange(1, len(matches)), default=1)
    return matches[choice - 1]


def format_entry(entry: ListEntry) -> str:
    return f"[{entry.entry_id.kind.value}] {entry.name} {format_rating(entry.rating)}"


def display_annotation(annotation: Annotation) -> None:
    """Print an annotation with its season and episode notes."""
    record = annotation.production
    click.echo(f"\n{format_annotation(annotation)} (id {record.id})")
    click.echo(f"  Catalog rating: {format_rating(record.vote_average)}")
    click.echo(f"  Your rating:    {format_rating(annotation.user_rating)}")
    if annotation.note:
        click.echo(f"  Note: {annotation.note}")

    if not isinstance(annotation, UserSeries):
        return

    for season_number, season in enumerate(annotation.season_notes, 1):
        written = [(n, note) for n, note in enumerate(season.episode_notes, 1) if note]
        if not season.note and not written:
            continue
        click.echo(f"  Season {season_number}: {season.note}")
        for episode_number, note in written:
            click.echo(f"    E{episode_number:02d}: {note}")
