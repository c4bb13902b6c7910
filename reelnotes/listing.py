"""Unified list of movies and series for browsing."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from .models import Movie, Production, Series


class EntryKind(str, Enum):
    MOVIE = "movie"
    SERIES = "series"
    NONE = "none"


@dataclass(frozen=True)
class EntryId:
    """Identity of a list entry: production id tagged with its kind.

    Movie and series ids come from separate id spaces, so a movie and a
    series may share an id and still be different entries.
    """

    kind: EntryKind
    id: int = 0

    @classmethod
    def movie(cls, movie_id: int) -> EntryId:
        return cls(EntryKind.MOVIE, movie_id)

    @classmethod
    def series(cls, series_id: int) -> EntryId:
        return cls(EntryKind.SERIES, series_id)

    @classmethod
    def none(cls) -> EntryId:
        return cls(EntryKind.NONE)


class ListOrdering(str, Enum):
    USER_DEFINED = "user"
    ALPHABETIC = "alpha"
    RATING_ASCENDING = "rating-asc"
    RATING_DESCENDING = "rating-desc"


@dataclass
class ListEntry:
    """One row of the unified list."""

    name: str
    poster_path: str | None = None
    rating: float = 0.0
    entry_id: EntryId = field(default_factory=EntryId.none)

    @classmethod
    def from_movie(cls, movie: Movie) -> ListEntry:
        return cls(
            name=movie.title,
            poster_path=movie.poster_path,
            rating=movie.vote_average,
            entry_id=EntryId.movie(movie.id),
        )

    @classmethod
    def from_series(cls, series: Series) -> ListEntry:
        return cls(
            name=series.name,
            poster_path=series.poster_path,
            rating=series.vote_average,
            entry_id=EntryId.series(series.id),
        )

    @classmethod
    def from_production(cls, production: Production) -> ListEntry:
        if isinstance(production, Movie):
            return cls.from_movie(production)
        if isinstance(production, Series):
            return cls.from_series(production)
        raise TypeError(f"Not a movie or series: {type(production).__name__}")

    def is_selected(self, selected: EntryId) -> bool:
        """Whether ``selected`` refers to this entry.

        Kinds must match; a NONE selection never matches, not even an entry
        whose own id is NONE.
        """
        if selected.kind is EntryKind.NONE:
            return False
        return self.entry_id.kind is selected.kind and self.entry_id.id == selected.id


def build_entries(productions: Iterable[Production]) -> list[ListEntry]:
    """Project catalog records into list entries, keeping their order."""
    return [ListEntry.from_production(p) for p in productions]


def order_entries(entries: Iterable[ListEntry], ordering: ListOrdering) -> list[ListEntry]:
    """Return a new list of ``entries`` in the requested order.

    USER_DEFINED keeps the order the entries were given in, which is the
    order the user's list was persisted in. Sorts are stable.
    """
    entries = list(entries)
    if ordering is ListOrdering.USER_DEFINED:
        return entries
    if ordering is ListOrdering.ALPHABETIC:
        return sorted(entries, key=lambda e: e.name.casefold())
    if ordering is ListOrdering.RATING_ASCENDING:
        return sorted(entries, key=lambda e: e.rating)
    if ordering is ListOrdering.RATING_DESCENDING:
        return sorted(entries, key=lambda e: e.rating, reverse=True)
    raise ValueError(f"Unknown ordering: {ordering}")


def find_selected(entries: Iterable[ListEntry], selected: EntryId) -> ListEntry | None:
    """Return the entry ``selected`` refers to, if it is in the list."""
    for entry in entries:
        if entry.is_selected(selected):
            return entry
    return None
