"""Data models for reelnotes."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar

T = TypeVar("T")

YOUTUBE_WATCH_URL = "https://youtube.com/watch?v={key}"


class RecordError(ValueError):
    """A catalog or annotation record is missing a field or has the wrong type."""


_MISSING = object()


def require(data: dict[str, Any], key: str, kind: type | tuple[type, ...], where: str) -> Any:
    """Fetch a required field from a decoded JSON object and check its type."""
    value = data.get(key, _MISSING)
    if value is _MISSING:
        raise RecordError(f"{where}: missing field '{key}'")
    return _check_type(value, key, kind, where)


def optional(data: dict[str, Any], key: str, kind: type | tuple[type, ...], where: str, default: Any = None) -> Any:
    """Fetch an optional field; absent and null both yield the default."""
    value = data.get(key)
    if value is None:
        return default
    return _check_type(value, key, kind, where)


def _check_type(value: Any, key: str, kind: type | tuple[type, ...], where: str) -> Any:
    # bool is an int subclass; JSON true must not pass as a number
    kinds = kind if isinstance(kind, tuple) else (kind,)
    if isinstance(value, bool) and bool not in kinds:
        raise RecordError(f"{where}: field '{key}' has type bool")
    if not isinstance(value, kinds):
        raise RecordError(f"{where}: field '{key}' has type {type(value).__name__}")
    if float in kinds and isinstance(value, int):
        return float(value)
    return value


def _as_object(data: Any, where: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise RecordError(f"{where}: expected an object, got {type(data).__name__}")
    return data


_NUMBER = (int, float)


# Catalog records


@dataclass
class Movie:
    """A movie as fetched from the media database."""

    id: int
    title: str
    original_language: str = ""
    overview: str = ""
    popularity: float = 0.0
    poster_path: str | None = None
    release_date: str = ""
    vote_average: float = 0.0
    vote_count: int = 0
    adult: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> Movie:
        data = _as_object(data, "movie")
        return cls(
            id=require(data, "id", int, "movie"),
            title=require(data, "title", str, "movie"),
            original_language=require(data, "original_language", str, "movie"),
            overview=require(data, "overview", str, "movie"),
            popularity=require(data, "popularity", _NUMBER, "movie"),
            poster_path=optional(data, "poster_path", str, "movie"),
            release_date=require(data, "release_date", str, "movie"),
            vote_average=require(data, "vote_average", _NUMBER, "movie"),
            vote_count=require(data, "vote_count", int, "movie"),
            adult=require(data, "adult", bool, "movie"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "original_language": self.original_language,
            "overview": self.overview,
            "popularity": self.popularity,
            "poster_path": self.poster_path,
            "release_date": self.release_date,
            "vote_average": self.vote_average,
            "vote_count": self.vote_count,
            "adult": self.adult,
        }


@dataclass
class Series:
    """A TV series as fetched from the media database."""

    id: int
    name: str
    original_language: str = ""
    overview: str = ""
    popularity: float = 0.0
    poster_path: str | None = None
    first_air_date: str = ""
    vote_average: float = 0.0
    adult: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> Series:
        data = _as_object(data, "series")
        return cls(
            id=require(data, "id", int, "series"),
            name=require(data, "name", str, "series"),
            original_language=require(data, "original_language", str, "series"),
            overview=require(data, "overview", str, "series"),
            popularity=require(data, "popularity", _NUMBER, "series"),
            poster_path=optional(data, "poster_path", str, "series"),
            first_air_date=require(data, "first_air_date", str, "series"),
            vote_average=require(data, "vote_average", _NUMBER, "series"),
            adult=optional(data, "adult", bool, "series", default=False),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "original_language": self.original_language,
            "overview": self.overview,
            "popularity": self.popularity,
            "poster_path": self.poster_path,
            "first_air_date": self.first_air_date,
            "vote_average": self.vote_average,
            "adult": self.adult,
        }


Production = Movie | Series

# Upper bounds for season data read from catalog records
MAX_SEASONS = 500
MAX_EPISODES_PER_SEASON = 5000


def season_episode_counts(data: Any) -> list[int]:
    """Episode count per regular season from a series details document.

    Uses the ``seasons`` array (``season_number``/``episode_count``) when
    present, skipping season 0 (specials); missing seasons in between count
    as empty. Returns an empty list when the document has no season data.
    """
    data = _as_object(data, "series")
    seasons = optional(data, "seasons", list, "series", default=[])
    counts: dict[int, int] = {}
    for season in seasons:
        season = _as_object(season, "season")
        number = require(season, "season_number", int, "season")
        if number < 1:
            continue
        if number > MAX_SEASONS:
            raise RecordError(f"season: season_number {number} exceeds {MAX_SEASONS}")
        episode_count = optional(season, "episode_count", int, "season", default=0)
        if not 0 <= episode_count <= MAX_EPISODES_PER_SEASON:
            raise RecordError(f"season: episode_count {episode_count} outside 0-{MAX_EPISODES_PER_SEASON}")
        counts[number] = episode_count
    if not counts:
        return []
    return [counts.get(number, 0) for number in range(1, max(counts) + 1)]


@dataclass
class ExternalIds:
    """Cross-references for a production in other databases and social sites."""

    id: int
    facebook_id: str | None = None
    freebase_id: str | None = None
    freebase_mid: str | None = None
    imdb_id: str | None = None
    instagram_id: str | None = None
    tvdb_id: int | None = None
    tvrage_id: int | None = None
    twitter_id: str | None = None
    wikidata_id: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> ExternalIds:
        data = _as_object(data, "external_ids")
        where = "external_ids"
        return cls(
            id=require(data, "id", int, where),
            facebook_id=optional(data, "facebook_id", str, where),
            freebase_id=optional(data, "freebase_id", str, where),
            freebase_mid=optional(data, "freebase_mid", str, where),
            imdb_id=optional(data, "imdb_id", str, where),
            instagram_id=optional(data, "instagram_id", str, where),
            tvdb_id=optional(data, "tvdb_id", int, where),
            tvrage_id=optional(data, "tvrage_id", int, where),
            twitter_id=optional(data, "twitter_id", str, where),
            wikidata_id=optional(data, "wikidata_id", str, where),
        )

    def as_mapping(self) -> dict[str, str | int | None]:
        """Map external system name to its identifier (None where unknown)."""
        return {
            "facebook": self.facebook_id,
            "freebase": self.freebase_id,
            "freebase_mid": self.freebase_mid,
            "imdb": self.imdb_id,
            "instagram": self.instagram_id,
            "tvdb": self.tvdb_id,
            "tvrage": self.tvrage_id,
            "twitter": self.twitter_id,
            "wikidata": self.wikidata_id,
        }


@dataclass
class Trailer:
    """A trailer video hosted on a video site."""

    name: str
    key: str
    published_at: str
    site: str
    size: int
    official: bool

    @classmethod
    def from_dict(cls, data: Any) -> Trailer:
        data = _as_object(data, "trailer")
        return cls(
            name=require(data, "name", str, "trailer"),
            key=require(data, "key", str, "trailer"),
            published_at=require(data, "published_at", str, "trailer"),
            site=require(data, "site", str, "trailer"),
            size=require(data, "size", int, "trailer"),
            official=require(data, "official", bool, "trailer"),
        )

    @property
    def youtube_url(self) -> str:
        return YOUTUBE_WATCH_URL.format(key=self.key)


# Annotations


def ensure_length(items: list[T], length: int, factory: Callable[[], T]) -> list[T]:
    """Grow ``items`` in place to at least ``length`` elements.

    New elements are built by calling ``factory`` once per slot. Existing
    elements are never touched and the list is never truncated, so calling
    with a length at or below the current one does nothing.
    """
    for _ in range(length - len(items)):
        items.append(factory())
    return items


@dataclass
class SeasonNotes:
    """Notes for one season; ``episode_notes[0]`` is episode 1."""

    note: str = ""
    episode_notes: list[str] = field(default_factory=list)

    def ensure_episodes(self, length: int) -> None:
        ensure_length(self.episode_notes, length, str)

    def set_episode_note(self, number: int, note: str) -> None:
        """Set the note for 1-based episode ``number``, growing as needed."""
        if number < 1:
            raise ValueError(f"episode numbers start at 1, got {number}")
        self.ensure_episodes(number)
        self.episode_notes[number - 1] = note

    @classmethod
    def from_dict(cls, data: Any) -> SeasonNotes:
        data = _as_object(data, "season_notes")
        episodes = require(data, "episode_notes", list, "season_notes")
        for episode in episodes:
            if not isinstance(episode, str):
                raise RecordError(f"season_notes: episode note has type {type(episode).__name__}")
        return cls(note=require(data, "note", str, "season_notes"), episode_notes=list(episodes))

    def to_dict(self) -> dict[str, Any]:
        return {"note": self.note, "episode_notes": list(self.episode_notes)}


@dataclass
class UserMovie:
    """User's rating and note for a movie."""

    movie: Movie
    user_rating: float = 0.0
    note: str = ""

    @property
    def production(self) -> Movie:
        return self.movie

    @classmethod
    def from_dict(cls, data: Any) -> UserMovie:
        data = _as_object(data, "user movie")
        return cls(
            movie=Movie.from_dict(require(data, "movie", dict, "user movie")),
            user_rating=require(data, "user_rating", _NUMBER, "user movie"),
            note=require(data, "note", str, "user movie"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"movie": self.movie.to_dict(), "user_rating": self.user_rating, "note": self.note}


@dataclass
class UserSeries:
    """User's rating, note and per-season/per-episode notes for a series."""

    series: Series
    user_rating: float = 0.0
    note: str = ""
    season_notes: list[SeasonNotes] = field(default_factory=list)

    @property
    def production(self) -> Series:
        return self.series

    def ensure_seasons(self, length: int) -> None:
        ensure_length(self.season_notes, length, SeasonNotes)

    def sync_seasons(self, episode_counts: list[int]) -> None:
        """Grow the note tree to cover ``episode_counts[i]`` episodes in season i+1.

        Notes for seasons or episodes beyond the counts are kept.
        """
        self.ensure_seasons(len(episode_counts))
        for season_notes, count in zip(self.season_notes, episode_counts):
            season_notes.ensure_episodes(count)

    def season(self, number: int) -> SeasonNotes:
        """Return notes for 1-based season ``number``, growing as needed."""
        if number < 1:
            raise ValueError(f"season numbers start at 1, got {number}")
        self.ensure_seasons(number)
        return self.season_notes[number - 1]

    @classmethod
    def from_dict(cls, data: Any) -> UserSeries:
        data = _as_object(data, "user series")
        return cls(
            series=Series.from_dict(require(data, "series", dict, "user series")),
            user_rating=require(data, "user_rating", _NUMBER, "user series"),
            note=require(data, "note", str, "user series"),
            season_notes=[SeasonNotes.from_dict(s) for s in require(data, "season_notes", list, "user series")],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "series": self.series.to_dict(),
            "user_rating": self.user_rating,
            "note": self.note,
            "season_notes": [s.to_dict() for s in self.season_notes],
        }


Annotation = UserMovie | UserSeries


@dataclass
class AnnotationCollection:
    """Every annotated series and movie, in display order."""

    series: list[UserSeries] = field(default_factory=list)
    movies: list[UserMovie] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.series and not self.movies

    def find_movie(self, movie_id: int) -> UserMovie | None:
        for user_movie in self.movies:
            if user_movie.movie.id == movie_id:
                return user_movie
        return None

    def find_series(self, series_id: int) -> UserSeries | None:
        for user_series in self.series:
            if user_series.series.id == series_id:
                return user_series
        return None

    def annotate_movie(self, movie: Movie) -> UserMovie:
        """Return the movie's annotation, appending a blank one if it has none."""
        existing = self.find_movie(movie.id)
        if existing:
            return existing
        user_movie = UserMovie(movie=movie)
        self.movies.append(user_movie)
        return user_movie

    def annotate_series(self, series: Series) -> UserSeries:
        """Return the series' annotation, appending a blank one if it has none."""
        existing = self.find_series(series.id)
        if existing:
            return existing
        user_series = UserSeries(series=series)
        self.series.append(user_series)
        return user_series

    def annotations(self) -> list[Annotation]:
        return [*self.series, *self.movies]

    def productions(self) -> list[Production]:
        """Catalog records behind every annotation, series first."""
        return [a.production for a in self.annotations()]
