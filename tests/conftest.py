"""Shared test fixtures."""

from pathlib import Path

import pytest

from reelnotes.models import AnnotationCollection, Movie, SeasonNotes, Series, UserMovie, UserSeries
from reelnotes.store import AnnotationStore


@pytest.fixture
def tmp_store_path(tmp_path: Path) -> Path:
    """Create a temporary store path."""
    return tmp_path / "user_prod.json"


@pytest.fixture
def store(tmp_store_path: Path) -> AnnotationStore:
    return AnnotationStore(tmp_store_path)


@pytest.fixture
def movie() -> Movie:
    return Movie(
        id=5,
        title="Alien",
        original_language="en",
        overview="In space no one can hear you scream.",
        popularity=61.5,
        poster_path="/alien.jpg",
        release_date="1979-05-25",
        vote_average=8.2,
        vote_count=14000,
        adult=False,
    )


@pytest.fixture
def series() -> Series:
    return Series(
        id=5,
        name="The Wire",
        original_language="en",
        overview="Baltimore, from both sides of the law.",
        popularity=88.0,
        poster_path=None,
        first_air_date="2002-06-02",
        vote_average=8.6,
    )


@pytest.fixture
def collection(movie: Movie, series: Series) -> AnnotationCollection:
    return AnnotationCollection(
        series=[
            UserSeries(
                series=series,
                user_rating=9.5,
                note="Season 4 is the best",
                season_notes=[
                    SeasonNotes(note="Slow start", episode_notes=["", "McNulty"]),
                    SeasonNotes(note="The docks", episode_notes=[]),
                ],
            )
        ],
        movies=[UserMovie(movie=movie, user_rating=8.0, note="Rewatch in the dark")],
    )
