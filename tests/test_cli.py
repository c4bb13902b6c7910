"""Integration tests for CLI commands."""

import json
from pathlib import Path

import click
import pytest
from click.testing import CliRunner

from reelnotes.cli import cli
from reelnotes.models import AnnotationCollection, Series, UserSeries
from reelnotes.store import AnnotationStore


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture
def invoke(runner: CliRunner, store: AnnotationStore):
    """Invoke the CLI against the temporary store."""

    def _invoke(*args: str, input: str | None = None):
        return runner.invoke(cli, ["--store", str(store.path), *args], input=input)

    return _invoke


@pytest.fixture
def movie_file(tmp_path: Path) -> Path:
    path = tmp_path / "movie.json"
    path.write_text(
        json.dumps(
            {
                "id": 27205,
                "title": "Inception",
                "original_language": "en",
                "overview": "A thief who steals corporate secrets.",
                "popularity": 90.2,
                "poster_path": "/inception.jpg",
                "release_date": "2010-07-15",
                "vote_average": 8.4,
                "vote_count": 35000,
                "adult": False,
                "genre_ids": [28, 878],
            }
        )
    )
    return path


@pytest.fixture
def series_file(tmp_path: Path) -> Path:
    path = tmp_path / "series.json"
    path.write_text(
        json.dumps(
            {
                "id": 1396,
                "name": "Breaking Bad",
                "original_language": "en",
                "overview": "A chemistry teacher turns to crime.",
                "popularity": 250.0,
                "poster_path": "/bb.jpg",
                "first_air_date": "2008-01-20",
                "vote_average": 8.9,
                "seasons": [
                    {"season_number": 0, "episode_count": 9},
                    {"season_number": 1, "episode_count": 7},
                    {"season_number": 2, "episode_count": 13},
                ],
            }
        )
    )
    return path


class TestAddCommand:
    def test_add_movie(self, invoke, store: AnnotationStore, movie_file: Path):
        result = invoke("add", "movie", str(movie_file), "--rating", "9", "--note", "Spinning top")

        assert result.exit_code == 0, result.output
        assert "Saved: [movie] Inception" in result.output
        collection = store.load()
        assert collection.movies[0].movie.title == "Inception"
        assert collection.movies[0].user_rating == 9.0
        assert collection.movies[0].note == "Spinning top"

    def test_add_series_grows_notes_from_seasons(self, invoke, store: AnnotationStore, series_file: Path):
        result = invoke("add", "series", str(series_file))

        assert result.exit_code == 0, result.output
        user_series = store.load().series[0]
        assert [len(s.episode_notes) for s in user_series.season_notes] == [7, 13]

    def test_readd_keeps_notes(self, invoke, store: AnnotationStore, series_file: Path):
        invoke("add", "series", str(series_file), "--note", "Say my name")
        invoke("episode-note", "Breaking Bad", "1", "1", "Pilot")

        data = json.loads(series_file.read_text())
        data["seasons"].append({"season_number": 3, "episode_count": 13})
        data["vote_average"] = 9.0
        series_file.write_text(json.dumps(data))
        result = invoke("add", "series", str(series_file))

        assert result.exit_code == 0, result.output
        collection = store.load()
        assert len(collection.series) == 1
        user_series = collection.series[0]
        assert user_series.note == "Say my name"
        assert user_series.series.vote_average == 9.0
        assert len(user_series.season_notes) == 3
        assert user_series.season_notes[0].episode_notes[0] == "Pilot"

    def test_add_invalid_record(self, invoke, store: AnnotationStore, tmp_path: Path):
        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps({"id": 1, "title": "No details"}))

        result = invoke("add", "movie", str(bad))

        assert result.exit_code == 1
        assert "Invalid movie record" in result.output
        assert not store.exists()

    def test_add_series_with_runaway_season_number(self, invoke, store: AnnotationStore, series_file: Path):
        data = json.loads(series_file.read_text())
        data["seasons"].append({"season_number": 1000000000, "episode_count": 1})
        series_file.write_text(json.dumps(data))

        result = invoke("add", "series", str(series_file))

        assert result.exit_code == 1
        assert "Invalid series record" in result.output
        assert not store.exists()

    def test_add_backs_up_previous_store(self, invoke, store: AnnotationStore, movie_file: Path, series_file: Path):
        invoke("add", "movie", str(movie_file))
        invoke("add", "series", str(series_file))

        backups = list((store.path.parent / "backups").glob("reelnotes_*_pre_add.json"))
        assert len(backups) == 1


class TestNoteCommands:
    @pytest.fixture(autouse=True)
    def seeded(self, store: AnnotationStore, collection: AnnotationCollection) -> None:
        store.save(collection)

    def test_rate(self, invoke, store: AnnotationStore):
        result = invoke("rate", "Alien", "6.5")
        assert result.exit_code == 0, result.output
        assert store.load().find_movie(5).user_rating == 6.5

    def test_rate_out_of_range(self, invoke):
        result = invoke("rate", "Alien", "11")
        assert result.exit_code == 2

    def test_note(self, invoke, store: AnnotationStore):
        result = invoke("note", "wire", "All the pieces matter")
        assert result.exit_code == 0, result.output
        assert store.load().find_series(5).note == "All the pieces matter"

    def test_season_note_grows_hierarchy(self, invoke, store: AnnotationStore):
        result = invoke("season-note", "The Wire", "4", "The schools")

        assert result.exit_code == 0, result.output
        user_series = store.load().find_series(5)
        assert [s.note for s in user_series.season_notes] == ["Slow start", "The docks", "", "The schools"]

    def test_episode_note(self, invoke, store: AnnotationStore):
        result = invoke("episode-note", "The Wire", "2", "3", "Frank Sobotka")

        assert result.exit_code == 0, result.output
        assert "S02E03" in result.output
        user_series = store.load().find_series(5)
        assert user_series.season_notes[1].episode_notes == ["", "", "Frank Sobotka"]
        assert user_series.season_notes[0].episode_notes == ["", "McNulty"]

    def test_episode_note_on_movie(self, invoke):
        result = invoke("episode-note", "Alien", "1", "1", "nope")
        assert result.exit_code == 1
        assert "is not a series" in result.output

    def test_no_match(self, invoke, store: AnnotationStore):
        before = store.path.read_text()
        result = invoke("note", "Seinfeld", "text")
        assert result.exit_code == 1
        assert "No annotated titles match 'Seinfeld'" in result.output
        assert store.path.read_text() == before

    def test_show(self, invoke):
        result = invoke("show", "The Wire")

        assert result.exit_code == 0, result.output
        assert "[series] The Wire (id 5)" in result.output
        assert "Season 1: Slow start" in result.output
        assert "E02: McNulty" in result.output

    def test_multiple_matches_prompt(
        self, invoke, store: AnnotationStore, collection: AnnotationCollection, monkeypatch: pytest.MonkeyPatch
    ):
        collection.series.append(UserSeries(series=Series(id=8, name="The Wire Reunion")))
        store.save(collection)
        monkeypatch.setattr(click, "prompt", lambda *args, **kwargs: 2)

        result = invoke("note", "wire", "picked")

        assert result.exit_code == 0, result.output
        assert store.load().find_series(8).note == "picked"


class TestListCommand:
    def test_list_empty(self, invoke):
        result = invoke("list")
        assert result.exit_code == 0
        assert "No annotated titles yet." in result.output

    def test_list_user_order(self, invoke, store: AnnotationStore, collection: AnnotationCollection):
        store.save(collection)
        result = invoke("list")

        assert result.exit_code == 0
        assert result.output.index("The Wire") < result.output.index("Alien")

    def test_list_json_rating_desc(self, invoke, store: AnnotationStore, collection: AnnotationCollection):
        store.save(collection)
        result = invoke("list", "--order", "rating-desc", "--format", "json")

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert [(e["kind"], e["id"], e["rating"]) for e in data] == [("series", 5, 8.6), ("movie", 5, 8.2)]

    def test_list_alpha(self, invoke, store: AnnotationStore, collection: AnnotationCollection):
        store.save(collection)
        result = invoke("list", "-o", "alpha", "-f", "json")
        assert [e["name"] for e in json.loads(result.output)] == ["Alien", "The Wire"]

    def test_corrupt_store_is_an_error(self, invoke, store: AnnotationStore):
        store.path.write_text(json.dumps({"series": []}))

        result = invoke("list")

        assert result.exit_code == 1
        assert "Failed to load" in result.output
        assert "movies" in result.output
