"""Unit tests for configuration helpers."""

from pathlib import Path

from reelnotes.config import temp_path_for


class TestTempPath:
    def test_sibling_name(self):
        assert temp_path_for(Path("/data/user_prod.json")) == Path("/data/user_prod_temp.json")

    def test_without_suffix(self):
        assert temp_path_for(Path("/data/notes")) == Path("/data/notes_temp")
