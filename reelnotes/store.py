"""JSON file storage for user annotations.

The whole collection is rewritten on every save. A save is staged in a
sibling temp file and only renamed over the store file once fully written,
so the store file always holds either the previous or the new document.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from . import config
from .models import AnnotationCollection, RecordError, UserMovie, UserSeries

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Base class for annotation store failures."""


class StoreIOError(StoreError):
    """The store file could not be opened, written or renamed."""

    def __init__(self, message: str, path: Path):
        super().__init__(message)
        self.path = path


class StoreNotFoundError(StoreIOError):
    """The store file (or its directory) does not exist."""


class StorePermissionError(StoreIOError):
    """The process is not allowed to read or write the store file."""


class StoreDecodeError(StoreError):
    """The store file is not a well-formed annotation document."""


def _io_error(err: OSError, path: Path) -> StoreIOError:
    if isinstance(err, FileNotFoundError):
        return StoreNotFoundError(str(err), path)
    if isinstance(err, PermissionError):
        return StorePermissionError(str(err), path)
    return StoreIOError(str(err), path)


def encode_collection(collection: AnnotationCollection) -> dict[str, Any]:
    """Build the on-disk document for a collection."""
    return {
        "series": [s.to_dict() for s in collection.series],
        "movies": [m.to_dict() for m in collection.movies],
    }


def decode_collection(document: Any) -> AnnotationCollection:
    """Rebuild a collection from a parsed document.

    Both top-level keys are required; a document without ``movies`` is an
    error, not an empty movie list. Unknown keys are ignored at every level.
    """
    if not isinstance(document, dict):
        raise StoreDecodeError(f"expected a JSON object at top level, got {type(document).__name__}")

    for key in ("series", "movies"):
        if key not in document:
            raise StoreDecodeError(f"missing required key '{key}'")
        if not isinstance(document[key], list):
            raise StoreDecodeError(f"'{key}' must be an array, got {type(document[key]).__name__}")

    try:
        series = [UserSeries.from_dict(entry) for entry in document["series"]]
        movies = [UserMovie.from_dict(entry) for entry in document["movies"]]
    except RecordError as err:
        raise StoreDecodeError(str(err)) from err

    return AnnotationCollection(series=series, movies=movies)


class AnnotationStore:
    """Single-file store for the user's annotation collection."""

    def __init__(self, path: Path | None = None):
        self.path = path or config.DEFAULT_STORE_PATH

    @property
    def temp_path(self) -> Path:
        return config.temp_path_for(self.path)

    def exists(self) -> bool:
        """Whether a committed store file is present."""
        return self.path.is_file()

    def save(self, collection: AnnotationCollection) -> None:
        """Persist the whole collection.

        Raises:
            StoreIOError: the temp file could not be written or renamed. The
                store file still holds the previously saved document.
        """
        payload = json.dumps(encode_collection(collection), indent=2)
        temp_path = self.temp_path

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(temp_path, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
        except OSError as err:
            raise _io_error(err, temp_path) from err

        try:
            os.replace(temp_path, self.path)
        except OSError as err:
            raise _io_error(err, self.path) from err

        logger.debug(
            "Saved %d series and %d movies to %s", len(collection.series), len(collection.movies), self.path
        )

    def load(self) -> AnnotationCollection:
        """Read and decode the store file.

        Raises:
            StoreIOError: the file could not be opened or read.
            StoreDecodeError: the file is not valid JSON or lacks required fields.
        """
        try:
            with open(self.path, encoding="utf-8") as f:
                document = json.load(f)
        except OSError as err:
            raise _io_error(err, self.path) from err
        except (ValueError, RecursionError) as err:
            raise StoreDecodeError(f"{self.path}: {err}") from err

        collection = decode_collection(document)
        logger.debug(
            "Loaded %d series and %d movies from %s", len(collection.series), len(collection.movies), self.path
        )
        return collection


def save_collection(collection: AnnotationCollection, path: Path | None = None) -> None:
    """Save ``collection`` to ``path`` (the default store when omitted)."""
    AnnotationStore(path).save(collection)


def load_collection(path: Path | None = None) -> AnnotationCollection:
    """Load the collection stored at ``path`` (the default store when omitted)."""
    return AnnotationStore(path).load()
