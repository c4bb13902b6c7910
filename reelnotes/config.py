"""Paths and defaults for reelnotes."""

import os
from pathlib import Path

STATE_DIR = Path.home() / ".local" / "state" / "reelnotes"
STORE_PATH_ENV = "REELNOTES_STORE_PATH"

DEFAULT_STORE_PATH = Path(os.environ[STORE_PATH_ENV]) if os.environ.get(STORE_PATH_ENV) else STATE_DIR / "user_prod.json"
DEFAULT_BACKUP_DIR = STATE_DIR / "backups"
MAX_BACKUPS = 10  # Keep last 10 backups

# Display limits
DEFAULT_DISPLAY_LIMIT = 10

TEMP_SUFFIX = "_temp"


def temp_path_for(store_path: Path) -> Path:
    """Sibling file a save is written to before it is renamed over ``store_path``.

    ``user_prod.json`` is staged as ``user_prod_temp.json`` in the same
    directory, so the final rename never crosses filesystems.
    """
    return store_path.with_name(f"{store_path.stem}{TEMP_SUFFIX}{store_path.suffix}")
