"""Store file backup management."""

from __future__ import annotations

import logging
import os
import shutil
from datetime import datetime
from pathlib import Path

from . import config
from .store import AnnotationStore

logger = logging.getLogger(__name__)

BACKUP_PREFIX = "reelnotes"


class BackupManager:
    """Handle snapshot backups of the annotation store file."""

    def __init__(self, store_path: Path, default_store_path: Path | None = None, default_backup_dir: Path | None = None):
        self.store_path = store_path
        self.default_store_path = default_store_path or config.DEFAULT_STORE_PATH
        self.default_backup_dir = default_backup_dir or config.DEFAULT_BACKUP_DIR

    def create_backup_file(self, reason: str = "manual") -> Path | None:
        """Copy the committed store file into the backup dir.

        Returns:
            Path to the backup, or None if nothing has been saved yet
        """
        if not self.store_path.is_file():
            return None

        backup_dir = self._get_backup_dir()
        backup_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        backup_path = backup_dir / f"{BACKUP_PREFIX}_{timestamp}_{reason}{self.store_path.suffix}"

        shutil.copy2(self.store_path, backup_path)
        self._cleanup_old_backups(backup_dir)

        return backup_path

    def list_backups(self) -> list[dict]:
        """List available backups, most recent first."""
        backup_dir = self._get_backup_dir()
        if not backup_dir.exists():
            return []

        backups = []
        for backup_file in self._sorted_backups(backup_dir):
            timestamp = self._parse_backup_timestamp(backup_file) or datetime.fromtimestamp(backup_file.stat().st_mtime)
            backups.append(
                {
                    "path": backup_file,
                    "timestamp": timestamp,
                    "reason": self._parse_backup_reason(backup_file),
                    "size_kb": backup_file.stat().st_size // 1024,
                }
            )

        return backups

    def restore_backup(self, backup_path: Path) -> bool:
        """Replace the store file with a backup.

        The backup must load as an annotation collection, otherwise the
        store's ``StoreError`` is raised and the store file is left alone.
        It is staged at the store's temp path and renamed into place, the
        same way a save commits.
        """
        if not backup_path.exists():
            return False

        AnnotationStore(backup_path).load()

        temp_path = config.temp_path_for(self.store_path)
        self.store_path.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(backup_path, temp_path)
        os.replace(temp_path, self.store_path)
        logger.info("Restored %s from %s", self.store_path, backup_path)
        return True

    def _get_backup_dir(self) -> Path:
        if self.store_path != self.default_store_path:
            return self.store_path.parent / "backups"
        return self.default_backup_dir

    def _sorted_backups(self, backup_dir: Path) -> list[Path]:
        return sorted(
            backup_dir.glob(f"{BACKUP_PREFIX}_*"),
            key=lambda p: self._parse_backup_timestamp(p) or datetime.fromtimestamp(p.stat().st_mtime),
            reverse=True,
        )

    def _cleanup_old_backups(self, backup_dir: Path) -> None:
        """Remove old backups, keeping only the most recent MAX_BACKUPS."""
        for old_backup in self._sorted_backups(backup_dir)[config.MAX_BACKUPS :]:
            logger.info("Removing old backup %s", old_backup.name)
            old_backup.unlink()

    def _parse_backup_timestamp(self, backup_file: Path) -> datetime | None:
        """Parse timestamp from a ``reelnotes_<date>_<time>_<micros>_<reason>`` name."""
        parts = backup_file.stem.split("_")
        if len(parts) < 4:
            return None

        try:
            return datetime.strptime(f"{parts[1]}_{parts[2]}_{parts[3]}", "%Y%m%d_%H%M%S_%f")
        except ValueError:
            return None

    def _parse_backup_reason(self, backup_file: Path) -> str:
        parts = backup_file.stem.split("_")
        if len(parts) >= 5:
            return "_".join(parts[4:])
        return "unknown"
