from __future__ import annotations

import contextlib
import logging
import os
import shutil
import time
from datetime import date
from pathlib import Path
from typing import Callable

from result import Err, Ok, Result

from projclean.config.schema import AppConfig
from projclean.models.cleanup import BackupRecord

LOGGER = logging.getLogger(__name__)

_PARTIAL_SUFFIX = ".partial"


def _parse_partition(name: str) -> date | None:
    try:
        return date.fromisoformat(name)
    except ValueError:
        return None


class BackupManager:
    """Date-partitioned copies of files taken before they are deleted."""

    def __init__(self, root: Path, config: AppConfig, today: Callable[[], date] = date.today) -> None:
        self._root = root
        self._config = config
        self._today = today

    @property
    def backup_root(self) -> Path:
        return self._root / self._config.backup_dir

    def _relative(self, path: Path) -> Path:
        try:
            return path.relative_to(self._root)
        except ValueError:
            # Outside the project root: keep the absolute layout under the partition.
            absolute = path.absolute()
            return absolute.relative_to(absolute.anchor)

    def backup_file(self, path: Path) -> Result[BackupRecord, str]:
        partition = self._today()
        target = self.backup_root / partition.isoformat() / self._relative(path)
        partial = target.with_name(target.name + _PARTIAL_SUFFIX)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(path, partial, follow_symlinks=False)
            os.replace(partial, target)
        except OSError as exc:
            # The partial may sit under a path component that is not a directory.
            with contextlib.suppress(OSError):
                partial.unlink(missing_ok=True)
            return Err(f"Cannot back up {path}: {exc}")
        except BaseException:
            # Interrupted mid-copy: never leave a truncated backup behind.
            with contextlib.suppress(OSError):
                partial.unlink(missing_ok=True)
            raise

        return Ok(BackupRecord(source=path, backup_path=target, partition=partition, created_ts=time.time()))

    def sweep(self, today: date | None = None, dry_run: bool = False) -> list[Path]:
        """Remove partitions strictly older than the retention window.

        With *dry_run* the expired partitions are only reported.
        """
        backup_root = self.backup_root
        if not backup_root.is_dir():
            return []

        current = today or self._today()
        removed: list[Path] = []
        for child in sorted(backup_root.iterdir()):
            partition = _parse_partition(child.name)
            if partition is None or not child.is_dir():
                continue
            if (current - partition).days <= self._config.backup_retention_days:
                continue
            if dry_run:
                LOGGER.info("Would remove old backup (dry run): %s", child.name)
                removed.append(child)
                continue
            try:
                shutil.rmtree(child)
            except OSError as exc:
                LOGGER.error("Cannot remove backup partition %s: %s", child, exc)
                continue
            LOGGER.info("Removed old backup: %s", child.name)
            removed.append(child)
        return removed
