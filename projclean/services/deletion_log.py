from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path

from projclean.models.enums import DeletionReason

LOGGER = logging.getLogger(__name__)


def format_entry(path: Path, reason: DeletionReason, backup_path: Path | None, when: datetime) -> str:
    stamp = when.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    line = f"{stamp} - DELETED: {path} - REASON: {reason.label}"
    if backup_path is not None:
        line += f" - BACKUP: {backup_path}"
    return line + "\n"


class DeletionLog:
    """Append-only record of every deletion carried out."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def record(self, path: Path, reason: DeletionReason, backup_path: Path | None = None) -> None:
        line = format_entry(path, reason, backup_path, datetime.now(UTC))
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", encoding="utf-8") as fh:
                fh.write(line)
        except OSError as exc:
            LOGGER.error("Cannot write deletion log %s: %s", self.path, exc)
