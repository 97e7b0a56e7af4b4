from __future__ import annotations

import hashlib
from pathlib import Path

from result import Err, Ok, Result

from projclean.models.report import DuplicateGroup

_CHUNK_SIZE = 1024 * 1024


def file_digest(path: Path) -> Result[str, str]:
    digest = hashlib.sha256()
    try:
        with path.open("rb") as fh:
            for chunk in iter(lambda: fh.read(_CHUNK_SIZE), b""):
                digest.update(chunk)
    except OSError as exc:
        return Err(f"Cannot hash {path}: {exc}")
    return Ok(digest.hexdigest())


class DuplicateTracker:
    """Group paths by content digest in first-seen order.

    The first path observed for a digest is remembered; the group for that
    digest only materializes once a second path shows up.
    """

    def __init__(self) -> None:
        self._first_seen: dict[str, str] = {}
        self._groups: dict[str, DuplicateGroup] = {}

    def add(self, path: str, digest: str) -> None:
        first = self._first_seen.get(digest)
        if first is None:
            self._first_seen[digest] = path
            return
        if first == path:
            return

        group = self._groups.get(digest)
        if group is None:
            self._groups[digest] = DuplicateGroup(digest=digest, paths=[first, path])
        elif path not in group.paths:
            group.paths.append(path)

    def groups(self) -> list[DuplicateGroup]:
        return list(self._groups.values())
