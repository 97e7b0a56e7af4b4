from __future__ import annotations

import stat as statmod
from dataclasses import dataclass
from pathlib import Path

from result import Err, Ok, Result

from projclean.models.enums import NodeKind


@dataclass(slots=True, frozen=True)
class DirectoryEntry:
    path: Path
    kind: NodeKind
    size_bytes: int
    accessed_ts: float | None

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def is_dir(self) -> bool:
        return self.kind is NodeKind.DIRECTORY


def read_entry(path: Path) -> Result[DirectoryEntry, str]:
    """Snapshot the metadata of *path* without following symlinks."""
    try:
        st = path.lstat()
    except OSError as exc:
        return Err(f"Cannot stat {path}: {exc}")

    if statmod.S_ISDIR(st.st_mode):
        kind = NodeKind.DIRECTORY
    elif statmod.S_ISREG(st.st_mode):
        kind = NodeKind.FILE
    else:
        # Symlinks, FIFOs, sockets and devices are never read or removed.
        kind = NodeKind.OTHER
    return Ok(
        DirectoryEntry(
            path=path,
            kind=kind,
            size_bytes=st.st_size if kind is NodeKind.FILE else 0,
            accessed_ts=st.st_atime,
        )
    )
