from __future__ import annotations

import logging
import os
from pathlib import Path

from projclean.config.schema import AppConfig
from projclean.models.entry import DirectoryEntry
from projclean.models.enums import Classification, NodeKind

LOGGER = logging.getLogger(__name__)


def matches_essential_pattern(name: str, config: AppConfig) -> bool:
    return any(pattern.search(name) for pattern in config.compiled_patterns)


def is_essential(path: Path, config: AppConfig) -> bool:
    """Protected by name pattern, by being an essential directory, or by sitting directly inside one."""
    if matches_essential_pattern(path.name, config):
        return True
    if path.name in config.essential_directories:
        return True
    return path.parent.name in config.essential_directories


def is_build_artifact(path: Path, config: AppConfig) -> bool:
    name = path.name.lower()
    suffix = path.suffix.lower()
    return (bool(suffix) and suffix in config.artifact_extensions) or name in config.artifact_extensions


def is_stale(entry: DirectoryEntry, config: AppConfig, now: float) -> bool:
    # Unknown access time means "recently accessed": never delete on missing data.
    if entry.accessed_ts is None:
        return False
    return now - entry.accessed_ts > config.access_threshold_seconds


def is_empty_directory(path: Path) -> bool:
    try:
        with os.scandir(path) as entries:
            return next(entries, None) is None
    except OSError as exc:
        LOGGER.warning("Cannot check whether %s is empty: %s", path, exc)
        return False


def classify(entry: DirectoryEntry, config: AppConfig, now: float, is_empty: bool = False) -> Classification:
    """Return the single classification for *entry*.

    Essential always wins. Files then check artifact before staleness;
    directories only become candidates when *is_empty* is set by the caller
    after their children were processed.
    """
    if is_essential(entry.path, config):
        return Classification.ESSENTIAL

    if entry.kind is NodeKind.OTHER:
        return Classification.ORDINARY
    if entry.is_dir:
        return Classification.EMPTY_DIRECTORY if is_empty else Classification.ORDINARY

    if is_build_artifact(entry.path, config):
        return Classification.BUILD_ARTIFACT
    if is_stale(entry, config, now):
        return Classification.STALE_UNUSED
    return Classification.ORDINARY
