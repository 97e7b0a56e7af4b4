from __future__ import annotations

import logging
import time
from pathlib import Path

from projclean.config.schema import AppConfig
from projclean.models.entry import DirectoryEntry, read_entry
from projclean.models.enums import NodeKind
from projclean.models.report import AnalysisReport, DirectoryStats, FileFinding
from projclean.services.classifier import matches_essential_pattern
from projclean.services.hashing import DuplicateTracker, file_digest
from projclean.services.naming import check_naming

LOGGER = logging.getLogger(__name__)

NO_EXTENSION = "no-extension"


class _Analysis:
    def __init__(self, root: Path, config: AppConfig, now: float) -> None:
        self.root = root
        self.config = config
        self.now = now
        self.report = AnalysisReport()
        self.duplicates = DuplicateTracker()

    def rel(self, path: Path) -> str:
        try:
            return path.relative_to(self.root).as_posix()
        except ValueError:
            return path.as_posix()

    def analyze_dir(self, directory: Path) -> DirectoryStats:
        stats = DirectoryStats()
        try:
            children = sorted(directory.iterdir(), key=lambda p: p.name)
        except OSError as exc:
            LOGGER.error("Error analyzing directory %s: %s", directory, exc)
            self.report.access_errors += 1
            return stats

        LOGGER.debug("Found %d items in %s", len(children), directory)
        for child in children:
            read = read_entry(child)
            if read.is_err():
                LOGGER.warning("%s", read.unwrap_err())
                self.report.access_errors += 1
                continue
            entry = read.unwrap()

            if entry.kind is NodeKind.OTHER:
                LOGGER.info("Skipping special entry: %s", entry.path)
                self.report.skipped_special += 1
                continue
            if entry.is_dir:
                if entry.name in self.config.analysis_skip_directories:
                    LOGGER.debug("Skipping %s directory: %s", entry.name, entry.path)
                    stats.directories += 1
                    continue
                stats.absorb(self.analyze_dir(entry.path))
            else:
                stats.files += 1
                stats.size_bytes += entry.size_bytes
                self.analyze_file(entry)

        self.report.directory_stats[self.rel(directory)] = stats
        LOGGER.debug(
            "Finished analyzing %s: %d files, %d directories", directory, stats.files, stats.directories
        )
        return stats

    def analyze_file(self, entry: DirectoryEntry) -> None:
        rel = self.rel(entry.path)
        ext = entry.path.suffix.lower() or NO_EXTENSION
        self.report.file_types[ext] = self.report.file_types.get(ext, 0) + 1

        self.report.naming_issues.extend(check_naming(rel))

        if entry.size_bytes > self.config.large_file_bytes:
            self.report.large_files.append(
                FileFinding(path=rel, size_bytes=entry.size_bytes, accessed_ts=entry.accessed_ts or 0.0)
            )

        accessed = entry.accessed_ts
        if accessed is not None and self._likely_unused(entry.name, accessed):
            self.report.unused_files.append(FileFinding(path=rel, size_bytes=entry.size_bytes, accessed_ts=accessed))

        digest = file_digest(entry.path)
        if digest.is_err():
            LOGGER.warning("%s", digest.unwrap_err())
            self.report.access_errors += 1
            return
        self.duplicates.add(rel, digest.unwrap())

    def _likely_unused(self, name: str, accessed_ts: float) -> bool:
        if matches_essential_pattern(name, self.config):
            return False
        return self.now - accessed_ts > self.config.unused_threshold_seconds


def analyze_project(root: Path, config: AppConfig, now: float | None = None) -> AnalysisReport:
    """Walk every configured directory and collect structure statistics.

    Read-only: files are hashed for duplicate detection but nothing is
    modified.
    """
    analysis = _Analysis(root, config, now if now is not None else time.time())
    for name, rel in config.directories.items():
        target = root / rel
        if not target.is_dir():
            LOGGER.info("Directory does not exist: %s (%s)", target, name)
            analysis.report.missing_directories.append(rel)
            continue
        LOGGER.info("Analyzing %s directory: %s", name, target)
        analysis.analyze_dir(target)

    analysis.report.duplicates = analysis.duplicates.groups()
    return analysis.report
