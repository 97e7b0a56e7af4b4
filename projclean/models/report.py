from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class DirectoryStats:
    files: int = 0
    directories: int = 0
    size_bytes: int = 0

    def absorb(self, other: DirectoryStats) -> None:
        self.files += other.files
        self.directories += other.directories + 1
        self.size_bytes += other.size_bytes


@dataclass(slots=True)
class DuplicateGroup:
    digest: str
    paths: list[str] = field(default_factory=list)


@dataclass(slots=True, frozen=True)
class NamingIssue:
    path: str
    message: str


@dataclass(slots=True, frozen=True)
class FileFinding:
    path: str
    size_bytes: int
    accessed_ts: float


@dataclass(slots=True)
class AnalysisReport:
    directory_stats: dict[str, DirectoryStats] = field(default_factory=dict)
    file_types: dict[str, int] = field(default_factory=dict)
    duplicates: list[DuplicateGroup] = field(default_factory=list)
    naming_issues: list[NamingIssue] = field(default_factory=list)
    unused_files: list[FileFinding] = field(default_factory=list)
    large_files: list[FileFinding] = field(default_factory=list)
    missing_directories: list[str] = field(default_factory=list)
    skipped_special: int = 0
    access_errors: int = 0

    @property
    def total_files(self) -> int:
        return sum(self.file_types.values())

    def sorted_file_types(self) -> list[tuple[str, int]]:
        return sorted(self.file_types.items(), key=lambda item: (-item[1], item[0]))
