from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any

# (json_key, attr_name, minimum), shared by from_dict and numeric clamping.
_INT_FIELDS: tuple[tuple[str, str, int], ...] = (
    ("accessThresholdDays", "access_threshold_days", 0),
    ("backupRetentionDays", "backup_retention_days", 0),
    ("largeFileBytes", "large_file_bytes", 0),
    ("unusedFactor", "unused_factor", 1),
)

_SECONDS_PER_DAY = 24 * 60 * 60


def clamp_field(value: int, field_name: str) -> int:
    """Clamp *value* to the minimum defined for *field_name* in _INT_FIELDS."""
    for _, attr, minimum in _INT_FIELDS:
        if attr == field_name:
            return max(minimum, value)
    return value


def _get_int(data: dict[str, Any], json_key: str, default: int, minimum: int) -> int:
    return max(minimum, int(data.get(json_key, default)))


@lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as exc:
        msg = f"Invalid essential pattern {pattern!r}: {exc}"
        raise ValueError(msg) from exc


def _str_tuple(raw: Any, key: str) -> tuple[str, ...]:
    if not isinstance(raw, list | tuple):
        msg = f"'{key}' must be a list of strings."
        raise ValueError(msg)
    return tuple(str(x) for x in raw)


def _get_bool(data: dict[str, Any], json_key: str, default: bool) -> bool:
    raw = data.get(json_key, default)
    if not isinstance(raw, bool):
        msg = f"'{json_key}' must be true or false."
        raise ValueError(msg)
    return raw


@dataclass(slots=True, frozen=True)
class CleanupOptions:
    prompt_before_deletion: bool = True
    remove_empty_directories: bool = True
    create_backups: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "promptBeforeDeletion": self.prompt_before_deletion,
            "removeEmptyDirectories": self.remove_empty_directories,
            "createBackups": self.create_backups,
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any], defaults: CleanupOptions) -> CleanupOptions:
        return cls(
            prompt_before_deletion=_get_bool(payload, "promptBeforeDeletion", defaults.prompt_before_deletion),
            remove_empty_directories=_get_bool(payload, "removeEmptyDirectories", defaults.remove_empty_directories),
            create_backups=_get_bool(payload, "createBackups", defaults.create_backups),
        )


@dataclass(slots=True, frozen=True)
class AppConfig:
    directories: dict[str, str] = field(default_factory=dict)
    essential_patterns: tuple[str, ...] = ()
    essential_directories: frozenset[str] = frozenset()
    artifact_extensions: frozenset[str] = frozenset()
    access_threshold_days: int = 30
    backup_dir: str = ".file-backup"
    backup_retention_days: int = 14
    log_file: str = "cleanup-log.txt"
    extra_empty_directories: tuple[str, ...] = ()
    analysis_skip_directories: tuple[str, ...] = ("node_modules",)
    large_file_bytes: int = 1024 * 1024
    unused_factor: int = 3
    options: CleanupOptions = field(default_factory=CleanupOptions)

    @property
    def access_threshold_seconds(self) -> int:
        return self.access_threshold_days * _SECONDS_PER_DAY

    @property
    def unused_threshold_seconds(self) -> int:
        return self.unused_factor * self.access_threshold_seconds

    @property
    def compiled_patterns(self) -> tuple[re.Pattern[str], ...]:
        return tuple(compile_pattern(p) for p in self.essential_patterns)

    def to_dict(self) -> dict[str, Any]:
        return {
            "directories": dict(self.directories),
            "essentialPatterns": list(self.essential_patterns),
            "essentialDirectories": sorted(self.essential_directories),
            "artifactExtensions": sorted(self.artifact_extensions),
            "accessThresholdDays": self.access_threshold_days,
            "backupDir": self.backup_dir,
            "backupRetentionDays": self.backup_retention_days,
            "logFile": self.log_file,
            "extraEmptyDirectories": list(self.extra_empty_directories),
            "analysisSkipDirectories": list(self.analysis_skip_directories),
            "largeFileBytes": self.large_file_bytes,
            "unusedFactor": self.unused_factor,
            "options": self.options.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], defaults: AppConfig) -> AppConfig:
        directories_raw = data.get("directories")
        if directories_raw is not None:
            if not isinstance(directories_raw, dict):
                raise ValueError("'directories' must be an object of name -> path.")
            directories = {str(k): str(v) for k, v in directories_raw.items()}
        else:
            directories = dict(defaults.directories)

        if "essentialPatterns" in data:
            patterns = _str_tuple(data["essentialPatterns"], "essentialPatterns")
        else:
            patterns = defaults.essential_patterns
        for pattern in patterns:
            compile_pattern(pattern)

        if "essentialDirectories" in data:
            essential_dirs = frozenset(_str_tuple(data["essentialDirectories"], "essentialDirectories"))
        else:
            essential_dirs = defaults.essential_directories

        if "artifactExtensions" in data:
            extensions = frozenset(x.lower() for x in _str_tuple(data["artifactExtensions"], "artifactExtensions"))
        else:
            extensions = defaults.artifact_extensions

        options_raw = data.get("options", {})
        if not isinstance(options_raw, dict):
            raise ValueError("'options' must be an object.")
        options = CleanupOptions.from_dict(options_raw, defaults.options)

        # Legacy flag: the old "frontend" special case is now a configurable list.
        if "extraEmptyDirectories" in data:
            extra_empty = _str_tuple(data["extraEmptyDirectories"], "extraEmptyDirectories")
        elif not _get_bool(options_raw, "removeEmptyFrontend", True):
            extra_empty = ()
        else:
            extra_empty = defaults.extra_empty_directories

        if "analysisSkipDirectories" in data:
            skip_dirs = _str_tuple(data["analysisSkipDirectories"], "analysisSkipDirectories")
        else:
            skip_dirs = defaults.analysis_skip_directories

        int_kwargs: dict[str, int] = {}
        for json_key, attr, minimum in _INT_FIELDS:
            int_kwargs[attr] = _get_int(data, json_key, getattr(defaults, attr), minimum)

        return cls(
            directories=directories,
            essential_patterns=patterns,
            essential_directories=essential_dirs,
            artifact_extensions=extensions,
            backup_dir=str(data.get("backupDir", defaults.backup_dir)),
            log_file=str(data.get("logFile", defaults.log_file)),
            extra_empty_directories=extra_empty,
            analysis_skip_directories=skip_dirs,
            options=options,
            **int_kwargs,
        )
