from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import PurePosixPath

from projclean.models.report import NamingIssue


@dataclass(slots=True, frozen=True)
class NamingRule:
    kind: str
    extensions: frozenset[str]
    # Empty means the rule applies anywhere in the tree.
    path_markers: tuple[str, ...]
    pattern: re.Pattern[str]
    convention: str

    def applies_to(self, posix_path: str, extension: str) -> bool:
        if extension not in self.extensions:
            return False
        if not self.path_markers:
            return True
        return any(marker in posix_path for marker in self.path_markers)


NAMING_RULES: tuple[NamingRule, ...] = (
    NamingRule(
        kind="Component",
        extensions=frozenset({".jsx", ".tsx"}),
        path_markers=("/components/",),
        pattern=re.compile(r"^[A-Z][A-Za-z0-9]*$"),
        convention="PascalCase",
    ),
    NamingRule(
        kind="Utility",
        extensions=frozenset({".js", ".ts"}),
        path_markers=("/utils/", "/hooks/"),
        pattern=re.compile(r"^[a-z][A-Za-z0-9]*$"),
        convention="camelCase",
    ),
    NamingRule(
        kind="CSS",
        extensions=frozenset({".css", ".scss"}),
        path_markers=(),
        pattern=re.compile(r"^[a-z][a-z0-9-]*$"),
        convention="kebab-case",
    ),
)


def check_naming(rel_path: str, rules: tuple[NamingRule, ...] = NAMING_RULES) -> list[NamingIssue]:
    path = PurePosixPath(rel_path.replace("\\", "/"))
    extension = path.suffix.lower()
    stem = path.name[: -len(path.suffix)] if path.suffix else path.name
    # Leading slash so a marker also matches the first path segment.
    anchored = f"/{path.as_posix()}"

    issues: list[NamingIssue] = []
    for rule in rules:
        if rule.applies_to(anchored, extension) and not rule.pattern.match(stem):
            issues.append(
                NamingIssue(
                    path=rel_path,
                    message=f"{rule.kind} file '{path.name}' should use {rule.convention}",
                )
            )
    return issues
