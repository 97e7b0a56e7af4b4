from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Callable

from projclean.models.enums import DeletionReason, NodeKind, ProposalOutcome


@dataclass(slots=True)
class DeletionProposal:
    path: Path
    kind: NodeKind
    reason: DeletionReason
    outcome: ProposalOutcome = ProposalOutcome.PROPOSED
    backup_path: Path | None = None

    @property
    def is_dir(self) -> bool:
        return self.kind is NodeKind.DIRECTORY


# Answers whether a proposal may be carried out. Injected into the walker so
# tests can replace the interactive prompt.
Confirmer = Callable[[DeletionProposal], bool]


@dataclass(slots=True, frozen=True)
class BackupRecord:
    source: Path
    backup_path: Path
    partition: date
    created_ts: float


@dataclass(slots=True)
class CleanupResult:
    dry_run: bool
    proposals: list[DeletionProposal] = field(default_factory=list)
    skipped_essential: int = 0
    skipped_special: int = 0
    errors: int = 0
    removed_partitions: list[Path] = field(default_factory=list)

    def with_outcome(self, outcome: ProposalOutcome) -> list[DeletionProposal]:
        return [p for p in self.proposals if p.outcome is outcome]
