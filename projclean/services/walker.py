# Post-order cleanup walker.
#
# Each configured directory is visited depth-first with entries in name order.
# A directory is only judged after all of its children were handled, so a
# chain of directories that empties out bottom-up is proposed as a chain.
#
# _visit returns how many entries are left in a directory once its children
# were handled.  In dry-run mode every proposal counts as removed, which makes
# the dry-run plan identical to what delete mode would do with "yes" answers.

from __future__ import annotations

import logging
import os
import time
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm

from projclean.config.schema import AppConfig
from projclean.models.cleanup import CleanupResult, Confirmer, DeletionProposal
from projclean.models.entry import DirectoryEntry, read_entry
from projclean.models.enums import Classification, DeletionReason, NodeKind, ProposalOutcome
from projclean.services.backup import BackupManager
from projclean.services.classifier import classify, is_empty_directory, is_essential
from projclean.services.deletion_log import DeletionLog

LOGGER = logging.getLogger(__name__)


def prompt_confirmer(console: Console) -> Confirmer:
    """Interactive confirmer; anything but an explicit yes keeps the entry."""

    def confirm(proposal: DeletionProposal) -> bool:
        noun = "directory" if proposal.is_dir else "file"
        question = f'Delete {noun} "{escape(str(proposal.path))}"? (Reason: {proposal.reason.label})'
        try:
            return Confirm.ask(question, console=console, default=False)
        except EOFError:
            return False

    return confirm


class CleanupWalker:
    def __init__(
        self,
        root: Path,
        config: AppConfig,
        *,
        dry_run: bool = True,
        confirmer: Confirmer | None = None,
        backups: BackupManager | None = None,
        log: DeletionLog | None = None,
        now: float | None = None,
    ) -> None:
        self._root = root
        self._config = config
        self._dry_run = dry_run
        self._confirmer = confirmer or prompt_confirmer(Console())
        self._backups = backups or BackupManager(root, config)
        self._log = log or DeletionLog(root / config.log_file)
        self._fixed_now = now
        self._now = 0.0
        self._result = CleanupResult(dry_run=dry_run)
        self._remaining: dict[Path, int] = {}
        self._proposed: set[Path] = set()

    def run(self) -> CleanupResult:
        self._result = CleanupResult(dry_run=self._dry_run)
        self._remaining = {}
        self._proposed = set()
        self._now = self._fixed_now if self._fixed_now is not None else time.time()

        LOGGER.info("Starting project cleanup%s", " (dry run)" if self._dry_run else "")
        for name, rel in self._config.directories.items():
            target = self._root / rel
            if not target.is_dir():
                LOGGER.info("Directory does not exist: %s (%s)", target, name)
                continue
            LOGGER.info("Scanning directory: %s", target)
            self._remaining[target] = self._visit(target)

        for rel in self._config.extra_empty_directories:
            self._handle_extra_directory(self._root / rel)

        if self._config.options.create_backups:
            self._result.removed_partitions = self._backups.sweep(dry_run=self._dry_run)
        return self._result

    def _visit(self, directory: Path) -> int:
        try:
            children = sorted(directory.iterdir(), key=lambda p: p.name)
        except OSError as exc:
            LOGGER.error("Cannot list directory %s: %s", directory, exc)
            self._result.errors += 1
            # Unknown contents: report as non-empty so the directory is kept.
            return 1

        backup_root = self._backups.backup_root
        remaining = 0
        for child in children:
            if child == backup_root:
                remaining += 1
                continue

            read = read_entry(child)
            if read.is_err():
                LOGGER.warning("%s", read.unwrap_err())
                self._result.errors += 1
                remaining += 1
                continue

            if not self._process(read.unwrap()):
                remaining += 1
        return remaining

    def _process(self, entry: DirectoryEntry) -> bool:
        """Handle one entry; return True if it is gone (or would be, in dry-run)."""
        if entry.kind is NodeKind.OTHER:
            LOGGER.info("Skipping special entry: %s", entry.path)
            self._result.skipped_special += 1
            return False

        if entry.is_dir:
            left = self._visit(entry.path)
            self._remaining[entry.path] = left
            if not self._config.options.remove_empty_directories:
                return False
            classification = classify(entry, self._config, self._now, is_empty=left == 0)
        else:
            classification = classify(entry, self._config, self._now)

        if classification is Classification.ESSENTIAL:
            LOGGER.debug("Skipping essential %s: %s", entry.kind.value, entry.path)
            self._result.skipped_essential += 1
            return False

        reason = classification.reason
        if reason is None:
            return False
        return self._handle(DeletionProposal(path=entry.path, kind=entry.kind, reason=reason))

    def _handle_extra_directory(self, target: Path) -> None:
        if target in self._proposed or not target.is_dir() or is_essential(target, self._config):
            return
        # Walked directories are judged by what the plan leaves in them.
        left = self._remaining.get(target)
        empty = left == 0 if left is not None else is_empty_directory(target)
        if empty:
            self._handle(
                DeletionProposal(path=target, kind=NodeKind.DIRECTORY, reason=DeletionReason.EMPTY_DIRECTORY)
            )

    def _handle(self, proposal: DeletionProposal) -> bool:
        self._proposed.add(proposal.path)
        self._result.proposals.append(proposal)
        if self._dry_run:
            LOGGER.info("Would delete (dry run): %s - Reason: %s", proposal.path, proposal.reason.label)
            return True

        if self._config.options.prompt_before_deletion and not self._confirmer(proposal):
            LOGGER.info("Keeping %s: %s", proposal.kind.value, proposal.path)
            proposal.outcome = ProposalOutcome.KEPT
            return False

        if proposal.is_dir:
            return self._delete_directory(proposal)
        return self._delete_file(proposal)

    def _delete_directory(self, proposal: DeletionProposal) -> bool:
        if not is_empty_directory(proposal.path):
            LOGGER.warning("Directory no longer empty, keeping: %s", proposal.path)
            proposal.outcome = ProposalOutcome.KEPT
            return False
        try:
            os.rmdir(proposal.path)
        except OSError as exc:
            LOGGER.error("Error deleting directory %s: %s", proposal.path, exc)
            proposal.outcome = ProposalOutcome.FAILED
            self._result.errors += 1
            return False

        self._log.record(proposal.path, proposal.reason)
        proposal.outcome = ProposalOutcome.DELETED
        LOGGER.info("Deleted directory: %s", proposal.path)
        return True

    def _delete_file(self, proposal: DeletionProposal) -> bool:
        if self._config.options.create_backups:
            backup = self._backups.backup_file(proposal.path)
            if backup.is_err():
                # No backup, no deletion.
                LOGGER.error("%s; keeping file", backup.unwrap_err())
                proposal.outcome = ProposalOutcome.FAILED
                self._result.errors += 1
                return False
            proposal.backup_path = backup.unwrap().backup_path

        try:
            proposal.path.unlink()
        except OSError as exc:
            LOGGER.error("Error deleting file %s: %s", proposal.path, exc)
            proposal.outcome = ProposalOutcome.FAILED
            self._result.errors += 1
            return False

        self._log.record(proposal.path, proposal.reason, proposal.backup_path)
        proposal.outcome = ProposalOutcome.DELETED
        LOGGER.info("Deleted file: %s", proposal.path)
        if proposal.backup_path is not None:
            LOGGER.info("Backup created at: %s", proposal.backup_path)
        return True
