from __future__ import annotations

from enum import Enum


class NodeKind(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"
    OTHER = "other"


class Classification(str, Enum):
    ESSENTIAL = "essential"
    BUILD_ARTIFACT = "build_artifact"
    STALE_UNUSED = "stale_unused"
    EMPTY_DIRECTORY = "empty_directory"
    ORDINARY = "ordinary"

    @property
    def reason(self) -> DeletionReason | None:
        return _REASON_BY_CLASSIFICATION.get(self)


class DeletionReason(str, Enum):
    BUILD_ARTIFACT = "build-artifact"
    NOT_RECENTLY_ACCESSED = "not-recently-accessed"
    EMPTY_DIRECTORY = "empty-directory"

    @property
    def label(self) -> str:
        return self.value.replace("-", " ").capitalize()


class ProposalOutcome(str, Enum):
    PROPOSED = "proposed"
    DELETED = "deleted"
    KEPT = "kept"
    FAILED = "failed"


_REASON_BY_CLASSIFICATION: dict[Classification, DeletionReason] = {
    Classification.BUILD_ARTIFACT: DeletionReason.BUILD_ARTIFACT,
    Classification.STALE_UNUSED: DeletionReason.NOT_RECENTLY_ACCESSED,
    Classification.EMPTY_DIRECTORY: DeletionReason.EMPTY_DIRECTORY,
}
