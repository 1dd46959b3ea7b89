"""Domain models and business logic."""

from conversation_archive.domain.errors import (
    ArchiveStoreError,
    CaptureError,
    CaptureStage,
    CaptureTimeout,
    ConversationArchiveError,
    ExtractionError,
    NavigationError,
    ScriptBundleError,
)
from conversation_archive.domain.models import (
    ExecutionResult,
    JobOutcome,
    ReconciliationResult,
    Snapshot,
    SnapshotEntry,
    SyncResult,
)
from conversation_archive.domain.types import CaptureFunc, CaptureProgressHook, SnapshotSink

__all__ = [
    "ReconciliationResult",
    "Snapshot",
    "SnapshotEntry",
    "JobOutcome",
    "ExecutionResult",
    "SyncResult",
    "CaptureStage",
    "ConversationArchiveError",
    "CaptureError",
    "NavigationError",
    "CaptureTimeout",
    "ExtractionError",
    "ArchiveStoreError",
    "ScriptBundleError",
    "CaptureFunc",
    "SnapshotSink",
    "CaptureProgressHook",
]
