"""Conversation Archive SDK.

A Python library for keeping a directory of self-contained HTML snapshots in
sync with the shared conversations linked from a workspace.

Quick Start (High-Level API):
    >>> from conversation_archive import sync_conversations
    >>> sync_conversations()  # Archives new links, deletes stale snapshots

Quick Start (SDK API):
    >>> from conversation_archive import ConversationSync, Settings
    >>> config = Settings(archive_dir="conversations", max_capture_concurrency=4)
    >>> orchestrator = ConversationSync(config)
    >>> result = orchestrator.sync()
    >>> print(result.report)

Configuration:
    >>> from conversation_archive import Settings
    >>> import os
    >>> os.environ["CONVERSATION_ARCHIVE_READY_TIMEOUT"] = "30"
    >>> config = Settings()  # Loads from environment

Public API:
    High-level functions:
        - sync_conversations: Run a complete archive synchronization

    Orchestrators:
        - ConversationSync: Full synchronization orchestration

    Configuration:
        - Settings: Configuration model

    Domain Models:
        - ReconciliationResult: Conversations to add and remove
        - Snapshot: Captured HTML artifact
        - JobOutcome / ExecutionResult: Capture job results
        - SyncResult: Summary of a run

    Services:
        - ReconciliationService: Set reconciliation
        - ReportBuilder: Change report text

    Reporters (for custom UIs):
        - Reporter: Progress reporter (use silent=True for headless mode)
"""

# Configuration
from conversation_archive.config import Settings

# Domain models
from conversation_archive.domain import (
    ExecutionResult,
    JobOutcome,
    ReconciliationResult,
    Snapshot,
    SyncResult,
)
from conversation_archive.domain.services import ReconciliationService, ReportBuilder

# Orchestrators
from conversation_archive.orchestrators import ConversationSync

# UI Reporters
from conversation_archive.ui import Reporter

__all__ = [
    # High-level functions
    "sync_conversations",
    # Orchestrators
    "ConversationSync",
    # Configuration
    "Settings",
    # Domain models
    "ReconciliationResult",
    "Snapshot",
    "JobOutcome",
    "ExecutionResult",
    "SyncResult",
    # Services
    "ReconciliationService",
    "ReportBuilder",
    # Reporters
    "Reporter",
]

# Version
__version__ = "0.1.0"


def sync_conversations(
    config: Settings | None = None,
    reporter: Reporter | None = None,
    dry_run: bool = False,
) -> SyncResult:
    """Run a complete archive synchronization (high-level convenience function).

    Args:
        config: Archive configuration. If None, loads Settings() from environment.
        reporter: Progress reporter. If None, uses Reporter().
        dry_run: Only report what would change.

    Returns:
        SyncResult describing the run

    Example:
        >>> from conversation_archive import sync_conversations, Settings
        >>> config = Settings(archive_dir="conversations")
        >>> sync_conversations(config=config, dry_run=True)
    """
    orchestrator = ConversationSync(config)
    return orchestrator.sync(reporter=reporter, dry_run=dry_run)
