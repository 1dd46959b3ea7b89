"""Shared type definitions."""

from collections.abc import Awaitable, Callable

from conversation_archive.domain.models import Snapshot

# Produces the snapshot for a document id
CaptureFunc = Callable[[str], Awaitable[Snapshot]]

# Persists a snapshot, returning bytes written (document id, snapshot)
SnapshotSink = Callable[[str, Snapshot], int]

# Progress hook for capture jobs (document id, succeeded)
CaptureProgressHook = Callable[[str, bool], None]
