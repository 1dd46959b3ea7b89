"""Domain models for the archive."""

from pydantic import BaseModel, ConfigDict, Field


class ReconciliationResult(BaseModel):
    """Snapshots to create and to remove for one run."""

    model_config = ConfigDict(frozen=True)

    to_add: frozenset[str] = frozenset()
    to_remove: frozenset[str] = frozenset()

    @property
    def has_changes(self) -> bool:
        """Return True if anything needs to be added or removed."""
        return bool(self.to_add or self.to_remove)

    @property
    def sorted_to_add(self) -> list[str]:
        return sorted(self.to_add)

    @property
    def sorted_to_remove(self) -> list[str]:
        return sorted(self.to_remove)

    def __repr__(self) -> str:
        """Return string representation of the reconciliation."""
        return f"ReconciliationResult(add={len(self.to_add)}, remove={len(self.to_remove)})"


class Snapshot(BaseModel):
    """Finished HTML artifact for one conversation."""

    filename: str
    content: bytes

    def __repr__(self) -> str:
        return f"Snapshot(filename={self.filename!r}, size={len(self.content)})"


class SnapshotEntry(BaseModel):
    """A snapshot file found in the archive directory."""

    document_id: str
    filename: str
    title: str
    size: int  # File size in bytes


class JobOutcome(BaseModel):
    """Terminal state of a single capture job."""

    document_id: str
    filename: str | None = None
    bytes_written: int | None = None
    error: str | None = None  # Failure reason, None on success

    @property
    def succeeded(self) -> bool:
        return self.error is None


class ExecutionResult(BaseModel):
    """Outcomes of every job submitted to the executor."""

    outcomes: list[JobOutcome] = Field(default_factory=list)

    @property
    def succeeded(self) -> set[str]:
        return {o.document_id for o in self.outcomes if o.succeeded}

    @property
    def failed(self) -> set[str]:
        return {o.document_id for o in self.outcomes if not o.succeeded}

    @property
    def failures(self) -> dict[str, str]:
        """Map failed document ids to their failure reason."""
        return {o.document_id: o.error for o in self.outcomes if o.error is not None}


class SyncResult(BaseModel):
    """Summary of a synchronization run."""

    added: list[str] = Field(default_factory=list)
    removed: list[str] = Field(default_factory=list)
    failed: dict[str, str] = Field(default_factory=dict)
    report: str = ""
    dry_run: bool = False

    @property
    def has_failures(self) -> bool:
        return bool(self.failed)
