"""Exception hierarchy for archive runs."""

from enum import Enum


class CaptureStage(str, Enum):
    """Stage of the snapshot pipeline an error originated from."""

    NAVIGATE = "navigate"
    WAIT = "wait"
    FEATURES = "features"
    MUTATE = "mutate"
    SERIALIZE = "serialize"
    POSTPROCESS = "postprocess"
    FILENAME = "filename"


class ConversationArchiveError(Exception):
    """Base class for all archive errors."""


class CaptureError(ConversationArchiveError):
    """A snapshot job failed at a specific pipeline stage."""

    def __init__(
        self,
        document_id: str,
        stage: CaptureStage,
        cause: BaseException | str | None = None,
    ):
        self.document_id = document_id
        self.stage = stage
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"{document_id} failed at {stage.value}{detail}")


class NavigationError(CaptureError):
    """The conversation page could not be loaded."""


class CaptureTimeout(CaptureError):
    """The conversation never became ready within the configured timeout."""


class ExtractionError(CaptureError):
    """The page could not be cleaned up or serialized."""


class ArchiveStoreError(ConversationArchiveError):
    """Reading, writing, or deleting in the archive directory failed."""


class ScriptBundleError(ConversationArchiveError):
    """The serialization scripts could not be loaded."""
