"""Bounded concurrent execution of capture jobs."""

import asyncio
import logging
from collections.abc import Sequence

from conversation_archive.domain.models import ExecutionResult, JobOutcome
from conversation_archive.domain.types import CaptureFunc, CaptureProgressHook, SnapshotSink

logger = logging.getLogger(__name__)


async def run_all(
    document_ids: Sequence[str],
    capture: CaptureFunc,
    concurrency_limit: int,
    sink: SnapshotSink,
    progress_hook: CaptureProgressHook | None = None,
) -> ExecutionResult:
    """Capture and store every document, at most ``concurrency_limit`` at a time.

    A failing job is recorded in the result and never cancels or delays the
    others. The call returns once every job has either succeeded or failed.

    Args:
        document_ids: Documents to capture
        capture: Coroutine function producing the snapshot of one document
        concurrency_limit: Maximum number of captures in flight
        sink: Persists a snapshot; runs in a worker thread before the job
            completes, and its failure fails the job
        progress_hook: Optional callback(document_id, succeeded) per finished job

    Returns:
        ExecutionResult with one outcome per submitted document
    """
    semaphore = asyncio.Semaphore(max(1, concurrency_limit))

    async def _run_job(document_id: str) -> JobOutcome:
        async with semaphore:
            try:
                snapshot = await capture(document_id)
                bytes_written = await asyncio.to_thread(sink, document_id, snapshot)
            except Exception as e:
                logger.warning(f"Failed to archive {document_id}: {e}")
                outcome = JobOutcome(document_id=document_id, error=str(e) or type(e).__name__)
            else:
                outcome = JobOutcome(
                    document_id=document_id,
                    filename=snapshot.filename,
                    bytes_written=bytes_written,
                )

        if progress_hook:
            progress_hook(document_id, outcome.succeeded)
        return outcome

    tasks = [asyncio.create_task(_run_job(document_id)) for document_id in document_ids]
    outcomes = await asyncio.gather(*tasks) if tasks else []

    return ExecutionResult(outcomes=list(outcomes))
