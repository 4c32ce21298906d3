"""
Import executor

Persists gate-passing records through a pipeline and a store, counting each
outcome. Records are fed through a queue to `concurrency` workers; with one
worker (the default) records are handled strictly in input order.

One record's failure never stops the batch: any exception from persisting
it is logged and counted as an error.
"""

import asyncio
import logging
from typing import Callable, Optional, Sequence

from .models import ImportOutcome, PersistResult, PersistStatus
from .pipelines import ImportPipeline
from .stores import RecordStore

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int], None]
CompleteCallback = Callable[[ImportOutcome], None]


class ImportExecutor:
    """
    Example:
        executor = ImportExecutor(MemoryStore(), on_progress=print)
        outcome = asyncio.run(executor.run(pipeline, records))
    """

    def __init__(
        self,
        store: RecordStore,
        concurrency: int = 1,
        on_progress: Optional[ProgressCallback] = None,
        on_complete: Optional[CompleteCallback] = None
    ):
        """
        Args:
            store: Persistence collaborator, borrowed for the run
            concurrency: Number of workers (clamped to at least 1)
            on_progress: Called with 0..100 after every record
            on_complete: Called once with the final outcome
        """
        self.store = store
        self.concurrency = max(1, int(concurrency))
        self.on_progress = on_progress
        self.on_complete = on_complete

    async def _persist_one(self, pipeline: ImportPipeline, record) -> PersistResult:
        try:
            result = await pipeline.persist(record, self.store)
        except Exception as exc:
            logger.warning("Row %d: persist failed: %s", record.row_number, exc)
            return PersistResult(PersistStatus.ERROR, reason=str(exc) or exc.__class__.__name__)

        if result.status is PersistStatus.ERROR:
            logger.warning("Row %d: %s", record.row_number, result.reason)
        return result

    def _emit_progress(self, percent: int) -> None:
        if not self.on_progress:
            return
        try:
            self.on_progress(percent)
        except Exception as exc:
            logger.warning("Progress callback failed at %d%%: %s", percent, exc)

    async def run(
        self,
        pipeline: ImportPipeline,
        records: Sequence,
        outcome: Optional[ImportOutcome] = None
    ) -> ImportOutcome:
        """
        Persist every record and return the finalized outcome.

        Args:
            pipeline: Shape-specific pipeline
            records: Gate-passing records
            outcome: Outcome to accumulate into (e.g. already holding gate drops)
        """
        outcome = outcome if outcome is not None else pipeline.new_outcome()
        total = len(records)
        processed = 0

        logger.info("Importing %d %s with %d worker(s)", total, pipeline.name, self.concurrency)

        queue: asyncio.Queue = asyncio.Queue()
        for record in records:
            queue.put_nowait(record)

        async def worker() -> None:
            nonlocal processed
            while True:
                try:
                    record = queue.get_nowait()
                except asyncio.QueueEmpty:
                    return

                result = await self._persist_one(pipeline, record)
                outcome.record(result, record.row_number, pipeline.describe(record))
                processed += 1
                self._emit_progress(round(processed / total * 100))
                queue.task_done()

        workers = [asyncio.create_task(worker()) for _ in range(min(self.concurrency, max(total, 1)))]
        await asyncio.gather(*workers)

        logger.info("Import finished: %s", outcome.as_dict())
        if self.on_complete:
            self.on_complete(outcome)
        return outcome
