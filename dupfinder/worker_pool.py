"""
Bounded worker pool for the content-hash stage.

Work items are fanned out to a fixed number of asyncio worker tasks through
a pre-filled queue. Each task hashes its item on a dedicated thread pool of
the same size, so at most ``workers`` files are read at once. Per-file
failures are recorded on the item and counted; they never stop the pool.
"""

from __future__ import annotations

import asyncio
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Callable, Iterable, Optional

import structlog

from dupfinder.counters import ScanCounters
from dupfinder.hasher import DEFAULT_CHUNK_SIZE, hash_file
from dupfinder.models import FileRecord, ScanStats

logger = structlog.get_logger(__name__)

# End-of-work marker, one per worker
_END_OF_WORK = object()


class HashWorkerPool:
    """
    Hash candidate files concurrently with a fixed number of workers.

    Usage:
        pool = HashWorkerPool(workers=4, counters=counters)
        hashed = await pool.hash_all(candidate_groups)
    """

    def __init__(
        self,
        workers: int,
        counters: ScanCounters,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        progress_callback: Optional[Callable[[ScanStats], None]] = None,
        progress_interval: int = 100,
    ):
        """
        Initialize pool.

        Args:
            workers: Number of concurrent workers (>= 1)
            counters: Run counters, errors_encountered is incremented per failed file
            chunk_size: Read size passed to the hasher
            progress_callback: Optional callback invoked every progress_interval files
            progress_interval: Files between progress callbacks
        """
        if workers < 1:
            raise ValueError(f"workers must be >= 1, got {workers}")
        self.workers = workers
        self.counters = counters
        self.chunk_size = chunk_size
        self.progress_callback = progress_callback
        self.progress_interval = progress_interval
        self._processed = 0

    async def hash_all(self, groups: Iterable[Iterable[FileRecord]]) -> list[FileRecord]:
        """
        Hash every file of every candidate group.

        Each record gets either ``content_digest`` or ``hash_error`` set.
        Returns only after every worker has exited.

        Args:
            groups: Candidate groups from the pre-filter stage

        Returns:
            Flat list of the same records, in input order
        """
        items = [record for group in groups for record in group]
        self._processed = 0
        if not items:
            return items

        # Unbounded queue: enqueueing never waits on workers
        queue: asyncio.Queue = asyncio.Queue()
        for record in items:
            queue.put_nowait(record)
        for _ in range(self.workers):
            queue.put_nowait(_END_OF_WORK)

        logger.info(
            "dedup_hashing_started",
            files=len(items),
            workers=self.workers,
        )

        loop = asyncio.get_running_loop()
        executor = ThreadPoolExecutor(
            max_workers=self.workers,
            thread_name_prefix="dupfinder-hash",
        )
        try:
            await asyncio.gather(
                *(self._worker(queue, loop, executor) for _ in range(self.workers))
            )
        finally:
            executor.shutdown(wait=True)

        return items

    async def _worker(
        self,
        queue: asyncio.Queue,
        loop: asyncio.AbstractEventLoop,
        executor: Executor,
    ) -> None:
        """Take items until the end-of-work marker is reached."""
        while True:
            record = await queue.get()
            if record is _END_OF_WORK:
                return

            try:
                digest = await loop.run_in_executor(
                    executor, hash_file, record.path, self.chunk_size
                )
            except OSError as e:
                record.hash_error = str(e) or type(e).__name__
                self.counters.add_error()
                logger.warning(
                    "dedup_hash_failed",
                    file_path=str(record.path),
                    error=record.hash_error,
                )
            else:
                record.content_digest = digest

            self._processed += 1
            if self.progress_callback and self._processed % self.progress_interval == 0:
                self.progress_callback(self.counters.snapshot())
