"""
Partition active ProwJobs for concurrent controller consumption.

partition_active splits a list of records into a pending queue and a
triggered queue. Both are sized up front, filled in one pass, and closed
before they are returned: after that nothing is ever added, so any number
of worker threads can drain them without further coordination. Each job
is handed to exactly one consumer.

Jobs in a terminal state are dropped - controllers only act on work in
flight. Handling pending jobs before triggered ones (so max_concurrency
counts are accurate) is up to the caller.
"""

import logging
import threading
from collections import deque
from typing import Iterator, Optional

from prowjobs.schemas import ProwJob, ProwJobState

logger = logging.getLogger(__name__)


class QueueClosedError(Exception):
    """Raised when adding to a JobQueue after it was closed or filled."""
    pass


class JobQueue:
    """
    A fixed-capacity, drainable queue of ProwJobs.

    Filled by its producer, then closed. get() and iteration remove
    jobs, so concurrent consumers share the work rather than each
    seeing every job.
    """

    def __init__(self, capacity: int):
        self._items: deque[ProwJob] = deque()
        self._capacity = capacity
        self._closed = False
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        """Number of jobs the queue was sized for."""
        return self._capacity

    @property
    def closed(self) -> bool:
        return self._closed

    def put(self, job: ProwJob) -> None:
        """
        Add a job. Only the producer calls this, before close().

        Raises:
            QueueClosedError: If the queue is closed or already at capacity
        """
        with self._lock:
            if self._closed:
                raise QueueClosedError("JobQueue is closed")
            if len(self._items) >= self._capacity:
                raise QueueClosedError(f"JobQueue capacity {self._capacity} exceeded")
            self._items.append(job)

    def close(self) -> None:
        """Freeze the queue; no further puts are accepted."""
        with self._lock:
            self._closed = True

    def get(self) -> Optional[ProwJob]:
        """Take the next job, or None once the queue is drained."""
        with self._lock:
            if not self._items:
                return None
            return self._items.popleft()

    def __iter__(self) -> Iterator[ProwJob]:
        """Drain the queue, yielding jobs until none are left."""
        while True:
            job = self.get()
            if job is None:
                return
            yield job

    def __len__(self) -> int:
        """Number of jobs not yet taken."""
        return len(self._items)

    def __repr__(self) -> str:
        return f"JobQueue(remaining={len(self)}, capacity={self._capacity}, closed={self._closed})"


def partition_active(prow_jobs: list[ProwJob]) -> tuple[JobQueue, JobQueue]:
    """
    Separate ProwJobs into pending and triggered queues.

    Args:
        prow_jobs: Records in any state

    Returns:
        (pending, triggered) closed queues; jobs in other states appear in neither
    """
    # Size the queues correctly.
    pending_count, triggered_count = 0, 0
    for pj in prow_jobs:
        if pj.status.state == ProwJobState.PENDING:
            pending_count += 1
        elif pj.status.state == ProwJobState.TRIGGERED:
            triggered_count += 1
    pending = JobQueue(pending_count)
    triggered = JobQueue(triggered_count)

    # Partition the jobs into the two separate queues.
    for pj in prow_jobs:
        if pj.status.state == ProwJobState.PENDING:
            pending.put(pj)
        elif pj.status.state == ProwJobState.TRIGGERED:
            triggered.put(pj)
    pending.close()
    triggered.close()

    logger.debug(
        f"Partitioned {len(prow_jobs)} ProwJobs: {pending_count} pending, "
        f"{triggered_count} triggered, "
        f"{len(prow_jobs) - pending_count - triggered_count} complete"
    )
    return pending, triggered
