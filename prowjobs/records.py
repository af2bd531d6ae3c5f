"""
Record factory - wrap a JobSpec into a new ProwJob.

Creating a record does no I/O and cannot fail; persisting it is the
caller's job.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from prowjobs.identity import IdentityGenerator, generate_ulid
from prowjobs.schemas import JobSpec, ProwJob, ProwJobState, ProwJobStatus
from prowjobs.schemas.prow_job import _utcnow

logger = logging.getLogger(__name__)


def new_prow_job(
    spec: JobSpec,
    labels: Optional[dict[str, str]] = None,
    *,
    generate_id: IdentityGenerator = generate_ulid,
    now: Callable[[], datetime] = _utcnow,
) -> ProwJob:
    """
    Create a ProwJob for a JobSpec.

    Args:
        spec: The resolved job spec to run
        labels: Labels to attach; copied, never aliased
        generate_id: Source of the record's unique name
        now: Clock for the start time

    Returns:
        A new ProwJob in the triggered state
    """
    prow_job = ProwJob(
        name=generate_id(),
        spec=spec,
        labels=dict(labels or {}),
        status=ProwJobStatus(
            start_time=now(),
            state=ProwJobState.TRIGGERED,
        ),
    )
    logger.debug(f"Created ProwJob {prow_job.name} for {spec.type.value} job {spec.job}")
    return prow_job
