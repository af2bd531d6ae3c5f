"""Latest-run selection for ProwJobs."""

from prowjobs.schemas import ProwJob, ProwJobType


def _is_newer(candidate: ProwJob, current: ProwJob) -> bool:
    """
    Check if candidate started after current.

    Start times are second-resolution once serialized, so equal times
    are common. Ties go to the greater name; generated names sort by
    creation time.
    """
    if candidate.status.start_time != current.status.start_time:
        return candidate.status.start_time > current.status.start_time
    return candidate.name > current.name


def get_latest_prow_jobs(
    prow_jobs: list[ProwJob],
    job_type: ProwJobType,
) -> dict[str, ProwJob]:
    """
    Map each job name of the given type to its most recently started ProwJob.

    Args:
        prow_jobs: Records of any type
        job_type: Only records of this type are considered

    Returns:
        {job name: latest ProwJob}; names with no record of job_type are absent
    """
    latest_jobs: dict[str, ProwJob] = {}
    for pj in prow_jobs:
        if pj.spec.type != job_type:
            continue
        name = pj.spec.job
        current = latest_jobs.get(name)
        if current is None or _is_newer(pj, current):
            latest_jobs[name] = pj
    return latest_jobs
