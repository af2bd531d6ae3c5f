"""Logging fields for ProwJobs."""

from typing import Any

from prowjobs.schemas import EVENT_GUID_LABEL, ProwJob

PR_LOG_FIELD = "pr"
REPO_LOG_FIELD = "repo"
ORG_LOG_FIELD = "org"


def prow_job_fields(prow_job: ProwJob) -> dict[str, Any]:
    """
    Extract fields from a ProwJob useful for logging.

    Log them as `extra={"prow_job": prow_job_fields(pj)}`; "name" is
    reserved on LogRecord so the fields cannot be spread into extra
    directly. Pull request fields are only included when the run covers
    exactly one pull.
    """
    fields: dict[str, Any] = {
        "name": prow_job.name,
        "job": prow_job.spec.job,
        "type": prow_job.spec.type.value,
    }
    if prow_job.labels.get(EVENT_GUID_LABEL):
        fields[EVENT_GUID_LABEL] = prow_job.labels[EVENT_GUID_LABEL]
    refs = prow_job.spec.refs
    if refs is not None and len(refs.pulls) == 1:
        fields[PR_LOG_FIELD] = refs.pulls[0].number
        fields[REPO_LOG_FIELD] = refs.repo
        fields[ORG_LOG_FIELD] = refs.org
    return fields
