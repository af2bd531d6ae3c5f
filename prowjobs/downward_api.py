"""
Downward API - the environment every job container sees.

env_for_spec is the default environment deriver used by the pod builder.
It exposes the job's identity and the refs under test as environment
variables, plus the whole thing as JSON in JOB_SPEC for tools that would
rather parse one value:

    JOB_NAME, JOB_TYPE, JOB_SPEC, BUILD_ID, BUILD_NUMBER, PROW_JOB_ID
    REPO_OWNER, REPO_NAME, PULL_BASE_REF, PULL_BASE_SHA, PULL_REFS   (not periodic)
    PULL_NUMBER, PULL_PULL_SHA                                       (presubmit, one pull)

PULL_REFS encodes the merge under test:

    master:abc123,42:def456,43:0a1b2c
"""

import json
from typing import Any, Callable

from prowjobs.schemas import JobSpec, ProwJobType, Refs

# (spec, build_id, prow_job_id) -> environment. Raise on failure.
EnvironmentDeriver = Callable[[JobSpec, str, str], dict[str, str]]


def pull_refs(refs: Refs) -> str:
    """Encode refs as base_ref:base_sha followed by number:sha per pull."""
    parts = [f"{refs.base_ref}:{refs.base_sha}"]
    parts.extend(f"{pull.number}:{pull.sha}" for pull in refs.pulls)
    return ",".join(parts)


def downward_job_spec(spec: JobSpec, build_id: str, prow_job_id: str) -> dict[str, Any]:
    """The JOB_SPEC document for a run."""
    result: dict[str, Any] = {
        "type": spec.type.value,
        "job": spec.job,
        "buildid": build_id,
        "prowjobid": prow_job_id,
    }
    if spec.refs is not None:
        result["refs"] = spec.refs.to_dict()
    return result


def env_for_spec(spec: JobSpec, build_id: str, prow_job_id: str) -> dict[str, str]:
    """
    Derive the job environment for one run.

    Args:
        spec: The job spec being run
        build_id: Build identifier for this run
        prow_job_id: Name of the ProwJob record

    Returns:
        Mapping of environment variable name to value

    Raises:
        ValueError: If build_id is empty
    """
    if not build_id:
        raise ValueError("build id is required")

    job_spec_json = json.dumps(
        downward_job_spec(spec, build_id, prow_job_id),
        sort_keys=True,
        separators=(",", ":"),
    )
    env = {
        "JOB_NAME": spec.job,
        "JOB_TYPE": spec.type.value,
        "JOB_SPEC": job_spec_json,
        "BUILD_ID": build_id,
        # Legacy name kept for jobs written against older tooling
        "BUILD_NUMBER": build_id,
        "PROW_JOB_ID": prow_job_id,
    }

    if not spec.type.has_refs or spec.refs is None:
        return env

    env["REPO_OWNER"] = spec.refs.org
    env["REPO_NAME"] = spec.refs.repo
    env["PULL_BASE_REF"] = spec.refs.base_ref
    env["PULL_BASE_SHA"] = spec.refs.base_sha
    env["PULL_REFS"] = pull_refs(spec.refs)

    if spec.type == ProwJobType.PRESUBMIT and len(spec.refs.pulls) == 1:
        env["PULL_NUMBER"] = str(spec.refs.pulls[0].number)
        env["PULL_PULL_SHA"] = spec.refs.pulls[0].sha

    return env
