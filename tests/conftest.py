from datetime import datetime, timedelta, timezone

import pytest

from prowjobs.identity import sequential_ids
from prowjobs.schemas import (
    Container,
    EnvVar,
    JobSpec,
    KubernetesExecution,
    PodSpec,
    ProwJob,
    ProwJobState,
    ProwJobStatus,
    ProwJobType,
    Pull,
    Refs,
    JobTemplate,
)

T0 = datetime(2018, 3, 14, 11, 54, 0, tzinfo=timezone.utc)


@pytest.fixture
def pod_spec():
    return PodSpec(
        containers=[
            Container(
                image="gcr.io/k8s-testimages/bootstrap:latest",
                args=["--repo=k8s.io/test-infra"],
                env=[EnvVar(name="GOPATH", value="/go")],
            ),
        ],
    )


@pytest.fixture
def refs():
    return Refs(
        org="kubernetes",
        repo="test-infra",
        base_ref="master",
        base_sha="abc123",
        pulls=(Pull(number=42, author="alice", sha="def456"),),
    )


@pytest.fixture
def template(pod_spec):
    """A presubmit-shaped template with a two-level run_after_success chain."""
    return JobTemplate(
        name="pull-test-infra-bazel",
        context="pull-test-infra-bazel",
        rerun_command="/test pull-test-infra-bazel",
        max_concurrency=5,
        spec=pod_spec,
        run_after_success=(
            JobTemplate(
                name="pull-test-infra-verify",
                context="verify",
                spec=pod_spec,
                run_after_success=(
                    JobTemplate(name="pull-test-infra-e2e", spec=pod_spec, cluster="build01"),
                ),
            ),
            JobTemplate(name="pull-test-infra-lint", spec=pod_spec),
        ),
    )


@pytest.fixture
def fixed_ids():
    return sequential_ids("pj")


@pytest.fixture
def make_prow_job(pod_spec, refs):
    """Factory for ProwJobs in a given state, type and start time."""
    counter = 0

    def _make(
        job: str = "pull-test-infra-bazel",
        state: ProwJobState = ProwJobState.TRIGGERED,
        job_type: ProwJobType = ProwJobType.PRESUBMIT,
        start_time: datetime = T0,
        name: str = "",
    ) -> ProwJob:
        nonlocal counter
        counter += 1
        return ProwJob(
            name=name or f"pj-{counter:04d}",
            spec=JobSpec(
                type=job_type,
                job=job,
                execution=KubernetesExecution(pod_spec=pod_spec),
                refs=None if job_type == ProwJobType.PERIODIC else refs,
            ),
            status=ProwJobStatus(start_time=start_time, state=state),
        )

    return _make


@pytest.fixture
def later():
    """Start time n seconds after T0."""
    def _later(seconds: int) -> datetime:
        return T0 + timedelta(seconds=seconds)
    return _later


@pytest.fixture
def t0():
    return T0
