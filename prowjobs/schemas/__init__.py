"""
prowjobs.schemas - Schema definitions for the job translation layer.

This module defines the core data structures for prowjobs:

JobTemplate -> JobSpec -> ProwJob -> Pod

Lifecycle:
1. JobTemplate: Static job definition from job config (presubmit, postsubmit, periodic)
2. JobSpec: Typed, resolved execution intent with its run_after_success chain built
3. ProwJob: Runtime record with identity, labels, start time and lifecycle state
4. Pod: Submittable execution unit materialized from a ProwJob for one run
"""

from .types import (
    ProwJobType,
    ProwJobAgent,
    ProwJobState,
    DEFAULT_CLUSTER_ALIAS,
    CREATED_BY_PROW_LABEL,
    PROW_JOB_TYPE_LABEL,
    PROW_JOB_ANNOTATION,
    EVENT_GUID_LABEL,
)
from .pod import (
    EnvVar,
    Container,
    PodSpec,
    Pod,
)
from .refs import (
    Pull,
    Refs,
)
from .job_template import (
    JobTemplate,
)
from .job_spec import (
    JobSpec,
    KubernetesExecution,
    ExternalExecution,
)
from .prow_job import (
    ProwJob,
    ProwJobStatus,
)

__all__ = [
    # Types
    "ProwJobType",
    "ProwJobAgent",
    "ProwJobState",
    "DEFAULT_CLUSTER_ALIAS",
    "CREATED_BY_PROW_LABEL",
    "PROW_JOB_TYPE_LABEL",
    "PROW_JOB_ANNOTATION",
    "EVENT_GUID_LABEL",
    # Pod
    "EnvVar",
    "Container",
    "PodSpec",
    "Pod",
    # Refs
    "Pull",
    "Refs",
    # Job Template
    "JobTemplate",
    # Job Spec
    "JobSpec",
    "KubernetesExecution",
    "ExternalExecution",
    # ProwJob
    "ProwJob",
    "ProwJobStatus",
]
