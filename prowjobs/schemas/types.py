"""
Enumerations and well-known names shared by the prowjobs data model.

- ProwJobType  -> how the job was triggered (presubmit, postsubmit, periodic, batch)
- ProwJobAgent -> which backend runs the job (kubernetes or an external CI agent)
- ProwJobState -> lifecycle state of a running record
"""

from enum import Enum


# Cluster alias used when a kubernetes job does not name one.
DEFAULT_CLUSTER_ALIAS = "default"

# Labels and annotations stamped on every materialized pod.
CREATED_BY_PROW_LABEL = "created-by-prow"
PROW_JOB_TYPE_LABEL = "prow.k8s.io/type"
PROW_JOB_ANNOTATION = "prow.k8s.io/job"

# Label carrying the GitHub webhook delivery that triggered the job.
EVENT_GUID_LABEL = "event-GUID"


class ProwJobType(str, Enum):
    """How a job came to be run."""
    PRESUBMIT = "presubmit"
    POSTSUBMIT = "postsubmit"
    PERIODIC = "periodic"
    BATCH = "batch"

    @property
    def has_refs(self) -> bool:
        """Periodic jobs run against no source refs."""
        return self != ProwJobType.PERIODIC

    @classmethod
    def from_string(cls, value: str) -> "ProwJobType":
        """Parse a ProwJobType from its string value."""
        for job_type in cls:
            if job_type.value == value:
                return job_type
        raise ValueError(f"Unknown job type: {value}")


class ProwJobAgent(str, Enum):
    """
    Execution backend for a job.

    Only the kubernetes agent carries a pod spec; every other agent
    runs the job somewhere this layer does not materialize.
    """
    KUBERNETES = "kubernetes"
    JENKINS = "jenkins"

    @property
    def is_kubernetes(self) -> bool:
        return self == ProwJobAgent.KUBERNETES

    @classmethod
    def from_string(cls, value: str) -> "ProwJobAgent":
        """Parse a ProwJobAgent from its string value."""
        for agent in cls:
            if agent.value == value:
                return agent
        raise ValueError(f"Unknown agent: {value}")


class ProwJobState(str, Enum):
    """
    Lifecycle state of a ProwJob.

    triggered is the only valid initial state. pending and triggered
    are in flight; everything else is terminal.
    """
    TRIGGERED = "triggered"
    PENDING = "pending"
    SUCCESS = "success"
    FAILURE = "failure"
    ABORTED = "aborted"
    ERROR = "error"

    @property
    def is_active(self) -> bool:
        """Check if a job in this state is still in flight."""
        return self in (ProwJobState.TRIGGERED, ProwJobState.PENDING)

    @property
    def is_terminal(self) -> bool:
        """Check if a job in this state has finished."""
        return not self.is_active

    @classmethod
    def from_string(cls, value: str) -> "ProwJobState":
        """Parse a ProwJobState from its string value."""
        for state in cls:
            if state.value == value:
                return state
        raise ValueError(f"Unknown state: {value}")
