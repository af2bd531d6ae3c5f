"""
ProwJob schema - the runtime record of one job run.

A ProwJob is created in the triggered state when a JobSpec is scheduled.
Its name is its identity: assigned once, never reused, and shared with
the pod that runs it. State transitions after creation are made by the
controllers that own the record.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from .job_spec import JobSpec
from .types import ProwJobState

# RFC 3339 at second precision, as the platform serializes timestamps.
TIME_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def _utcnow() -> datetime:
    """Return current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


def format_time(value: datetime) -> str:
    """Serialize a datetime the way the platform does."""
    return value.astimezone(timezone.utc).strftime(TIME_FORMAT)


def parse_time(value: str) -> datetime:
    """Parse a platform timestamp into a timezone-aware datetime."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value).astimezone(timezone.utc)


@dataclass
class ProwJobStatus:
    """
    Observed status of a ProwJob.

    Attributes:
        start_time: When the record was created
        state: Lifecycle state
        completion_time: When the job reached a terminal state (None while in flight)
        description: Human-readable status detail
        url: Link to the job's logs/results
        pod_name: Pod running the job, once materialized
        build_id: Build identifier handed to the pod
    """
    start_time: datetime = field(default_factory=_utcnow)
    state: ProwJobState = ProwJobState.TRIGGERED
    completion_time: Optional[datetime] = None
    description: str = ""
    url: str = ""
    pod_name: str = ""
    build_id: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the wire shape."""
        result: dict[str, Any] = {
            "startTime": format_time(self.start_time),
            "state": self.state.value,
        }
        if self.completion_time is not None:
            result["completionTime"] = format_time(self.completion_time)
        if self.description:
            result["description"] = self.description
        if self.url:
            result["url"] = self.url
        if self.pod_name:
            result["pod_name"] = self.pod_name
        if self.build_id:
            result["build_id"] = self.build_id
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProwJobStatus":
        """Deserialize from the wire shape."""
        completion_time = None
        if data.get("completionTime"):
            completion_time = parse_time(data["completionTime"])
        return cls(
            start_time=parse_time(data["startTime"]),
            state=ProwJobState.from_string(data.get("state", ProwJobState.TRIGGERED.value)),
            completion_time=completion_time,
            description=data.get("description", ""),
            url=data.get("url", ""),
            pod_name=data.get("pod_name", ""),
            build_id=data.get("build_id", ""),
        )


@dataclass
class ProwJob:
    """
    A record of a job run.

    Attributes:
        name: Unique identity of this run (also the pod name)
        spec: The resolved JobSpec being run
        labels: Caller-supplied and system labels
        status: Start time and lifecycle state
    """
    name: str
    spec: JobSpec
    labels: dict[str, str] = field(default_factory=dict)
    status: ProwJobStatus = field(default_factory=ProwJobStatus)

    api_version = "prow.k8s.io/v1"
    kind = "ProwJob"

    @property
    def is_complete(self) -> bool:
        """Check if the run has reached a terminal state."""
        return self.status.state.is_terminal

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the wire shape."""
        metadata: dict[str, Any] = {"name": self.name}
        if self.labels:
            metadata["labels"] = dict(self.labels)
        return {
            "apiVersion": self.api_version,
            "kind": self.kind,
            "metadata": metadata,
            "spec": self.spec.to_dict(),
            "status": self.status.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProwJob":
        """Deserialize from the wire shape."""
        metadata = data.get("metadata", {})
        return cls(
            name=metadata["name"],
            labels=dict(metadata.get("labels", {})),
            spec=JobSpec.from_dict(data["spec"]),
            status=ProwJobStatus.from_dict(data["status"]),
        )
