"""
JobTemplate schema - the declarative job definition from job config.

A JobTemplate is the static, version-controlled description of a
presubmit, postsubmit or periodic job. Batch jobs reuse presubmit
templates. Templates are produced by the job-config loader; this
package only turns them into JobSpecs.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from .pod import PodSpec
from .types import ProwJobAgent


@dataclass(frozen=True)
class JobTemplate:
    """
    A job template from job config.

    Attributes:
        name: Job name, unique within its job type
        skip_report: If true, results are not reported back to the pull request
        context: Status context the job reports under
        rerun_command: Comment that retriggers the job
        max_concurrency: Maximum number of concurrently running instances (0 = unbounded)
        agent: Backend that runs the job
        spec: Pod spec, only meaningful for the kubernetes agent
        cluster: Build cluster alias, only meaningful for the kubernetes agent
        run_after_success: Child templates run once this job succeeds
    """
    name: str
    skip_report: bool = False
    context: str = ""
    rerun_command: str = ""
    max_concurrency: int = 0
    agent: ProwJobAgent = ProwJobAgent.KUBERNETES
    spec: Optional[PodSpec] = None
    cluster: str = ""
    run_after_success: tuple["JobTemplate", ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the job-config dictionary shape."""
        return {
            "name": self.name,
            "agent": self.agent.value,
            **({"skip_report": self.skip_report} if self.skip_report else {}),
            **({"context": self.context} if self.context else {}),
            **({"rerun_command": self.rerun_command} if self.rerun_command else {}),
            **({"max_concurrency": self.max_concurrency} if self.max_concurrency else {}),
            **({"spec": self.spec.to_dict()} if self.spec is not None else {}),
            **({"cluster": self.cluster} if self.cluster else {}),
            **({"run_after_success": [t.to_dict() for t in self.run_after_success]}
               if self.run_after_success else {}),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "JobTemplate":
        """Deserialize from a job-config dictionary."""
        spec = None
        if data.get("spec") is not None:
            spec = PodSpec.from_dict(data["spec"])

        return cls(
            name=data["name"],
            skip_report=data.get("skip_report", False),
            context=data.get("context", ""),
            rerun_command=data.get("rerun_command", ""),
            max_concurrency=data.get("max_concurrency", 0),
            agent=ProwJobAgent.from_string(data.get("agent", ProwJobAgent.KUBERNETES.value)),
            spec=spec,
            cluster=data.get("cluster", ""),
            run_after_success=tuple(
                cls.from_dict(child) for child in data.get("run_after_success") or []
            ),
        )
