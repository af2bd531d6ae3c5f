"""
Pod schemas - the subset of the Kubernetes pod model prowjobs touches.

Only the fields this layer reads or writes are modelled; everything else
(volumes, resources, node selectors, ...) rides along untouched in `extra`
so a round trip through these types never drops platform configuration.

These objects are mutable, like the API objects they mirror. Code that
must not alias a shared pod spec copies it with copy.deepcopy.
"""

from dataclasses import dataclass, field
from typing import Any


_ENV_VAR_KEYS = {"name", "value"}


@dataclass
class EnvVar:
    """
    A single environment variable on a container.

    Entries sourced from the platform (valueFrom with secretKeyRef,
    fieldRef, ...) keep that source in `extra`; such entries carry no
    literal value on the wire.
    """
    name: str
    value: str = ""
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"name": self.name}
        if "valueFrom" not in self.extra:
            result["value"] = self.value
        result.update(self.extra)
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EnvVar":
        return cls(
            name=data["name"],
            value=data.get("value", ""),
            extra={k: v for k, v in data.items() if k not in _ENV_VAR_KEYS},
        )


_CONTAINER_KEYS = {"name", "image", "command", "args", "env"}


@dataclass
class Container:
    """
    A container within a pod spec.

    Attributes:
        name: Container name, may be empty in job config (defaulted at materialization)
        image: Container image reference
        command: Entrypoint override
        args: Arguments to the entrypoint
        env: Ordered environment variables
        extra: Any other container fields, passed through verbatim
    """
    name: str = ""
    image: str = ""
    command: list[str] = field(default_factory=list)
    args: list[str] = field(default_factory=list)
    env: list[EnvVar] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the Kubernetes wire shape."""
        result: dict[str, Any] = {"name": self.name}
        if self.image:
            result["image"] = self.image
        if self.command:
            result["command"] = list(self.command)
        if self.args:
            result["args"] = list(self.args)
        if self.env:
            result["env"] = [e.to_dict() for e in self.env]
        result.update(self.extra)
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Container":
        """Deserialize from the Kubernetes wire shape."""
        return cls(
            name=data.get("name", ""),
            image=data.get("image", ""),
            command=list(data.get("command", [])),
            args=list(data.get("args", [])),
            env=[EnvVar.from_dict(e) for e in data.get("env", [])],
            extra={k: v for k, v in data.items() if k not in _CONTAINER_KEYS},
        )


_POD_SPEC_KEYS = {"containers", "initContainers", "restartPolicy"}


@dataclass
class PodSpec:
    """
    Pod specification carried by kubernetes-agent jobs.

    Attributes:
        containers: Application containers
        init_containers: Containers run to completion before the application containers
        restart_policy: Pod restart policy ("" means platform default)
        extra: Any other pod spec fields, passed through verbatim
    """
    containers: list[Container] = field(default_factory=list)
    init_containers: list[Container] = field(default_factory=list)
    restart_policy: str = ""
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the Kubernetes wire shape."""
        result: dict[str, Any] = {
            "containers": [c.to_dict() for c in self.containers],
        }
        if self.init_containers:
            result["initContainers"] = [c.to_dict() for c in self.init_containers]
        if self.restart_policy:
            result["restartPolicy"] = self.restart_policy
        result.update(self.extra)
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PodSpec":
        """Deserialize from the Kubernetes wire shape."""
        return cls(
            containers=[Container.from_dict(c) for c in data.get("containers", [])],
            init_containers=[Container.from_dict(c) for c in data.get("initContainers", [])],
            restart_policy=data.get("restartPolicy", ""),
            extra={k: v for k, v in data.items() if k not in _POD_SPEC_KEYS},
        )


@dataclass
class Pod:
    """
    A submittable pod - the execution unit for one ProwJob run.

    The pod name equals the ProwJob name so the controller can find the
    pod belonging to a record without a lookup table.
    """
    name: str
    spec: PodSpec
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)

    api_version = "v1"
    kind = "Pod"

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the Kubernetes wire shape."""
        metadata: dict[str, Any] = {"name": self.name}
        if self.labels:
            metadata["labels"] = dict(self.labels)
        if self.annotations:
            metadata["annotations"] = dict(self.annotations)
        return {
            "apiVersion": self.api_version,
            "kind": self.kind,
            "metadata": metadata,
            "spec": self.spec.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Pod":
        """Deserialize from the Kubernetes wire shape."""
        metadata = data.get("metadata", {})
        return cls(
            name=metadata["name"],
            labels=dict(metadata.get("labels", {})),
            annotations=dict(metadata.get("annotations", {})),
            spec=PodSpec.from_dict(data.get("spec", {})),
        )
