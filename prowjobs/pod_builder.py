"""
Pod builder - materialize a ProwJob into the Pod that runs it.

Materialization flow:
1. Derive the job environment (downward API by default)
2. Copy the pod spec - containers and init containers are deep copies,
   never aliases of the ProwJob's spec, so concurrent materializations of
   one record cannot see each other's edits
3. Give unnamed containers a deterministic default name
4. Append the derived environment to every container, after its own env
5. Set restartPolicy Never - a pod is a single attempt
6. Label and annotate the pod so it can be traced back to its record

Duplicate env names between a container and the derived environment are
left for the platform to resolve.
"""

import copy
import logging

from prowjobs.downward_api import EnvironmentDeriver, env_for_spec
from prowjobs.errors import DerivationError, PreconditionViolation
from prowjobs.fields import prow_job_fields
from prowjobs.schemas import (
    CREATED_BY_PROW_LABEL,
    PROW_JOB_ANNOTATION,
    PROW_JOB_TYPE_LABEL,
    Container,
    EnvVar,
    Pod,
    ProwJob,
)

logger = logging.getLogger(__name__)

RESTART_POLICY_NEVER = "Never"


def kube_env(environment: dict[str, str]) -> list[EnvVar]:
    """
    Convert an environment mapping into pod spec env entries.

    Entries are sorted by name so the same mapping always yields the
    same list.
    """
    return [EnvVar(name=key, value=environment[key]) for key in sorted(environment)]


def _materialize_containers(
    containers: list[Container],
    default_prefix: str,
    env: list[EnvVar],
    taken: set[str],
) -> list[Container]:
    """
    Copy containers, default empty names, and append the derived env.

    A default name is `{default_prefix}-{index}`. When that name is
    already in use the index is bumped until a free name is found.

    Args:
        containers: Containers from the ProwJob's pod spec (not modified)
        default_prefix: Prefix for default names, suffixed with the container index
        env: Derived environment entries
        taken: Container names already in use in the pod; defaults are added to it

    Returns:
        New container list sharing no objects with the input
    """
    result = []
    for i, source in enumerate(containers):
        container = copy.deepcopy(source)
        if not container.name:
            index = i
            while f"{default_prefix}-{index}" in taken:
                index += 1
            container.name = f"{default_prefix}-{index}"
            taken.add(container.name)
        container.env.extend(copy.deepcopy(env))
        result.append(container)
    return result


def prow_job_to_pod(
    prow_job: ProwJob,
    build_id: str,
    *,
    derive_env: EnvironmentDeriver = env_for_spec,
) -> Pod:
    """
    Convert a ProwJob to the Pod that will run it.

    Args:
        prow_job: The record to materialize (not modified)
        build_id: Build identifier for this run
        derive_env: Environment deriver, called with (spec, build_id, prow_job.name)

    Returns:
        A Pod structurally independent of the ProwJob

    Raises:
        PreconditionViolation: If the job is not run by the kubernetes agent
        DerivationError: If the environment deriver fails; no pod is produced
    """
    pod_spec = prow_job.spec.pod_spec
    if pod_spec is None:
        raise PreconditionViolation(
            f"Job '{prow_job.spec.job}' runs on agent '{prow_job.spec.agent.value}', "
            f"not kubernetes; it has no pod to build",
            job=prow_job.spec.job,
        )

    try:
        environment = derive_env(prow_job.spec, build_id, prow_job.name)
    except DerivationError:
        raise
    except Exception as e:
        raise DerivationError(prow_job.spec.job, prow_job.name, str(e)) from e

    env = kube_env(environment)

    spec = copy.deepcopy(pod_spec)
    spec.restart_policy = RESTART_POLICY_NEVER
    taken = {c.name for c in pod_spec.init_containers + pod_spec.containers if c.name}
    spec.init_containers = _materialize_containers(
        pod_spec.init_containers, f"{prow_job.name}-init", env, taken
    )
    spec.containers = _materialize_containers(pod_spec.containers, prow_job.name, env, taken)

    pod_labels = dict(prow_job.labels)
    pod_labels[CREATED_BY_PROW_LABEL] = "true"
    pod_labels[PROW_JOB_TYPE_LABEL] = prow_job.spec.type.value

    pod = Pod(
        name=prow_job.name,
        labels=pod_labels,
        annotations={PROW_JOB_ANNOTATION: prow_job.spec.job},
        spec=spec,
    )
    logger.debug(
        f"Built pod {pod.name} with {len(env)} derived env vars",
        extra={"prow_job": prow_job_fields(prow_job)},
    )
    return pod
