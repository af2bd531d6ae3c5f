"""
Spec builder - Transform JobTemplate (+ refs) into JobSpec.

One builder per job type. Each builder:
- sets the type tag and copies the scalar fields that type carries
- resolves the execution: kubernetes jobs get a copy of the pod spec and a
  cluster alias (defaulted when the template names none), other agents get
  neither
- recursively builds every run_after_success child with the same builder,
  in template order

Refs handling:
- presubmit, postsubmit, batch: the same refs on every spec in the chain
- periodic: no refs anywhere in the chain

Scalar fields per type:
- presubmit: report (= not skip_report), context, rerun_command, max_concurrency
- postsubmit: max_concurrency
- periodic: job name only
- batch: context (batch completeness checks group results by context)
"""

import copy
from typing import Optional, Union

from prowjobs.errors import PreconditionViolation
from prowjobs.schemas import (
    DEFAULT_CLUSTER_ALIAS,
    ExternalExecution,
    JobSpec,
    JobTemplate,
    KubernetesExecution,
    ProwJobType,
    Refs,
)
from prowjobs.schemas.job_spec import Execution


def _resolve_execution(template: JobTemplate, default_cluster: str) -> Execution:
    """
    Resolve where a template's job runs.

    Args:
        template: The job template
        default_cluster: Alias used when a kubernetes template names no cluster

    Returns:
        KubernetesExecution for the kubernetes agent, ExternalExecution otherwise

    Raises:
        PreconditionViolation: If the kubernetes agent is selected without a pod spec
    """
    if not template.agent.is_kubernetes:
        return ExternalExecution(agent=template.agent)

    if template.spec is None:
        raise PreconditionViolation(
            f"Job '{template.name}': kubernetes agent requires a pod spec",
            job=template.name,
        )

    return KubernetesExecution(
        # Specs must not alias the pod spec owned by job config.
        pod_spec=copy.deepcopy(template.spec),
        cluster=template.cluster or default_cluster,
    )


def presubmit_spec(
    template: JobTemplate,
    refs: Refs,
    *,
    default_cluster: str = DEFAULT_CLUSTER_ALIAS,
) -> JobSpec:
    """
    Build a JobSpec for a presubmit job.

    Args:
        template: The presubmit template
        refs: Base ref and pull requests under test
        default_cluster: Cluster alias for kubernetes jobs that name none

    Returns:
        A presubmit JobSpec with its run_after_success chain built
    """
    return JobSpec(
        type=ProwJobType.PRESUBMIT,
        job=template.name,
        execution=_resolve_execution(template, default_cluster),
        refs=refs,
        report=not template.skip_report,
        context=template.context,
        rerun_command=template.rerun_command,
        max_concurrency=template.max_concurrency,
        run_after_success=tuple(
            presubmit_spec(child, refs, default_cluster=default_cluster)
            for child in template.run_after_success
        ),
    )


def postsubmit_spec(
    template: JobTemplate,
    refs: Refs,
    *,
    default_cluster: str = DEFAULT_CLUSTER_ALIAS,
) -> JobSpec:
    """
    Build a JobSpec for a postsubmit job.

    Args:
        template: The postsubmit template
        refs: The pushed base ref
        default_cluster: Cluster alias for kubernetes jobs that name none

    Returns:
        A postsubmit JobSpec with its run_after_success chain built
    """
    return JobSpec(
        type=ProwJobType.POSTSUBMIT,
        job=template.name,
        execution=_resolve_execution(template, default_cluster),
        refs=refs,
        max_concurrency=template.max_concurrency,
        run_after_success=tuple(
            postsubmit_spec(child, refs, default_cluster=default_cluster)
            for child in template.run_after_success
        ),
    )


def periodic_spec(
    template: JobTemplate,
    *,
    default_cluster: str = DEFAULT_CLUSTER_ALIAS,
) -> JobSpec:
    """
    Build a JobSpec for a periodic job. Periodics run against no refs.

    Args:
        template: The periodic template
        default_cluster: Cluster alias for kubernetes jobs that name none

    Returns:
        A periodic JobSpec with its run_after_success chain built
    """
    return JobSpec(
        type=ProwJobType.PERIODIC,
        job=template.name,
        execution=_resolve_execution(template, default_cluster),
        run_after_success=tuple(
            periodic_spec(child, default_cluster=default_cluster)
            for child in template.run_after_success
        ),
    )


def batch_spec(
    template: JobTemplate,
    refs: Refs,
    *,
    default_cluster: str = DEFAULT_CLUSTER_ALIAS,
) -> JobSpec:
    """
    Build a JobSpec for a batch run of a presubmit job.

    Args:
        template: The presubmit template being batched
        refs: Base ref and every pull request in the batch
        default_cluster: Cluster alias for kubernetes jobs that name none

    Returns:
        A batch JobSpec with its run_after_success chain built
    """
    return JobSpec(
        type=ProwJobType.BATCH,
        job=template.name,
        execution=_resolve_execution(template, default_cluster),
        refs=refs,
        context=template.context,
        run_after_success=tuple(
            batch_spec(child, refs, default_cluster=default_cluster)
            for child in template.run_after_success
        ),
    )


_BUILDERS = {
    ProwJobType.PRESUBMIT: presubmit_spec,
    ProwJobType.POSTSUBMIT: postsubmit_spec,
    ProwJobType.BATCH: batch_spec,
}


def spec_for(
    job_type: Union[ProwJobType, str],
    template: JobTemplate,
    refs: Optional[Refs] = None,
    *,
    default_cluster: str = DEFAULT_CLUSTER_ALIAS,
) -> JobSpec:
    """
    Build a JobSpec for any job type.

    Convenience dispatch for callers that hold the type as data.
    Refs are required for every type except periodic, and ignored there.

    Raises:
        ValueError: If refs are missing for a type that needs them, or the type is unknown
    """
    if not isinstance(job_type, ProwJobType):
        job_type = ProwJobType.from_string(job_type)
    if job_type == ProwJobType.PERIODIC:
        return periodic_spec(template, default_cluster=default_cluster)
    if refs is None:
        raise ValueError(f"{job_type.value} jobs require refs")
    return _BUILDERS[job_type](template, refs, default_cluster=default_cluster)
