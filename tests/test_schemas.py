"""Tests for prowjobs.schemas module.

Tests the JobTemplate -> JobSpec -> ProwJob -> Pod data model and its
wire shapes.
"""

import dataclasses

import pytest

from prowjobs.errors import PreconditionViolation
from prowjobs.schemas import (
    Container,
    EnvVar,
    ExternalExecution,
    JobSpec,
    JobTemplate,
    KubernetesExecution,
    Pod,
    PodSpec,
    ProwJob,
    ProwJobAgent,
    ProwJobState,
    ProwJobStatus,
    ProwJobType,
    Pull,
    Refs,
)
from prowjobs.schemas.prow_job import format_time, parse_time


# =============================================================================
# ENUM TESTS
# =============================================================================


class TestProwJobState:
    """Tests for ProwJobState."""

    def test_active_states(self):
        assert {s for s in ProwJobState if s.is_active} == {
            ProwJobState.TRIGGERED,
            ProwJobState.PENDING,
        }

    def test_terminal_states(self):
        assert {s for s in ProwJobState if s.is_terminal} == {
            ProwJobState.SUCCESS,
            ProwJobState.FAILURE,
            ProwJobState.ABORTED,
            ProwJobState.ERROR,
        }

    def test_from_string_invalid(self):
        with pytest.raises(ValueError, match="Unknown state"):
            ProwJobState.from_string("running")


class TestProwJobTypeAndAgent:
    """Tests for ProwJobType and ProwJobAgent."""

    def test_only_periodic_lacks_refs(self):
        assert [t for t in ProwJobType if not t.has_refs] == [ProwJobType.PERIODIC]

    def test_from_string(self):
        assert ProwJobType.from_string("batch") == ProwJobType.BATCH
        assert ProwJobAgent.from_string("jenkins") == ProwJobAgent.JENKINS

    def test_unknown_agent(self):
        with pytest.raises(ValueError, match="Unknown agent"):
            ProwJobAgent.from_string("travis")


# =============================================================================
# POD TESTS
# =============================================================================


class TestPodSpec:
    """Tests for pod shapes."""

    def test_unknown_fields_preserved(self):
        data = {
            "containers": [
                {
                    "name": "test",
                    "image": "golang:1.10",
                    "env": [{"name": "A", "value": "1"}],
                    "volumeMounts": [{"name": "cache", "mountPath": "/cache"}],
                },
            ],
            "volumes": [{"name": "cache", "emptyDir": {}}],
            "nodeSelector": {"pool": "ci"},
        }
        spec = PodSpec.from_dict(data)
        assert spec.containers[0].env == [EnvVar("A", "1")]
        assert spec.containers[0].extra == {"volumeMounts": [{"name": "cache", "mountPath": "/cache"}]}
        assert spec.extra == {"volumes": [{"name": "cache", "emptyDir": {}}], "nodeSelector": {"pool": "ci"}}
        assert spec.to_dict() == data

    def test_env_value_from_preserved(self):
        """Secret and field references survive a round trip without a literal value."""
        data = {
            "containers": [
                {
                    "name": "test",
                    "env": [
                        {"name": "A", "value": "1"},
                        {
                            "name": "TOKEN",
                            "valueFrom": {"secretKeyRef": {"name": "oauth", "key": "token"}},
                        },
                    ],
                },
            ],
        }
        spec = PodSpec.from_dict(data)
        token = spec.containers[0].env[1]
        assert token.value == ""
        assert token.extra == {"valueFrom": {"secretKeyRef": {"name": "oauth", "key": "token"}}}
        assert spec.to_dict() == data

    def test_init_containers_and_restart_policy(self):
        spec = PodSpec(
            containers=[Container(name="main")],
            init_containers=[Container(name="clone")],
            restart_policy="Never",
        )
        data = spec.to_dict()
        assert data["initContainers"] == [{"name": "clone"}]
        assert data["restartPolicy"] == "Never"

    def test_pod_header(self):
        pod = Pod(name="abc", spec=PodSpec(), labels={"a": "b"})
        data = pod.to_dict()
        assert data["apiVersion"] == "v1"
        assert data["kind"] == "Pod"
        assert data["metadata"] == {"name": "abc", "labels": {"a": "b"}}
        assert Pod.from_dict(data).labels == {"a": "b"}


# =============================================================================
# REFS / TEMPLATE TESTS
# =============================================================================


class TestRefs:
    """Tests for Refs."""

    def test_immutable(self, refs):
        with pytest.raises(dataclasses.FrozenInstanceError):
            refs.org = "other"

    def test_from_dict(self):
        refs = Refs.from_dict({
            "org": "kubernetes",
            "repo": "kubernetes",
            "base_ref": "master",
            "pulls": [{"number": "7", "sha": "abc"}],
        })
        assert refs.pulls == (Pull(number=7, sha="abc"),)
        assert refs.base_sha == ""


class TestJobTemplate:
    """Tests for JobTemplate."""

    def test_from_dict(self):
        template = JobTemplate.from_dict({
            "name": "pull-kubernetes-unit",
            "context": "pull-kubernetes-unit",
            "max_concurrency": 10,
            "spec": {"containers": [{"image": "golang"}]},
            "run_after_success": [
                {"name": "pull-kubernetes-e2e", "agent": "jenkins"},
            ],
        })
        assert template.agent == ProwJobAgent.KUBERNETES
        assert template.spec.containers[0].image == "golang"
        assert template.run_after_success[0].agent == ProwJobAgent.JENKINS
        assert template.run_after_success[0].spec is None

    def test_to_dict_omits_defaults(self):
        assert JobTemplate(name="j", agent=ProwJobAgent.JENKINS).to_dict() == {
            "name": "j",
            "agent": "jenkins",
        }


# =============================================================================
# JOBSPEC TESTS
# =============================================================================


class TestJobSpec:
    """Tests for JobSpec."""

    def test_type_immutable(self, pod_spec):
        spec = JobSpec(
            type=ProwJobType.PRESUBMIT,
            job="j",
            execution=KubernetesExecution(pod_spec=pod_spec),
        )
        with pytest.raises(dataclasses.FrozenInstanceError):
            spec.type = ProwJobType.BATCH

    def test_kubernetes_execution_requires_pod_spec(self):
        with pytest.raises(PreconditionViolation):
            KubernetesExecution(pod_spec=None)

    def test_external_execution_rejects_kubernetes(self):
        with pytest.raises(PreconditionViolation):
            ExternalExecution(agent=ProwJobAgent.KUBERNETES)

    def test_from_dict_kubernetes_without_pod_spec(self):
        with pytest.raises(PreconditionViolation, match="pod_spec"):
            JobSpec.from_dict({"type": "periodic", "job": "j", "agent": "kubernetes"})

    def test_from_dict_defaults_cluster(self):
        spec = JobSpec.from_dict({
            "type": "periodic",
            "job": "j",
            "agent": "kubernetes",
            "pod_spec": {"containers": [{"image": "busybox"}]},
        })
        assert spec.cluster == "default"

    def test_dict_round_trip_keeps_chain(self, template, refs):
        from prowjobs.spec_builder import presubmit_spec

        spec = presubmit_spec(template, refs)
        restored = JobSpec.from_dict(spec.to_dict())
        assert restored == spec


# =============================================================================
# PROWJOB TESTS
# =============================================================================


class TestProwJob:
    """Tests for ProwJob."""

    def test_wire_shape(self, make_prow_job, t0):
        pj = make_prow_job(state=ProwJobState.PENDING)
        pj.labels["event-GUID"] = "guid"
        data = pj.to_dict()
        assert data["apiVersion"] == "prow.k8s.io/v1"
        assert data["kind"] == "ProwJob"
        assert data["metadata"] == {"name": pj.name, "labels": {"event-GUID": "guid"}}
        assert data["spec"]["type"] == "presubmit"
        assert data["status"] == {"startTime": "2018-03-14T11:54:00Z", "state": "pending"}

    def test_from_dict(self, make_prow_job):
        pj = make_prow_job(state=ProwJobState.SUCCESS)
        pj.status.completion_time = pj.status.start_time
        pj.status.url = "https://prow.example.com/log"
        restored = ProwJob.from_dict(pj.to_dict())
        assert restored.name == pj.name
        assert restored.status == pj.status
        assert restored.is_complete

    def test_is_complete(self, make_prow_job):
        assert not make_prow_job(state=ProwJobState.TRIGGERED).is_complete
        assert make_prow_job(state=ProwJobState.ABORTED).is_complete

    def test_default_status_is_triggered(self):
        assert ProwJobStatus().state == ProwJobState.TRIGGERED


class TestTimestamps:
    """Tests for timestamp formatting."""

    def test_second_precision(self, t0):
        assert format_time(t0.replace(microsecond=999)) == "2018-03-14T11:54:00Z"

    def test_parse(self, t0):
        assert parse_time("2018-03-14T11:54:00Z") == t0
