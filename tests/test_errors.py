"""Tests for prowjobs error classes.

Tests cover:
- Error hierarchy
- Context carried by DerivationError and PreconditionViolation
"""

import pytest

from prowjobs.errors import (
    ConfigError,
    DerivationError,
    PreconditionViolation,
    ProwJobsError,
)


class TestProwJobsError:
    """Tests for base ProwJobsError."""

    def test_is_exception(self):
        assert issubclass(ProwJobsError, Exception)

    @pytest.mark.parametrize("error_cls", [DerivationError, PreconditionViolation, ConfigError])
    def test_subclasses(self, error_cls):
        assert issubclass(error_cls, ProwJobsError)


class TestDerivationError:
    """Tests for DerivationError."""

    def test_message_and_context(self):
        error = DerivationError("pull-unit", "pj-0001", "missing refs")
        assert error.job == "pull-unit"
        assert error.prow_job_id == "pj-0001"
        assert str(error) == "Failed to derive environment for job 'pull-unit' (pj-0001): missing refs"

    def test_can_be_caught_as_prowjobs_error(self):
        with pytest.raises(ProwJobsError):
            raise DerivationError("j", "id", "boom")


class TestPreconditionViolation:
    """Tests for PreconditionViolation."""

    def test_has_message(self):
        error = PreconditionViolation("no pod spec", job="j")
        assert str(error) == "no pod spec"
        assert error.job == "j"

    def test_job_optional(self):
        assert PreconditionViolation("no pod spec").job is None

    def test_not_a_derivation_error(self):
        assert not isinstance(PreconditionViolation("x"), DerivationError)
