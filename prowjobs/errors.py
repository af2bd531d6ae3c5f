"""
Error classes for prowjobs.

- DerivationError: environment derivation failed while materializing a pod
- PreconditionViolation: a job shape that cannot be built or materialized
  (kubernetes agent without a pod spec, or materializing a non-kubernetes job)
- ConfigError: configuration file missing keys or not valid YAML

Error handling contract:
- Errors are exceptions, not values
- Nothing in this package retries; retry is a controller concern
"""

from typing import Optional


class ProwJobsError(Exception):
    """Base exception for prowjobs."""
    pass


class DerivationError(ProwJobsError):
    """
    Environment derivation failed.

    Raised by the pod builder when the environment deriver fails. No pod
    is produced. The underlying exception is available as __cause__.
    """

    def __init__(self, job: str, prow_job_id: str, message: str):
        self.job = job
        self.prow_job_id = prow_job_id
        super().__init__(
            f"Failed to derive environment for job '{job}' ({prow_job_id}): {message}"
        )


class PreconditionViolation(ProwJobsError):
    """
    A job shape that violates a construction-time precondition.

    Examples:
    - kubernetes agent selected but the template has no pod spec
    - asking for a pod from a job run by an external agent
    """

    def __init__(self, message: str, job: Optional[str] = None):
        self.job = job
        super().__init__(message)


class ConfigError(ProwJobsError):
    """Configuration validation error."""
    pass
