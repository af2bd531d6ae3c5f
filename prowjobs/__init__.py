"""
prowjobs - ProwJob translation layer

Turns job templates into ProwJob records, materializes records into
pods, and classifies records for scheduling controllers.
"""

__version__ = "0.1.0"


__all__ = [
    "presubmit_spec",
    "postsubmit_spec",
    "periodic_spec",
    "batch_spec",
    "new_prow_job",
    "prow_job_to_pod",
    "partition_active",
    "get_latest_prow_jobs",
    "prow_job_fields",
    "ProwJobsConfig",
    "load_config",
]

from .spec_builder import presubmit_spec, postsubmit_spec, periodic_spec, batch_spec
from .records import new_prow_job
from .pod_builder import prow_job_to_pod
from .partition import partition_active
from .latest import get_latest_prow_jobs
from .fields import prow_job_fields
from .config import ProwJobsConfig, load_config
