"""
Clinic registration submission, dood!
"""

from .models import SubmissionOutcome, SubmissionPayload
from .submitter import (
    DEFAULT_ENDPOINT,
    ClinicSubmitter,
    SubmissionError,
    SubmissionTransportError,
)

__all__ = [
    "DEFAULT_ENDPOINT",
    "ClinicSubmitter",
    "SubmissionError",
    "SubmissionOutcome",
    "SubmissionPayload",
    "SubmissionTransportError",
]
