"""Submission workflow for a completed loan application form."""

from cattle_loan.domain.submission.orchestrator import (
    SubmissionOrchestrator,
    SubmissionOutcome,
    SubmissionState,
)

__all__ = ["SubmissionOrchestrator", "SubmissionOutcome", "SubmissionState"]
