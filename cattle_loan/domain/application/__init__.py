"""Loan application form: value objects, field registry and validator."""

from cattle_loan.domain.application.form_state import FormState
from cattle_loan.domain.application.models import (
    Applicant,
    Application,
    Banking,
    CattleEntry,
    CattleType,
    Farm,
    Loan,
    LoanPurpose,
    OwnershipType,
)
from cattle_loan.domain.application.validator import (
    ValidationResult,
    ValidationRule,
    iter_violations,
    validate,
)

__all__ = [
    "Applicant",
    "Application",
    "Banking",
    "CattleEntry",
    "CattleType",
    "Farm",
    "FormState",
    "Loan",
    "LoanPurpose",
    "OwnershipType",
    "ValidationResult",
    "ValidationRule",
    "iter_violations",
    "validate",
]
