"""
Validation rules for a loan application.

Rules are checked in a fixed order and ``validate`` reports only the first
one that fails. Cattle entries are checked one at a time: all rules for
entry 1, then entry 2, and so on.
"""

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

from cattle_loan.domain.application.models import Application
from cattle_loan.utils.error_handling import ValidationError

# ASCII digits only; \d would also accept other Unicode digits
AADHAR_PATTERN = re.compile(r"[0-9]{12}")
PHONE_PATTERN = re.compile(r"[0-9]{10}")
ACCOUNT_NUMBER_PATTERN = re.compile(r"[0-9]{9,18}")
IFSC_PATTERN = re.compile(r"[A-Z]{4}0[A-Z0-9]{6}")
DECIMAL_PATTERN = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


class ValidationRule(Enum):
    """Form rules, in the order they are checked."""
    
    APPLICANT_NAME = 1
    AADHAR_NUMBER = 2
    PHONE = 3
    LAND_SIZE = 4
    CATTLE_BREED = 5
    CATTLE_QUANTITY = 6
    CATTLE_INSURANCE_DETAILS = 7
    LOAN_AMOUNT = 8
    ACCOUNT_NUMBER = 9
    IFSC_CODE = 10


MESSAGES = {
    ValidationRule.APPLICANT_NAME: "Please enter your name",
    ValidationRule.AADHAR_NUMBER: "Please enter valid 12-digit Aadhar number",
    ValidationRule.PHONE: "Please enter valid 10-digit phone number",
    ValidationRule.LAND_SIZE: "Please enter valid land size",
    ValidationRule.CATTLE_BREED: "Please enter breed for cattle #{number}",
    ValidationRule.CATTLE_QUANTITY: "Please enter valid quantity for cattle #{number}",
    ValidationRule.CATTLE_INSURANCE_DETAILS: "Please enter insurance details for cattle #{number}",
    ValidationRule.LOAN_AMOUNT: "Please enter a valid loan amount",
    ValidationRule.ACCOUNT_NUMBER: "Please enter valid account number",
    ValidationRule.IFSC_CODE: "Please enter valid IFSC code",
}


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating an application."""
    
    is_valid: bool
    reason: Optional[str] = None
    rule: Optional[ValidationRule] = None
    cattle_index: Optional[int] = None
    
    @classmethod
    def valid(cls) -> 'ValidationResult':
        return _VALID
    
    @classmethod
    def invalid(cls, rule: ValidationRule, cattle_index: Optional[int] = None) -> 'ValidationResult':
        """Build the failing result for a rule, numbering cattle entries from 1."""
        message = MESSAGES[rule]
        if cattle_index is not None:
            message = message.format(number=cattle_index + 1)
        return cls(is_valid=False, reason=message, rule=rule, cattle_index=cattle_index)
    
    def __bool__(self) -> bool:
        return self.is_valid
    
    def to_error(self) -> ValidationError:
        """Convert a failing result to the matching exception."""
        if self.is_valid:
            raise ValueError("A valid result has no error")
        return ValidationError(self.reason, rule=self.rule, cattle_index=self.cattle_index)


_VALID = ValidationResult(is_valid=True)


def is_blank(value: str) -> bool:
    return not value.strip()


def is_number(value: str) -> bool:
    """
    Check that text is a plain decimal number.
    
    Surrounding whitespace is ignored. Empty text, NaN, infinities, hex
    literals and locale-formatted numbers ("1,000") are rejected.
    """
    text = value.strip()
    if not DECIMAL_PATTERN.fullmatch(text):
        return False
    return math.isfinite(float(text))


def iter_violations(application: Application) -> Iterator[ValidationResult]:
    """
    Yield every failed rule, in checking order.
    
    Args:
        application: Snapshot to check
        
    Yields:
        ValidationResult: One failing result per violated rule
    """
    applicant = application.applicant
    if is_blank(applicant.name):
        yield ValidationResult.invalid(ValidationRule.APPLICANT_NAME)
    if not AADHAR_PATTERN.fullmatch(applicant.aadhar_number):
        yield ValidationResult.invalid(ValidationRule.AADHAR_NUMBER)
    if not PHONE_PATTERN.fullmatch(applicant.phone):
        yield ValidationResult.invalid(ValidationRule.PHONE)
    
    if not is_number(application.farm.land_size):
        yield ValidationResult.invalid(ValidationRule.LAND_SIZE)
    
    for index, entry in enumerate(application.cattle):
        if is_blank(entry.breed):
            yield ValidationResult.invalid(ValidationRule.CATTLE_BREED, index)
        if not is_number(entry.quantity):
            yield ValidationResult.invalid(ValidationRule.CATTLE_QUANTITY, index)
        if entry.insurance_status and is_blank(entry.insurance_details):
            yield ValidationResult.invalid(ValidationRule.CATTLE_INSURANCE_DETAILS, index)
    
    if not is_number(application.loan.amount):
        yield ValidationResult.invalid(ValidationRule.LOAN_AMOUNT)
    
    banking = application.banking
    if not ACCOUNT_NUMBER_PATTERN.fullmatch(banking.account_number):
        yield ValidationResult.invalid(ValidationRule.ACCOUNT_NUMBER)
    if not IFSC_PATTERN.fullmatch(banking.ifsc_code):
        yield ValidationResult.invalid(ValidationRule.IFSC_CODE)


def validate(application: Application) -> ValidationResult:
    """
    Check an application and report the first rule it breaks.
    
    Args:
        application: Snapshot to check
        
    Returns:
        ValidationResult: ``ValidationResult.valid()`` or the first failure
    """
    return next(iter_violations(application), _VALID)
