# tests/test_validator.py
import dataclasses

import pytest
from conftest import fill_valid_form

from cattle_loan.domain.application.form_state import FormState
from cattle_loan.domain.application.validator import (
    ValidationResult,
    ValidationRule,
    is_number,
    iter_violations,
    validate,
)
from cattle_loan.utils.error_handling import ValidationError


def test_valid_application(valid_form):
    """Test the complete scenario application passes every rule"""
    result = validate(valid_form.application)
    
    assert result.is_valid
    assert result == ValidationResult.valid()
    assert result.reason is None
    assert bool(result) is True
    assert list(iter_violations(valid_form.application)) == []


def test_blank_form_fails_on_name(form):
    """Test that the first rule wins when every rule is broken"""
    result = validate(form.application)
    
    assert not result.is_valid
    assert result.rule is ValidationRule.APPLICANT_NAME
    assert result.reason == "Please enter your name"


def test_blank_form_lists_all_violations_in_order(form):
    """Test the full ordered list of failures for a blank form"""
    rules = [result.rule for result in iter_violations(form.application)]
    
    # Insurance is off, so the insurance details rule does not apply
    assert rules == [
        ValidationRule.APPLICANT_NAME,
        ValidationRule.AADHAR_NUMBER,
        ValidationRule.PHONE,
        ValidationRule.LAND_SIZE,
        ValidationRule.CATTLE_BREED,
        ValidationRule.CATTLE_QUANTITY,
        ValidationRule.LOAN_AMOUNT,
        ValidationRule.ACCOUNT_NUMBER,
        ValidationRule.IFSC_CODE,
    ]


def test_whitespace_name_fails(valid_form):
    """Test that the name is trimmed before the presence check"""
    valid_form.set_field("applicant.name", "   ")
    assert validate(valid_form.application).rule is ValidationRule.APPLICANT_NAME


def test_short_aadhar_fails(valid_form):
    """Test a 5-digit Aadhar number"""
    valid_form.set_field("applicant.aadharNumber", "12345")
    result = validate(valid_form.application)
    
    assert result.rule is ValidationRule.AADHAR_NUMBER
    assert "Aadhar" in result.reason


@pytest.mark.parametrize("aadhar,phone,expected", [
    ("123456789012", "9876543210", None),
    ("12345678901", "9876543210", ValidationRule.AADHAR_NUMBER),
    ("12345678901a", "9876543210", ValidationRule.AADHAR_NUMBER),
    (" 123456789012", "9876543210", ValidationRule.AADHAR_NUMBER),
    ("１２３４５６７８９０１２", "9876543210", ValidationRule.AADHAR_NUMBER),
    ("123456789012", "987654321", ValidationRule.PHONE),
    ("123456789012", "+919876543210", ValidationRule.PHONE),
    ("123456789012", "98765 43210", ValidationRule.PHONE),
])
def test_identity_formats(valid_form, aadhar, phone, expected):
    """Test Aadhar and phone digit-count rules"""
    valid_form.set_field("applicant.aadharNumber", aadhar)
    valid_form.set_field("applicant.phone", phone)
    assert validate(valid_form.application).rule is expected


@pytest.mark.parametrize("land_size,ok", [
    ("5", True),
    ("2.5", True),
    (" 3 ", True),
    ("0", True),
    ("1e2", True),
    ("", False),
    ("   ", False),
    ("five", False),
    ("NaN", False),
    ("inf", False),
    ("1,000", False),
    ("0x10", False),
    ("1e999", False),
])
def test_land_size_numeric(valid_form, land_size, ok):
    """Test locale-independent decimal parsing of land size"""
    valid_form.set_field("farm.landSize", land_size)
    result = validate(valid_form.application)
    assert result.is_valid is ok
    if not ok:
        assert result.reason == "Please enter valid land size"


def test_is_number():
    """Test the numeric parsing helper directly"""
    assert is_number("-4")
    assert is_number(".5")
    assert is_number("7.")
    assert not is_number(".")
    assert not is_number("-")
    assert not is_number("1 000")


def test_cattle_breed_required(valid_form):
    """Test the breed rule on the first entry"""
    valid_form.set_cattle_field(0, "breed", "  ")
    result = validate(valid_form.application)
    
    assert result.rule is ValidationRule.CATTLE_BREED
    assert result.cattle_index == 0
    assert result.reason == "Please enter breed for cattle #1"


def test_cattle_quantity_numeric(valid_form):
    """Test the quantity rule"""
    valid_form.set_cattle_field(0, "quantity", "two")
    result = validate(valid_form.application)
    
    assert result.rule is ValidationRule.CATTLE_QUANTITY
    assert result.reason == "Please enter valid quantity for cattle #1"


def test_insurance_details_required_when_insured(valid_form):
    """Test the conditional insurance details rule"""
    valid_form.set_cattle_field(0, "insuranceStatus", True)
    valid_form.set_cattle_field(0, "insuranceDetails", "")
    result = validate(valid_form.application)
    
    assert result.rule is ValidationRule.CATTLE_INSURANCE_DETAILS
    assert result.reason == "Please enter insurance details for cattle #1"
    
    valid_form.set_cattle_field(0, "insuranceDetails", "Policy 991")
    assert validate(valid_form.application).is_valid


def test_insurance_details_ignored_when_uninsured(valid_form):
    """Test that details are optional without insurance"""
    valid_form.set_cattle_field(0, "insuranceDetails", "")
    assert validate(valid_form.application).is_valid


def test_optional_cattle_fields_not_checked(valid_form):
    """Test that age, value and type are free"""
    valid_form.set_cattle_field(0, "age", "old")
    valid_form.set_cattle_field(0, "estimatedValue", "")
    assert validate(valid_form.application).is_valid


def test_cattle_entries_checked_in_order(valid_form):
    """Test that all rules for entry 1 run before entry 2"""
    valid_form.add_cattle_entry()
    valid_form.add_cattle_entry()
    valid_form.set_cattle_field(1, "breed", "Sahiwal")
    valid_form.set_cattle_field(1, "quantity", "1")
    valid_form.set_cattle_field(1, "insuranceStatus", True)
    # Entry 3 is blank, so entry 2's missing details must be reported first
    result = validate(valid_form.application)
    
    assert result.rule is ValidationRule.CATTLE_INSURANCE_DETAILS
    assert result.cattle_index == 1
    assert result.reason == "Please enter insurance details for cattle #2"
    
    valid_form.set_cattle_field(1, "insuranceDetails", "Policy 7")
    result = validate(valid_form.application)
    assert result.rule is ValidationRule.CATTLE_BREED
    assert result.reason == "Please enter breed for cattle #3"


def test_cattle_rules_before_loan_rules(valid_form):
    """Test ordering between cattle and loan rules"""
    valid_form.set_cattle_field(0, "quantity", "")
    valid_form.set_field("loan.amount", "")
    assert validate(valid_form.application).rule is ValidationRule.CATTLE_QUANTITY


def test_loan_amount_required(valid_form):
    """Test the loan amount rule"""
    valid_form.set_field("loan.amount", "50,000")
    result = validate(valid_form.application)
    
    assert result.rule is ValidationRule.LOAN_AMOUNT
    assert result.reason == "Please enter a valid loan amount"


@pytest.mark.parametrize("account_number,ok", [
    ("123456789", True),
    ("123456789012345678", True),
    ("12345678", False),
    ("1234567890123456789", False),
    ("12345678a", False),
    ("", False),
])
def test_account_number_length(valid_form, account_number, ok):
    """Test the 9 to 18 digit account number rule"""
    valid_form.set_field("banking.accountNumber", account_number)
    result = validate(valid_form.application)
    
    assert result.is_valid is ok
    if not ok:
        assert result.rule is ValidationRule.ACCOUNT_NUMBER
        assert result.reason == "Please enter valid account number"


def test_lowercase_ifsc_passes_after_normalization(valid_form):
    """Test that IFSC input is upper-cased before validation"""
    valid_form.set_field("banking.ifscCode", "hdfc0001234")
    
    assert valid_form.application.banking.ifsc_code == "HDFC0001234"
    assert validate(valid_form.application).is_valid


@pytest.mark.parametrize("ifsc", [
    "HDFC1001234",
    "HDF00001234",
    "HDFC000123",
    "HDFC00012345",
    "HDFC000123-",
    "",
])
def test_invalid_ifsc(valid_form, ifsc):
    """Test IFSC format violations"""
    valid_form.set_field("banking.ifscCode", ifsc)
    result = validate(valid_form.application)
    
    assert result.rule is ValidationRule.IFSC_CODE
    assert result.reason == "Please enter valid IFSC code"


def test_validate_does_not_touch_form(valid_form):
    """Test that validation has no side effects on the snapshot"""
    valid_form.set_field("applicant.phone", "123")
    snapshot = valid_form.application
    
    validate(snapshot)
    
    assert valid_form.application is snapshot


def test_to_error():
    """Test converting a failing result to an exception"""
    result = ValidationResult.invalid(ValidationRule.CATTLE_BREED, 2)
    error = result.to_error()
    
    assert isinstance(error, ValidationError)
    assert error.reason == "Please enter breed for cattle #3"
    assert error.cattle_index == 2
    assert error.details["rule"] == "CATTLE_BREED"
    
    with pytest.raises(ValueError):
        ValidationResult.valid().to_error()


def test_overlong_identity_numbers_fail():
    """Test the digit-count rules on values that bypassed input truncation"""
    application = fill_valid_form(FormState()).application
    too_long_aadhar = dataclasses.replace(
        application,
        applicant=dataclasses.replace(application.applicant, aadhar_number="1234567890123")
    )
    too_long_phone = dataclasses.replace(
        application,
        applicant=dataclasses.replace(application.applicant, phone="98765432101")
    )
    
    assert validate(too_long_aadhar).rule is ValidationRule.AADHAR_NUMBER
    assert validate(too_long_phone).rule is ValidationRule.PHONE
