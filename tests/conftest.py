# tests/conftest.py
import pytest

from cattle_loan.domain.application.form_state import FormState
from cattle_loan.events.event_interface import EventEmitter


def fill_valid_form(form: FormState) -> FormState:
    """Fill a form with the smallest set of values that passes validation"""
    form.set_field("applicant.name", "Ravi")
    form.set_field("applicant.aadharNumber", "111122223333")
    form.set_field("applicant.phone", "9998887777")
    form.set_field("farm.landSize", "5")
    form.set_cattle_field(0, "breed", "Gir")
    form.set_cattle_field(0, "quantity", "2")
    form.set_cattle_field(0, "insuranceStatus", False)
    form.set_field("loan.amount", "50000")
    form.set_field("banking.accountNumber", "123456789")
    form.set_field("banking.ifscCode", "SBIN0001234")
    return form


@pytest.fixture
def form():
    """Create a blank form"""
    return FormState()


@pytest.fixture
def valid_form(form):
    """Create a form that passes validation"""
    return fill_valid_form(form)


@pytest.fixture
def emitter():
    """Create an event emitter isolated from the global event bus"""
    return EventEmitter()
