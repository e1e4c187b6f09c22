"""
Field registry for the loan application form.

``FormState`` owns the one live ``Application`` value. Every mutation
builds a new snapshot by copying only the section or cattle entry that
changes, so snapshots handed out earlier stay valid.
"""

import dataclasses
from enum import Enum
from typing import Any, Optional, Tuple

from cattle_loan.config.logging_config import get_logger
from cattle_loan.domain.application.models import (
    SECTIONS,
    Application,
    CattleEntry,
    CattleType,
    Section,
)
from cattle_loan.utils.error_handling import CattleIndexError, FieldPathError

logger = get_logger(__name__)

# Fields normalized on input, keyed by (section, attribute)
_UPPERCASE_FIELDS = {("banking", "ifsc_code")}

# Input is cut to these lengths as it is typed
_MAX_LENGTHS = {
    ("applicant", "aadhar_number"): 12,
    ("applicant", "phone"): 10,
    ("applicant", "pincode"): 6,
}


def _coerce(section: str, f: dataclasses.Field, value: Any) -> Any:
    """Convert an input value to the type the field holds."""
    if isinstance(f.type, type) and issubclass(f.type, Enum):
        try:
            return f.type(value)
        except ValueError:
            choices = [member.value for member in f.type]
            raise FieldPathError(
                f"{value!r} is not a valid choice for {section}.{f.name}",
                details={"choices": choices}
            ) from None
    if f.type is bool:
        if not isinstance(value, bool):
            raise FieldPathError(
                f"{section}.{f.name} expects True or False, got {type(value).__name__}"
            )
        return value
    if not isinstance(value, str):
        raise FieldPathError(
            f"{section}.{f.name} expects text, got {type(value).__name__}"
        )
    if (section, f.name) in _UPPERCASE_FIELDS:
        value = value.upper()
    max_length = _MAX_LENGTHS.get((section, f.name))
    if max_length is not None:
        value = value[:max_length]
    return value


def _resolve(section_cls: type, section: str, name: str) -> dataclasses.Field:
    f = section_cls.lookup(name)
    if f is None:
        raise FieldPathError(f"Unknown field '{name}' in section '{section}'")
    return f


class FormState:
    """
    Holds the current application and applies form edits to it.
    
    The form always holds at least one cattle entry. Edits are not
    validated here; ``validate`` is run on a snapshot at submission time.
    """
    
    def __init__(self, default_loan_term: str = "12", new_cattle_type: Any = CattleType.UNSET):
        """
        Initialize the form with blank defaults.
        
        Args:
            default_loan_term: Loan term pre-filled on a fresh or reset form
            new_cattle_type: Cattle type pre-selected on entries added later
        """
        self.default_loan_term = default_loan_term
        self.new_cattle_type = CattleType(new_cattle_type)
        self._application = Application.empty(default_loan_term)
    
    @classmethod
    def from_settings(cls, form_settings: Optional[Any] = None) -> 'FormState':
        """Create a form using the configured defaults."""
        if form_settings is None:
            from cattle_loan.config import settings
            form_settings = settings.form
        return cls(
            default_loan_term=form_settings.default_loan_term,
            new_cattle_type=form_settings.new_cattle_type,
        )
    
    @property
    def application(self) -> Application:
        """The current application snapshot."""
        return self._application
    
    @property
    def cattle_count(self) -> int:
        return len(self._application.cattle)
    
    def set_field(self, path: str, value: Any) -> Application:
        """
        Replace one field of the applicant, farm, loan or banking section.
        
        Args:
            path: Dotted path such as ``applicant.aadharNumber``
            value: New field value
            
        Returns:
            Application: The new snapshot
            
        Raises:
            FieldPathError: If the path or value does not fit the form
        """
        section, _, name = path.partition(".")
        section_cls = SECTIONS.get(section)
        if section_cls is None or not name:
            raise FieldPathError(f"Unknown field path '{path}'")
        
        f = _resolve(section_cls, section, name)
        current: Section = getattr(self._application, section)
        updated = dataclasses.replace(current, **{f.name: _coerce(section, f, value)})
        self._application = dataclasses.replace(self._application, **{section: updated})
        
        logger.debug(f"Set {section}.{f.name}")
        return self._application
    
    def add_cattle_entry(self) -> Application:
        """
        Append a blank cattle entry to the end of the sequence.
        
        Returns:
            Application: The new snapshot
        """
        cattle = self._application.cattle + (CattleEntry.new(self.new_cattle_type),)
        self._application = dataclasses.replace(self._application, cattle=cattle)
        logger.debug(f"Added cattle entry #{len(cattle)}")
        return self._application
    
    def remove_cattle_entry(self, index: int) -> Application:
        """
        Remove the cattle entry at ``index`` unless it is the only one.
        
        Later entries shift down by one. With a single entry held this is
        a no-op whatever the index.
        
        Args:
            index: 0-based entry index
            
        Returns:
            Application: The new (or unchanged) snapshot
            
        Raises:
            CattleIndexError: If more than one entry is held and the index is out of range
        """
        cattle = self._application.cattle
        if len(cattle) <= 1:
            logger.debug("Ignoring removal of the only cattle entry")
            return self._application
        
        self._check_index(index)
        self._application = dataclasses.replace(
            self._application,
            cattle=cattle[:index] + cattle[index + 1:]
        )
        logger.debug(f"Removed cattle entry #{index + 1}")
        return self._application
    
    def set_cattle_field(self, index: int, field_name: str, value: Any) -> Application:
        """
        Replace one field of the cattle entry at ``index``.
        
        Args:
            index: 0-based entry index
            field_name: ``insuranceStatus`` or ``insurance_status`` style name
            value: New field value
            
        Returns:
            Application: The new snapshot
            
        Raises:
            CattleIndexError: If the index is out of range
            FieldPathError: If the field or value does not fit the entry
        """
        self._check_index(index)
        f = _resolve(CattleEntry, "cattle", field_name)
        
        cattle: Tuple[CattleEntry, ...] = self._application.cattle
        entry = dataclasses.replace(cattle[index], **{f.name: _coerce("cattle", f, value)})
        self._application = dataclasses.replace(
            self._application,
            cattle=cattle[:index] + (entry,) + cattle[index + 1:]
        )
        
        logger.debug(f"Set cattle #{index + 1} {f.name}")
        return self._application
    
    def reset(self) -> Application:
        """
        Discard all entered data and restore the blank defaults.
        
        Returns:
            Application: The new snapshot
        """
        self._application = Application.empty(self.default_loan_term)
        logger.debug("Form reset to defaults")
        return self._application
    
    def _check_index(self, index: int) -> None:
        size = len(self._application.cattle)
        if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index < size:
            raise CattleIndexError(index, size)
