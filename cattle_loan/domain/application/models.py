"""
Value objects for a cattle loan application.

Every entity is an immutable dataclass; changes are made by building a new
value with ``dataclasses.replace``. Each field carries its wire name (the
camelCase key used in the stored record) in the field metadata.
"""

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Type, TypeVar

S = TypeVar('S', bound='Section')


class CattleType(str, Enum):
    """Kinds of livestock that can be listed on an application."""
    
    UNSET = ""
    COW = "Cow"
    BUFFALO = "Buffalo"
    GOAT = "Goat"
    SHEEP = "Sheep"
    OTHER = "Other"


class OwnershipType(str, Enum):
    """How the applicant holds the farm land."""
    
    UNSET = ""
    OWNED = "Owned"
    RENTED = "Rented"


class LoanPurpose(str, Enum):
    """What the loan amount will be used for."""
    
    UNSET = ""
    PURCHASE = "Purchase"
    FEED = "Feed"
    EQUIPMENT = "Equipment"
    MEDICAL = "Medical"
    INFRASTRUCTURE = "Infrastructure"
    OTHER = "Other"


def _wire(name: str, default: Any = "") -> Any:
    """Declare a dataclass field stored under a different wire name."""
    return field(default=default, metadata={"wire": name})


class Section:
    """Mixin giving a form section its wire-format conversion and field lookup."""
    
    @classmethod
    def wire_name(cls, f: dataclasses.Field) -> str:
        return f.metadata.get("wire", f.name)
    
    @classmethod
    def lookup(cls, name: str) -> Optional[dataclasses.Field]:
        """
        Find a field by its wire name or its attribute name.
        
        Args:
            name: ``fatherName`` or ``father_name``
            
        Returns:
            Optional[dataclasses.Field]: The field, or None if unknown
        """
        for f in dataclasses.fields(cls):
            if name == f.name or name == cls.wire_name(f):
                return f
        return None
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert the section to its wire dictionary."""
        result = {}
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            if isinstance(value, Enum):
                value = value.value
            result[self.wire_name(f)] = value
        return result
    
    @classmethod
    def from_dict(cls: Type[S], data: Optional[Dict[str, Any]]) -> S:
        """Create a section from its wire dictionary; missing keys keep defaults."""
        data = data or {}
        kwargs = {}
        for f in dataclasses.fields(cls):
            key = cls.wire_name(f)
            if key not in data:
                continue
            value = data[key]
            if isinstance(f.type, type) and issubclass(f.type, Enum):
                value = f.type(value)
            elif f.type is bool:
                value = bool(value)
            kwargs[f.name] = value
        return cls(**kwargs)


@dataclass(frozen=True)
class Applicant(Section):
    """Identity and address of the person applying."""
    
    name: str = ""
    father_name: str = _wire("fatherName")
    aadhar_number: str = _wire("aadharNumber")
    phone: str = ""
    village: str = ""
    district: str = ""
    state: str = ""
    pincode: str = ""


@dataclass(frozen=True)
class Farm(Section):
    """Facts about the applicant's farm."""
    
    land_size: str = _wire("landSize")
    ownership_type: OwnershipType = _wire("ownershipType", OwnershipType.UNSET)
    existing_cattle: str = _wire("existingCattle")


@dataclass(frozen=True)
class CattleEntry(Section):
    """One livestock line on the application."""
    
    cattle_type: CattleType = _wire("cattleType", CattleType.UNSET)
    breed: str = ""
    quantity: str = ""
    age: str = ""
    estimated_value: str = _wire("estimatedValue")
    insurance_status: bool = _wire("insuranceStatus", False)
    insurance_details: str = _wire("insuranceDetails")
    
    @classmethod
    def new(cls, cattle_type: CattleType = CattleType.UNSET) -> 'CattleEntry':
        """Create a blank entry, uninsured, with the given type pre-selected."""
        return cls(cattle_type=CattleType(cattle_type))


@dataclass(frozen=True)
class Loan(Section):
    """Requested loan terms."""
    
    amount: str = ""
    purpose: LoanPurpose = LoanPurpose.UNSET
    term: str = "12"


@dataclass(frozen=True)
class Banking(Section):
    """Account the loan is disbursed to."""
    
    account_number: str = _wire("accountNumber")
    bank_name: str = _wire("bankName")
    branch: str = ""
    ifsc_code: str = _wire("ifscCode")


SECTIONS: Dict[str, Type[Section]] = {
    "applicant": Applicant,
    "farm": Farm,
    "loan": Loan,
    "banking": Banking,
}


@dataclass(frozen=True)
class Application:
    """The complete loan application submitted as one unit."""
    
    applicant: Applicant = field(default_factory=Applicant)
    farm: Farm = field(default_factory=Farm)
    cattle: Tuple[CattleEntry, ...] = field(default_factory=lambda: (CattleEntry.new(),))
    loan: Loan = field(default_factory=Loan)
    banking: Banking = field(default_factory=Banking)
    
    @classmethod
    def empty(cls, default_loan_term: str = "12") -> 'Application':
        """Create the blank application a fresh form starts from."""
        return cls(loan=Loan(term=default_loan_term))
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert the application to its nested wire dictionary."""
        return {
            "applicant": self.applicant.to_dict(),
            "farm": self.farm.to_dict(),
            "cattle": [entry.to_dict() for entry in self.cattle],
            "loan": self.loan.to_dict(),
            "banking": self.banking.to_dict(),
        }
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Application':
        """Create an application from its nested wire dictionary."""
        cattle = tuple(CattleEntry.from_dict(entry) for entry in data.get("cattle") or [])
        return cls(
            applicant=Applicant.from_dict(data.get("applicant")),
            farm=Farm.from_dict(data.get("farm")),
            cattle=cattle or (CattleEntry.new(),),
            loan=Loan.from_dict(data.get("loan")),
            banking=Banking.from_dict(data.get("banking")),
        )
