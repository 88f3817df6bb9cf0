# ============================================================================
# src/vet_ingestion/core/context/records.py
# ============================================================================
"""
Extracted record types

- OwnerCandidate: identity recovered from the document header
- Visit: one dated span of the clinical narrative
- PetRecord: one species-code block with its visits
- ParsedDocument: everything recovered from one document

to_dict() emits the camelCase field names the persistence layer consumes.
Absent optional fields are left out of the dict.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .enums import OwnerRole


def _drop_none(data: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None}


def _add_unique(values: List[str], new_values) -> None:
    for value in new_values:
        if value and value not in values:
            values.append(value)


@dataclass
class OwnerCandidate:
    full_name: Optional[str] = None
    tax_code: Optional[str] = None
    # Ordered sets: insertion order, no duplicates
    emails: List[str] = field(default_factory=list)
    phones: List[str] = field(default_factory=list)
    address: Optional[str] = None
    role: OwnerRole = OwnerRole.SECONDARY
    start_date: Optional[str] = None
    end_date: Optional[str] = None

    def absorb(self, other: "OwnerCandidate") -> None:
        """
        Fold a later mention of the same person into this candidate.

        Emails and phones are unioned; scalar fields take the other
        side's value whenever it has one.
        """
        _add_unique(self.emails, other.emails)
        _add_unique(self.phones, other.phones)
        if other.full_name:
            self.full_name = other.full_name
        if other.tax_code:
            self.tax_code = other.tax_code
        if other.address:
            self.address = other.address
        if other.start_date:
            self.start_date = other.start_date
        if other.end_date:
            self.end_date = other.end_date

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            "fullName": self.full_name,
            "taxCode": self.tax_code,
            "emails": list(self.emails),
            "phones": list(self.phones),
            "address": self.address,
            "role": self.role.value,
            "startDate": self.start_date,
            "endDate": self.end_date,
        })


@dataclass
class Visit:
    visited_at: Optional[str] = None
    description: str = ""
    exams_text: Optional[str] = None
    prescriptions_text: Optional[str] = None
    # Verbatim lines of the visit span, blank lines included
    raw_text: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            "visitedAt": self.visited_at,
            "description": self.description,
            "examsText": self.exams_text,
            "prescriptionsText": self.prescriptions_text,
            "rawText": self.raw_text,
        })


@dataclass
class PetRecord:
    species: str
    name: Optional[str] = None
    breed: Optional[str] = None
    sex: Optional[str] = None  # "M" or "F"
    dob: Optional[str] = None
    color: Optional[str] = None
    sterilized: Optional[bool] = None  # None = not stated
    microchip: Optional[str] = None
    visits: List[Visit] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data = _drop_none({
            "name": self.name,
            "species": self.species,
            "breed": self.breed,
            "sex": self.sex,
            "dob": self.dob,
            "color": self.color,
            "sterilized": self.sterilized,
            "microchip": self.microchip,
        })
        data["visits"] = [visit.to_dict() for visit in self.visits]
        return data


@dataclass
class ParsedDocument:
    """
    Result of one extraction call.

    Owners are not tied to individual pets: every owner found in the
    header applies to every pet of the same document.
    """
    owners: List[OwnerCandidate] = field(default_factory=list)
    pets: List[PetRecord] = field(default_factory=list)
    raw: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "owners": [owner.to_dict() for owner in self.owners],
            "pets": [pet.to_dict() for pet in self.pets],
        }
        if self.raw is not None:
            data["raw"] = self.raw
        return data
