"""Read-model records owned by the projection store.

The engine never mutates these; they are the already-resolved inputs to
pedigree, descendancy and relationship queries.
"""
from __future__ import annotations

from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field

from .dates import GenDate, parse_gen_date


class Gender(str, Enum):
    """Recorded gender of a person."""
    MALE = "male"
    FEMALE = "female"
    UNKNOWN = "unknown"


class RelationType(str, Enum):
    """Relationship between the partners of a family."""
    MARRIAGE = "marriage"
    PARTNERSHIP = "partnership"
    UNKNOWN = "unknown"


class ChildRelationType(str, Enum):
    """Relationship between a child and the family it belongs to."""
    BIOLOGICAL = "biological"
    ADOPTED = "adopted"
    FOSTER = "foster"


class Person(BaseModel):
    """A person as stored in the projection."""

    id: UUID
    given_name: str = ""
    surname: str = ""
    gender: Gender = Gender.UNKNOWN
    birth_date_raw: str = ""
    birth_place: str = ""
    death_date_raw: str = ""
    death_place: str = ""

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.given_name, self.surname) if part)

    @property
    def birth_date(self) -> GenDate | None:
        return parse_gen_date(self.birth_date_raw) if self.birth_date_raw else None

    @property
    def death_date(self) -> GenDate | None:
        return parse_gen_date(self.death_date_raw) if self.death_date_raw else None


class ParentLink(BaseModel):
    """Father and mother of one person, with denormalized names.

    At most one link exists per person. Links are not checked for
    acyclicity; traversals must guard against revisiting a person.
    """

    person_id: UUID
    father_id: UUID | None = None
    father_name: str = ""
    mother_id: UUID | None = None
    mother_name: str = ""

    def parent_ids(self) -> list[UUID]:
        """Known parents, father first."""
        return [pid for pid in (self.father_id, self.mother_id) if pid is not None]


class FamilyMembership(BaseModel):
    """A family unit: up to two partners plus their children."""

    id: UUID
    partner1_id: UUID | None = None
    partner1_name: str = ""
    partner2_id: UUID | None = None
    partner2_name: str = ""
    relationship_type: RelationType = RelationType.UNKNOWN
    marriage_date_raw: str = ""
    marriage_place: str = ""

    @property
    def marriage_date(self) -> GenDate | None:
        return parse_gen_date(self.marriage_date_raw) if self.marriage_date_raw else None

    def has_partner(self, person_id: UUID) -> bool:
        return person_id in (self.partner1_id, self.partner2_id)

    def other_partner(self, person_id: UUID) -> tuple[UUID, str] | None:
        """Return (id, name) of the partner who is not person_id, if recorded."""
        if self.partner1_id is not None and self.partner1_id != person_id:
            return self.partner1_id, self.partner1_name
        if self.partner2_id is not None and self.partner2_id != person_id:
            return self.partner2_id, self.partner2_name
        return None


class FamilyChild(BaseModel):
    """Membership of a child in a family."""

    family_id: UUID
    person_id: UUID
    person_name: str = ""
    relationship_type: ChildRelationType = ChildRelationType.BIOLOGICAL
    sequence: int | None = Field(default=None, description="Birth order within the family")
