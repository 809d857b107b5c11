"""Response shapes for pedigree, descendancy, Ahnentafel and relationship queries.

Every model here is built fresh per query and discarded after serialization.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field, computed_field

from ..models import GenDate, Person


class PersonSnapshot(BaseModel):
    """Person fields copied into a query response."""

    id: UUID
    given_name: str
    surname: str
    gender: str | None = None
    birth_date: GenDate | None = None
    birth_place: str | None = None
    death_date: GenDate | None = None
    death_place: str | None = None

    @classmethod
    def snapshot_fields(cls, person: Person) -> dict:
        """Field values for any snapshot subclass, optional ones left unset when unknown."""
        return {
            "id": person.id,
            "given_name": person.given_name,
            "surname": person.surname,
            "gender": person.gender.value if person.gender else None,
            "birth_date": person.birth_date,
            "birth_place": person.birth_place or None,
            "death_date": person.death_date,
            "death_place": person.death_place or None,
        }

    @classmethod
    def from_person(cls, person: Person) -> PersonSnapshot:
        return cls(**cls.snapshot_fields(person))

    @property
    def name(self) -> str:
        return " ".join(part for part in (self.given_name, self.surname) if part)


# =============================================================================
# Pedigree
# =============================================================================


class PedigreeNode(PersonSnapshot):
    """A person in the ancestor tree with nested father and mother subtrees."""

    generation: int = 0
    father: PedigreeNode | None = None
    mother: PedigreeNode | None = None


class PedigreeResult(BaseModel):
    """Ancestor tree rooted at the subject."""

    root: PedigreeNode
    total_ancestors: int = 0
    max_generation: int = 0


# =============================================================================
# Descendancy
# =============================================================================


class SpouseInfo(BaseModel):
    """The other partner of a family the node's person belongs to."""

    id: UUID
    name: str
    marriage_date: GenDate | None = None


class DescendancyNode(PersonSnapshot):
    """A person in the descendant tree with spouses and nested children."""

    generation: int = 0
    spouses: list[SpouseInfo] = Field(default_factory=list)
    children: list[DescendancyNode] = Field(default_factory=list)


class DescendancyResult(BaseModel):
    """Descendant tree rooted at the subject."""

    root: DescendancyNode
    total_descendants: int = 0
    max_generation: int = 0


# =============================================================================
# Ahnentafel
# =============================================================================


class AhnentafelEntry(PersonSnapshot):
    """One numbered ancestor: subject is 1, father of N is 2N, mother 2N+1."""

    number: int
    generation: int


class AhnentafelResult(BaseModel):
    """Flat Ahnentafel list, ascending by number, with gaps for unknowns."""

    entries: list[AhnentafelEntry] = Field(default_factory=list)
    total_entries: int = 0
    max_generation: int = 0

    def by_number(self) -> dict[int, AhnentafelEntry]:
        return {entry.number: entry for entry in self.entries}


# =============================================================================
# Relationship
# =============================================================================


class KinshipKind(str, Enum):
    """Classification of a relationship path, from B's point of view relative to A."""
    SELF = "self"
    ANCESTOR = "ancestor"
    DESCENDANT = "descendant"
    SIBLING = "sibling"
    UNCLE_AUNT = "uncle_aunt"
    NEPHEW_NIECE = "nephew_niece"
    COUSIN = "cousin"


class RelationshipPath(BaseModel):
    """One route between A and B through a specific common ancestor."""

    name: str
    kind: KinshipKind
    path_from_a: list[UUID] = Field(default_factory=list)
    path_from_b: list[UUID] = Field(default_factory=list)
    common_ancestor: PersonSnapshot | None = None
    generation_distance_a: int = 0
    generation_distance_b: int = 0

    @computed_field
    @property
    def degree(self) -> int:
        """Number of parent-link hops along the whole path."""
        return self.generation_distance_a + self.generation_distance_b

    @computed_field
    @property
    def coefficient(self) -> float:
        """Coefficient of relationship contributed by this path.

        Full siblings sum two paths of 0.25 = 0.5; first cousins via one
        ancestor = 0.0625.
        """
        if self.degree == 0:
            return 1.0
        return 0.5 ** self.degree


class RelationshipResult(BaseModel):
    """Complete relationship analysis between two persons."""

    person_a: PersonSnapshot
    person_b: PersonSnapshot
    paths: list[RelationshipPath] = Field(default_factory=list)
    is_related: bool = False
    summary: str = "not related"


@dataclass
class AncestorInfo:
    """An ancestor reached from a start person.

    `via` is the id of the person whose parent link led here (the start
    person for generation 1), so paths are rebuilt by following `via`.
    """
    person: Person
    generation: int
    via: UUID


PedigreeNode.model_rebuild()
DescendancyNode.model_rebuild()
