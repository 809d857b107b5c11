"""Shared fixtures: small family graphs seeded into an in-memory projection."""
from __future__ import annotations

from uuid import UUID, uuid4

import pytest

from family_graph.models import (
    ChildRelationType,
    FamilyChild,
    FamilyMembership,
    Gender,
    ParentLink,
    Person,
)
from family_graph.readmodel import MemoryAncestryReader


class FamilyTree:
    """Helper for seeding persons, parent links and families."""

    def __init__(self, reader: MemoryAncestryReader) -> None:
        self.reader = reader
        self.names: dict[UUID, str] = {}

    def person(
        self,
        given_name: str,
        surname: str = "Doe",
        gender: Gender = Gender.UNKNOWN,
        **fields,
    ) -> UUID:
        person = Person(id=uuid4(), given_name=given_name, surname=surname, gender=gender, **fields)
        self.reader.save_person(person)
        self.names[person.id] = person.full_name
        return person.id

    def parents(self, child: UUID, father: UUID | None = None, mother: UUID | None = None) -> None:
        self.reader.save_parent_link(
            ParentLink(
                person_id=child,
                father_id=father,
                father_name=self.names.get(father, "") if father else "",
                mother_id=mother,
                mother_name=self.names.get(mother, "") if mother else "",
            )
        )

    def family(
        self,
        partner1: UUID | None,
        partner2: UUID | None = None,
        children: list[UUID] | None = None,
        marriage_date: str = "",
        relation: ChildRelationType = ChildRelationType.BIOLOGICAL,
    ) -> UUID:
        family = FamilyMembership(
            id=uuid4(),
            partner1_id=partner1,
            partner1_name=self.names.get(partner1, "") if partner1 else "",
            partner2_id=partner2,
            partner2_name=self.names.get(partner2, "") if partner2 else "",
            marriage_date_raw=marriage_date,
        )
        self.reader.save_family(family)
        for index, child in enumerate(children or []):
            self.reader.save_family_child(
                FamilyChild(
                    family_id=family.id,
                    person_id=child,
                    person_name=self.names.get(child, ""),
                    relationship_type=relation,
                    sequence=index + 1,
                )
            )
        return family.id

    def chain(self, length: int, prefix: str) -> list[UUID]:
        """A straight male line: chain[0] is the eldest, chain[-1] the youngest."""
        ids = [self.person(f"{prefix}{i}", gender=Gender.MALE) for i in range(length)]
        for parent, child in zip(ids, ids[1:]):
            self.parents(child, father=parent)
        return ids


@pytest.fixture
def reader() -> MemoryAncestryReader:
    return MemoryAncestryReader()


@pytest.fixture
def tree(reader) -> FamilyTree:
    return FamilyTree(reader)
