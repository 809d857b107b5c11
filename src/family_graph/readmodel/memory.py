"""Dictionary-backed projection store, used for tests and demo data."""
from __future__ import annotations

from typing import TYPE_CHECKING

from .store import AncestryReader

if TYPE_CHECKING:
    from uuid import UUID

    from ..models import FamilyChild, FamilyMembership, ParentLink, Person


class MemoryAncestryReader(AncestryReader):
    """In-memory projection with save/delete operations for seeding.

    Example:
        >>> reader = MemoryAncestryReader()
        >>> reader.save_person(Person(id=child_id, given_name="Ada"))
        >>> reader.save_parent_link(ParentLink(person_id=child_id, father_id=father_id))
        >>> await reader.get_parent_link(child_id)
    """

    def __init__(self) -> None:
        self._persons: dict[UUID, Person] = {}
        self._parent_links: dict[UUID, ParentLink] = {}
        self._families: dict[UUID, FamilyMembership] = {}
        self._children: dict[UUID, list[FamilyChild]] = {}

    # --------------------------- Writes ---------------------------

    def save_person(self, person: Person) -> Person:
        self._persons[person.id] = person
        return person

    def delete_person(self, person_id: UUID) -> bool:
        self._parent_links.pop(person_id, None)
        return self._persons.pop(person_id, None) is not None

    def save_parent_link(self, link: ParentLink) -> ParentLink:
        self._parent_links[link.person_id] = link
        return link

    def save_family(self, family: FamilyMembership) -> FamilyMembership:
        self._families[family.id] = family
        self._children.setdefault(family.id, [])
        return family

    def save_family_child(self, child: FamilyChild) -> FamilyChild:
        children = [c for c in self._children.get(child.family_id, []) if c.person_id != child.person_id]
        children.append(child)
        self._children[child.family_id] = children
        return child

    # --------------------------- Reads ----------------------------

    async def get_person(self, person_id: UUID) -> Person | None:
        return self._persons.get(person_id)

    async def get_parent_link(self, person_id: UUID) -> ParentLink | None:
        return self._parent_links.get(person_id)

    async def get_families_for_person(self, person_id: UUID) -> list[FamilyMembership]:
        return [f for f in self._families.values() if f.has_partner(person_id)]

    async def get_family_children(self, family_id: UUID) -> list[FamilyChild]:
        children = self._children.get(family_id, [])
        # Unsequenced children keep insertion order after the sequenced ones
        return sorted(children, key=lambda c: (c.sequence is None, c.sequence or 0))
