"""Read-only collaborator contract consumed by the graph engine."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from uuid import UUID

    from ..models import FamilyChild, FamilyMembership, ParentLink, Person


class AncestryReader(ABC):
    """Abstract base class for the projection store the engine reads from.

    Every method is a coroutine so that each lookup is a point where the
    caller's cancellation or deadline can interrupt a traversal.
    Implementations must be safe for concurrent reads.
    """

    @abstractmethod
    async def get_person(self, person_id: UUID) -> Person | None:
        """Get a person by ID, or None if absent."""
        ...

    @abstractmethod
    async def get_parent_link(self, person_id: UUID) -> ParentLink | None:
        """Get the father/mother link for a person, or None if unrecorded."""
        ...

    @abstractmethod
    async def get_families_for_person(self, person_id: UUID) -> list[FamilyMembership]:
        """Get the families in which the person is a partner."""
        ...

    @abstractmethod
    async def get_family_children(self, family_id: UUID) -> list[FamilyChild]:
        """Get the children of a family, in birth order where known."""
        ...

    def close(self) -> None:
        """Release any held resources."""
