"""Descendancy (descendant tree) queries, built from family membership."""
from __future__ import annotations

from typing import TYPE_CHECKING

from ..config import CONFIG, EngineConfig
from ..logging import get_logger
from .errors import NotFoundError
from .limits import checkpoint, clamp_generations
from .models import DescendancyNode, DescendancyResult, PersonSnapshot, SpouseInfo

if TYPE_CHECKING:
    from uuid import UUID

    from ..models import FamilyMembership
    from ..readmodel import AncestryReader

logger = get_logger(__name__)


class DescendancyBuilder:
    """Builds bounded descendant trees: spouses and children per person.

    Children are found through the families in which a person is a
    partner, not through parent links. A person who is a child in several
    of those families appears once under each. A person is only refused
    when it already appears above itself in the same branch.
    """

    def __init__(self, reader: AncestryReader, config: EngineConfig | None = None) -> None:
        self.reader = reader
        self.config = config or CONFIG

    async def get_descendancy(
        self,
        person_id: UUID,
        max_generations: int | None = None,
    ) -> DescendancyResult:
        """Get the descendant tree for a person.

        Args:
            person_id: Subject of the tree
            max_generations: Depth to traverse; <= 0 means the default (4),
                values above the cap (10) are clamped

        Raises:
            NotFoundError: if the subject does not exist
        """
        max_gen = clamp_generations(
            max_generations,
            self.config.descendancy_generations,
            self.config.generation_cap,
        )

        person = await self.reader.get_person(person_id)
        if person is None:
            logger.info("descendancy_subject_missing", person_id=str(person_id))
            raise NotFoundError(person_id)

        root = DescendancyNode(**PersonSnapshot.snapshot_fields(person), generation=0)

        # (node to fill, ids on the branch from the subject down to that node)
        stack: list[tuple[DescendancyNode, frozenset[UUID]]] = [(root, frozenset({person_id}))]

        while stack:
            node, lineage = stack.pop()
            await checkpoint()
            families = await self.reader.get_families_for_person(node.id)

            pending: list[tuple[DescendancyNode, frozenset[UUID]]] = []
            for family in families:
                spouse = spouse_info(family, node.id)
                if spouse is not None:
                    node.spouses.append(spouse)

                if node.generation >= max_gen:
                    continue

                for child in await self.reader.get_family_children(family.id):
                    if child.person_id in lineage:
                        logger.debug("cycle_cut", person_id=str(child.person_id), generation=node.generation + 1)
                        continue
                    await checkpoint()
                    child_person = await self.reader.get_person(child.person_id)
                    if child_person is None:
                        continue
                    child_node = DescendancyNode(
                        **PersonSnapshot.snapshot_fields(child_person),
                        generation=node.generation + 1,
                    )
                    node.children.append(child_node)
                    pending.append((child_node, lineage | {child.person_id}))

            # Reversed so the first child's subtree is expanded first
            stack.extend(reversed(pending))

        total, deepest = count_descendants(root)
        logger.debug(
            "descendancy_built",
            person_id=str(person_id),
            max_generations=max_gen,
            total_descendants=total,
            max_generation=deepest,
        )
        return DescendancyResult(root=root, total_descendants=total, max_generation=deepest)


def spouse_info(family: FamilyMembership, person_id: UUID) -> SpouseInfo | None:
    """Describe the other partner of a family, if one is recorded."""
    partner = family.other_partner(person_id)
    if partner is None:
        return None
    spouse_id, spouse_name = partner
    return SpouseInfo(id=spouse_id, name=spouse_name, marriage_date=family.marriage_date)


def count_descendants(root: DescendancyNode) -> tuple[int, int]:
    """Return (number of descendant nodes, deepest generation) for a tree."""
    total = 0
    deepest = 0
    stack = [root]
    while stack:
        node = stack.pop()
        deepest = max(deepest, node.generation)
        total += len(node.children)
        stack.extend(node.children)
    return total, deepest
