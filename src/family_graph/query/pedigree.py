"""Pedigree (ancestor tree) queries."""
from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from ..config import CONFIG, EngineConfig
from ..logging import get_logger
from .errors import NotFoundError
from .limits import checkpoint, clamp_generations
from .models import PedigreeNode, PedigreeResult, PersonSnapshot

if TYPE_CHECKING:
    from uuid import UUID

    from ..readmodel import AncestryReader

logger = get_logger(__name__)

ParentSlot = Literal["father", "mother"]


class PedigreeBuilder:
    """Builds bounded ancestor trees from parent links.

    Traversal is depth-first, father before mother, over an explicit stack.
    A person already placed in the tree is not placed again, which cuts
    cycles in malformed data and leaves a gap on the second occurrence.

    Example:
        >>> builder = PedigreeBuilder(reader)
        >>> result = await builder.get_pedigree(person_id, max_generations=4)
        >>> result.root.father.given_name
    """

    def __init__(self, reader: AncestryReader, config: EngineConfig | None = None) -> None:
        self.reader = reader
        self.config = config or CONFIG

    def resolve_generations(self, max_generations: int | None) -> int:
        return clamp_generations(
            max_generations,
            self.config.pedigree_generations,
            self.config.generation_cap,
        )

    async def get_pedigree(self, person_id: UUID, max_generations: int | None = None) -> PedigreeResult:
        """Get the ancestor tree for a person.

        Args:
            person_id: Subject of the pedigree
            max_generations: Depth to traverse; <= 0 means the default (5),
                values above the cap (10) are clamped

        Returns:
            PedigreeResult with the tree and aggregate counts

        Raises:
            NotFoundError: if the subject does not exist
        """
        max_gen = self.resolve_generations(max_generations)

        if await self.reader.get_person(person_id) is None:
            logger.info("pedigree_subject_missing", person_id=str(person_id))
            raise NotFoundError(person_id)

        root = await self.build_tree(person_id, max_gen)
        if root is None:
            # Subject vanished between the existence check and the walk
            raise NotFoundError(person_id)

        total, deepest = count_ancestors(root)
        logger.debug(
            "pedigree_built",
            person_id=str(person_id),
            max_generations=max_gen,
            total_ancestors=total,
            max_generation=deepest,
        )
        return PedigreeResult(root=root, total_ancestors=total, max_generation=deepest)

    async def build_tree(self, person_id: UUID, max_gen: int) -> PedigreeNode | None:
        """Walk parent links from person_id and return the root node."""
        visited: set[UUID] = set()
        root: PedigreeNode | None = None

        # (person, generation, node to attach to, slot on that node)
        stack: list[tuple[UUID, int, PedigreeNode | None, ParentSlot | None]] = [
            (person_id, 0, None, None)
        ]

        while stack:
            current_id, generation, child_node, slot = stack.pop()

            if current_id in visited:
                logger.debug("cycle_cut", person_id=str(current_id), generation=generation)
                continue
            visited.add(current_id)

            await checkpoint()
            person = await self.reader.get_person(current_id)
            if person is None:
                continue

            node = PedigreeNode(**PersonSnapshot.snapshot_fields(person), generation=generation)
            if child_node is None:
                root = node
            else:
                setattr(child_node, slot, node)

            if generation >= max_gen:
                continue

            link = await self.reader.get_parent_link(current_id)
            if link is None:
                continue

            # Mother pushed first so the father's line is walked first
            if link.mother_id is not None:
                stack.append((link.mother_id, generation + 1, node, "mother"))
            if link.father_id is not None:
                stack.append((link.father_id, generation + 1, node, "father"))

        return root

    async def get_ancestors(self, person_id: UUID, max_generations: int | None = None) -> list[PersonSnapshot]:
        """Flat list of ancestors up to the given depth, father's line first.

        An unknown subject simply has no ancestors.
        """
        max_gen = self.resolve_generations(max_generations)
        root = await self.build_tree(person_id, max_gen)
        if root is None:
            return []

        ancestors: list[PersonSnapshot] = []
        stack: list[PedigreeNode] = [root]
        while stack:
            node = stack.pop()
            if node is not root:
                ancestors.append(PersonSnapshot(**node.model_dump(include=set(PersonSnapshot.model_fields))))
            for parent in (node.mother, node.father):
                if parent is not None:
                    stack.append(parent)
        return ancestors


def count_ancestors(root: PedigreeNode) -> tuple[int, int]:
    """Return (number of ancestor nodes, deepest generation) for a tree."""
    total = 0
    deepest = 0
    stack = [root]
    while stack:
        node = stack.pop()
        deepest = max(deepest, node.generation)
        for parent in (node.father, node.mother):
            if parent is not None:
                total += 1
                stack.append(parent)
    return total, deepest
