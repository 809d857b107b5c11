"""Ahnentafel (numbered ancestor list) queries.

Numbering:
- Subject = 1
- Father of person N = 2N
- Mother of person N = 2N + 1

Unknown ancestors leave gaps in the numbering; nothing is zero-filled.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from ..config import CONFIG, EngineConfig
from ..logging import get_logger
from .models import AhnentafelEntry, AhnentafelResult, PedigreeNode, PersonSnapshot
from .pedigree import PedigreeBuilder

if TYPE_CHECKING:
    from uuid import UUID

    from ..readmodel import AncestryReader

logger = get_logger(__name__)


class AhnentafelNumberer:
    """Numbers the pedigree of a person using the classical 2N / 2N+1 scheme."""

    def __init__(
        self,
        reader: AncestryReader,
        config: EngineConfig | None = None,
        pedigree: PedigreeBuilder | None = None,
    ) -> None:
        self.config = config or CONFIG
        self.pedigree = pedigree or PedigreeBuilder(reader, self.config)

    async def get_ahnentafel(
        self,
        person_id: UUID,
        max_generations: int | None = None,
    ) -> AhnentafelResult:
        """Get the Ahnentafel list for a person.

        Generation capping and cycle handling are those of the pedigree:
        a cyclic parent graph still yields a finite, deterministic list.

        Raises:
            NotFoundError: if the subject does not exist
        """
        pedigree = await self.pedigree.get_pedigree(person_id, max_generations)
        entries = number_tree(pedigree.root)
        result = AhnentafelResult(
            entries=entries,
            total_entries=len(entries),
            max_generation=max((e.generation for e in entries), default=0),
        )
        logger.debug(
            "ahnentafel_built",
            person_id=str(person_id),
            total_entries=result.total_entries,
            max_generation=result.max_generation,
        )
        return result


def number_tree(root: PedigreeNode) -> list[AhnentafelEntry]:
    """Flatten a pedigree tree into Ahnentafel entries sorted by number."""
    entries: list[AhnentafelEntry] = []
    stack: list[tuple[PedigreeNode, int]] = [(root, 1)]

    while stack:
        node, number = stack.pop()
        fields = node.model_dump(include=set(PersonSnapshot.model_fields))
        entries.append(
            AhnentafelEntry(**fields, number=number, generation=number.bit_length() - 1)
        )
        if node.father is not None:
            stack.append((node.father, 2 * number))
        if node.mother is not None:
            stack.append((node.mother, 2 * number + 1))

    entries.sort(key=lambda e: e.number)
    return entries
