"""Wiring of the four graph queries around one projection reader."""
from __future__ import annotations

from typing import TYPE_CHECKING

from .config import EngineConfig, load_config
from .logging import configure_logging
from .query import AhnentafelNumberer, DescendancyBuilder, PedigreeBuilder, RelationshipResolver
from .readmodel import SQLiteAncestryReader

if TYPE_CHECKING:
    from uuid import UUID

    from .query import AhnentafelResult, DescendancyResult, PedigreeResult, RelationshipResult
    from .readmodel import AncestryReader


class GraphEngine:
    """Entry point for query-layer callers.

    Example:
        >>> engine = GraphEngine.from_config()
        >>> pedigree = await engine.get_pedigree(person_id)
        >>> kin = await engine.get_relationship(person_id, other_id)
    """

    def __init__(self, reader: AncestryReader, config: EngineConfig | None = None) -> None:
        self.reader = reader
        self.config = config or EngineConfig()
        self.pedigree = PedigreeBuilder(reader, self.config)
        self.descendancy = DescendancyBuilder(reader, self.config)
        self.ahnentafel = AhnentafelNumberer(reader, self.config, pedigree=self.pedigree)
        self.relationship = RelationshipResolver(reader, self.config)

    @classmethod
    def from_config(cls, config: EngineConfig | None = None) -> GraphEngine:
        """Configure logging and open the SQLite projection named by the config."""
        config = config or load_config()
        configure_logging(config.log_level)
        return cls(SQLiteAncestryReader(config.sqlite_path), config)

    async def get_pedigree(self, person_id: UUID, max_generations: int | None = None) -> PedigreeResult:
        return await self.pedigree.get_pedigree(person_id, max_generations)

    async def get_descendancy(self, person_id: UUID, max_generations: int | None = None) -> DescendancyResult:
        return await self.descendancy.get_descendancy(person_id, max_generations)

    async def get_ahnentafel(self, person_id: UUID, max_generations: int | None = None) -> AhnentafelResult:
        return await self.ahnentafel.get_ahnentafel(person_id, max_generations)

    async def get_relationship(self, person_a_id: UUID, person_b_id: UUID) -> RelationshipResult:
        return await self.relationship.get_relationship(person_a_id, person_b_id)

    def close(self) -> None:
        self.reader.close()
