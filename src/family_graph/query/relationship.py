"""Relationship (kinship) queries between two persons.

Builds an ancestor map for each person, finds the lowest common
ancestors, and names every distinct path between the two.
"""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING
from uuid import UUID

from ..config import CONFIG, EngineConfig
from ..logging import get_logger
from .errors import NotFoundError
from .kinship import classify, render
from .limits import checkpoint
from .models import AncestorInfo, PersonSnapshot, RelationshipPath, RelationshipResult

if TYPE_CHECKING:
    from ..models import Person
    from ..readmodel import AncestryReader

logger = get_logger(__name__)

AncestorMap = dict[UUID, AncestorInfo]


@dataclass
class _Candidate:
    """A person through whom A and B connect, with distances from each side."""
    person: Person
    gen_a: int
    gen_b: int

    def dominated_by(self, other: _Candidate) -> bool:
        return other.gen_a < self.gen_a and other.gen_b < self.gen_b


class RelationshipResolver:
    """Computes how two persons are related.

    Example:
        >>> resolver = RelationshipResolver(reader)
        >>> result = await resolver.get_relationship(cousin_a, cousin_b)
        >>> result.summary
        '1st cousin (via 2 paths)'
    """

    def __init__(self, reader: AncestryReader, config: EngineConfig | None = None) -> None:
        self.reader = reader
        self.config = config or CONFIG

    async def get_relationship(self, person_a_id: UUID, person_b_id: UUID) -> RelationshipResult:
        """Describe what person B is to person A.

        Raises:
            NotFoundError: if either person does not exist
        """
        person_a = await self._require_person(person_a_id)
        person_b = await self._require_person(person_b_id)

        result = RelationshipResult(
            person_a=PersonSnapshot.from_person(person_a),
            person_b=PersonSnapshot.from_person(person_b),
        )

        if person_a_id == person_b_id:
            kinship = classify(0, 0)
            result.paths = [
                RelationshipPath(
                    name=render(kinship),
                    kind=kinship.kind,
                    path_from_a=[person_a_id],
                    path_from_b=[person_b_id],
                )
            ]
            result.is_related = True
            result.summary = "same person"
            return result

        ancestors_a = await self.build_ancestor_map(person_a_id)
        ancestors_b = await self.build_ancestor_map(person_b_id)

        candidates = lowest_common_ancestors(person_a, person_b, ancestors_a, ancestors_b)

        for candidate in candidates:
            kinship = classify(candidate.gen_a, candidate.gen_b)
            result.paths.append(
                RelationshipPath(
                    name=render(kinship),
                    kind=kinship.kind,
                    path_from_a=ancestor_path(ancestors_a, person_a_id, candidate.person.id),
                    path_from_b=ancestor_path(ancestors_b, person_b_id, candidate.person.id),
                    common_ancestor=PersonSnapshot.from_person(candidate.person),
                    generation_distance_a=candidate.gen_a,
                    generation_distance_b=candidate.gen_b,
                )
            )

        result.is_related = len(result.paths) > 0
        result.summary = build_summary(result.paths)

        logger.debug(
            "relationship_resolved",
            person_a=str(person_a_id),
            person_b=str(person_b_id),
            paths=len(result.paths),
            summary=result.summary,
        )
        return result

    async def build_ancestor_map(self, person_id: UUID) -> AncestorMap:
        """Map every reachable ancestor to its generation distance.

        Breadth-first, so the first time an ancestor is reached is along
        its shortest path. The start person never appears in its own map.
        """
        max_gen = self.config.relationship_generations
        ancestors: AncestorMap = {}
        visited: set[UUID] = {person_id}
        queue: deque[tuple[UUID, int]] = deque([(person_id, 0)])

        while queue:
            current_id, generation = queue.popleft()
            if generation >= max_gen:
                continue

            await checkpoint()
            link = await self.reader.get_parent_link(current_id)
            if link is None:
                continue

            for parent_id in link.parent_ids():
                if parent_id in visited:
                    continue
                visited.add(parent_id)

                parent = await self.reader.get_person(parent_id)
                if parent is None:
                    continue

                ancestors[parent_id] = AncestorInfo(person=parent, generation=generation + 1, via=current_id)
                queue.append((parent_id, generation + 1))

        return ancestors

    async def _require_person(self, person_id: UUID) -> Person:
        person = await self.reader.get_person(person_id)
        if person is None:
            logger.info("relationship_subject_missing", person_id=str(person_id))
            raise NotFoundError(person_id)
        return person


def lowest_common_ancestors(
    person_a: Person,
    person_b: Person,
    ancestors_a: AncestorMap,
    ancestors_b: AncestorMap,
) -> list[_Candidate]:
    """Direct-line matches plus common ancestors, minus those dominated.

    A candidate is dropped when another candidate is strictly closer to
    both A and B. Direct-line matches (A is B's ancestor or the reverse)
    take part in the comparison, so B's own ancestors are not reported
    when B is already an ancestor of A.
    """
    direct: list[_Candidate] = []
    if person_a.id in ancestors_b:
        direct.append(_Candidate(person_a, 0, ancestors_b[person_a.id].generation))
    if person_b.id in ancestors_a:
        direct.append(_Candidate(person_b, ancestors_a[person_b.id].generation, 0))

    shared = [
        _Candidate(info.person, info.generation, ancestors_b[ancestor_id].generation)
        for ancestor_id, info in ancestors_a.items()
        if ancestor_id in ancestors_b
    ]
    shared.sort(
        key=lambda c: (
            c.gen_a + c.gen_b,
            c.gen_a,
            c.person.surname,
            c.person.given_name,
            str(c.person.id),
        )
    )

    everyone = direct + shared
    return [c for c in everyone if not any(c.dominated_by(other) for other in everyone if other is not c)]


def ancestor_path(ancestors: AncestorMap, start_id: UUID, target_id: UUID) -> list[UUID]:
    """Ids from start to target inclusive, rebuilt from the `via` pointers."""
    path = [target_id]
    current = target_id
    while current != start_id:
        current = ancestors[current].via
        path.append(current)
    path.reverse()
    return path


def build_summary(paths: list[RelationshipPath]) -> str:
    """One name, "<name> (via N paths)", or distinct names joined by "; "."""
    if not paths:
        return "not related"
    if len(paths) == 1:
        return paths[0].name

    names = list(dict.fromkeys(p.name for p in paths))
    if len(names) == 1:
        return f"{names[0]} (via {len(paths)} paths)"
    return "; ".join(names)
