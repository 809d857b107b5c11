"""Tests for relationship resolution between two persons."""
from __future__ import annotations

import asyncio
from uuid import uuid4

import pytest

from family_graph.config import EngineConfig
from family_graph.models import Gender
from family_graph.query import KinshipKind, NotFoundError, RelationshipPath, RelationshipResolver
from family_graph.query.relationship import build_summary


@pytest.fixture
def cousins(tree):
    """Two first cousins sharing both paternal grandparents.

    grandfather + grandmother
        -> uncle  -> cousin_a
        -> father -> cousin_b
    """
    people = {
        "grandfather": tree.person("Gramps", gender=Gender.MALE),
        "grandmother": tree.person("Granny", gender=Gender.FEMALE),
        "uncle": tree.person("Uncle", gender=Gender.MALE),
        "father": tree.person("Father", gender=Gender.MALE),
        "cousin_a": tree.person("Ann", gender=Gender.FEMALE),
        "cousin_b": tree.person("Ben", gender=Gender.MALE),
    }
    tree.parents(people["uncle"], people["grandfather"], people["grandmother"])
    tree.parents(people["father"], people["grandfather"], people["grandmother"])
    tree.parents(people["cousin_a"], father=people["uncle"])
    tree.parents(people["cousin_b"], father=people["father"])
    return people


class TestIdentityAndErrors:
    """Tests for the trivial and failing cases."""

    @pytest.mark.asyncio
    async def test_same_person(self, reader, tree):
        """A person compared with themselves is "self"."""
        person = tree.person("Ada")
        result = await RelationshipResolver(reader).get_relationship(person, person)

        assert result.is_related is True
        assert result.summary == "same person"
        assert len(result.paths) == 1
        path = result.paths[0]
        assert path.name == "self"
        assert path.kind == KinshipKind.SELF
        assert path.path_from_a == [person]
        assert path.path_from_b == [person]
        assert path.degree == 0
        assert path.coefficient == 1.0

    @pytest.mark.asyncio
    async def test_person_a_not_found(self, reader, tree):
        known = tree.person("Known")
        missing = uuid4()
        with pytest.raises(NotFoundError) as exc_info:
            await RelationshipResolver(reader).get_relationship(missing, known)
        assert exc_info.value.person_id == missing

    @pytest.mark.asyncio
    async def test_person_b_not_found(self, reader, tree):
        known = tree.person("Known")
        missing = uuid4()
        with pytest.raises(NotFoundError) as exc_info:
            await RelationshipResolver(reader).get_relationship(known, missing)
        assert exc_info.value.person_id == missing

    @pytest.mark.asyncio
    async def test_unrelated(self, reader, tree):
        """No shared ancestor gives an empty, unrelated result."""
        a = tree.person("A")
        b = tree.person("B")
        tree.parents(a, father=tree.person("FA"))
        tree.parents(b, father=tree.person("FB"))

        result = await RelationshipResolver(reader).get_relationship(a, b)

        assert result.is_related is False
        assert result.paths == []
        assert result.summary == "not related"
        assert result.person_a.id == a
        assert result.person_b.id == b


class TestDirectLine:
    """Tests for ancestor and descendant relationships."""

    @pytest.mark.asyncio
    async def test_parent_and_child_are_symmetric(self, reader, tree):
        """Child vs father is "parent"; father vs child is "child"; one path each."""
        grandfather = tree.person("Grandfather", gender=Gender.MALE)
        father = tree.person("Father", gender=Gender.MALE)
        child = tree.person("Child")
        tree.parents(father, father=grandfather)
        tree.parents(child, father=father)

        resolver = RelationshipResolver(reader)
        up = await resolver.get_relationship(child, father)
        down = await resolver.get_relationship(father, child)

        assert [p.name for p in up.paths] == ["parent"]
        assert up.summary == "parent"
        assert up.paths[0].kind == KinshipKind.ANCESTOR
        assert up.paths[0].path_from_a == [child, father]
        assert up.paths[0].path_from_b == [father]
        assert up.paths[0].common_ancestor.id == father

        assert [p.name for p in down.paths] == ["child"]
        assert down.summary == "child"
        assert down.paths[0].kind == KinshipKind.DESCENDANT

    @pytest.mark.asyncio
    async def test_great_grandparent(self, reader, tree):
        line = tree.chain(4, "L")
        result = await RelationshipResolver(reader).get_relationship(line[-1], line[0])

        assert result.summary == "great-grandparent"
        path = result.paths[0]
        assert path.path_from_a == list(reversed(line))
        assert (path.generation_distance_a, path.generation_distance_b) == (3, 0)
        assert path.coefficient == 0.125


class TestCollateral:
    """Tests for relationships through a shared ancestor."""

    @pytest.mark.asyncio
    async def test_full_siblings(self, reader, tree):
        """Full siblings connect through both parents."""
        father = tree.person("Father", gender=Gender.MALE)
        mother = tree.person("Mother", gender=Gender.FEMALE)
        a = tree.person("A")
        b = tree.person("B")
        tree.parents(a, father, mother)
        tree.parents(b, father, mother)

        result = await RelationshipResolver(reader).get_relationship(a, b)

        assert len(result.paths) == 2
        assert {p.name for p in result.paths} == {"sibling"}
        assert {p.common_ancestor.id for p in result.paths} == {father, mother}
        assert result.summary == "sibling (via 2 paths)"
        assert sum(p.coefficient for p in result.paths) == 0.5

    @pytest.mark.asyncio
    async def test_half_siblings(self, reader, tree):
        father = tree.person("Father", gender=Gender.MALE)
        a = tree.person("A")
        b = tree.person("B")
        tree.parents(a, father, tree.person("Mother1", gender=Gender.FEMALE))
        tree.parents(b, father, tree.person("Mother2", gender=Gender.FEMALE))

        result = await RelationshipResolver(reader).get_relationship(a, b)

        assert result.summary == "sibling"
        assert result.paths[0].common_ancestor.id == father

    @pytest.mark.asyncio
    async def test_first_cousins(self, reader, cousins):
        """First cousins: two paths through the grandparents, no deeper ones."""
        result = await RelationshipResolver(reader).get_relationship(cousins["cousin_a"], cousins["cousin_b"])

        assert result.summary == "1st cousin (via 2 paths)"
        assert all(p.kind == KinshipKind.COUSIN for p in result.paths)
        assert all(p.degree == 4 for p in result.paths)
        assert all(p.coefficient == 0.0625 for p in result.paths)

    @pytest.mark.asyncio
    async def test_path_ids(self, reader, cousins):
        """Paths run from each person up to the common ancestor inclusive."""
        result = await RelationshipResolver(reader).get_relationship(cousins["cousin_a"], cousins["cousin_b"])

        via_grandfather = next(p for p in result.paths if p.common_ancestor.id == cousins["grandfather"])
        assert via_grandfather.path_from_a == [cousins["cousin_a"], cousins["uncle"], cousins["grandfather"]]
        assert via_grandfather.path_from_b == [cousins["cousin_b"], cousins["father"], cousins["grandfather"]]

    @pytest.mark.asyncio
    async def test_paths_ordered_deterministically(self, reader, cousins):
        """Equal-distance ancestors are ordered by surname then given name."""
        result = await RelationshipResolver(reader).get_relationship(cousins["cousin_a"], cousins["cousin_b"])
        assert [p.common_ancestor.given_name for p in result.paths] == ["Gramps", "Granny"]

    @pytest.mark.asyncio
    async def test_uncle_and_niece(self, reader, cousins):
        """Cousin A's view of Ben's father is uncle/aunt, and the reverse."""
        resolver = RelationshipResolver(reader)

        up = await resolver.get_relationship(cousins["cousin_a"], cousins["father"])
        down = await resolver.get_relationship(cousins["father"], cousins["cousin_a"])

        assert up.summary == "uncle/aunt (via 2 paths)"
        assert all(p.kind == KinshipKind.UNCLE_AUNT for p in up.paths)
        assert down.summary == "nephew/niece (via 2 paths)"

    @pytest.mark.asyncio
    async def test_grand_uncle(self, reader, cousins, tree):
        """One generation further down, the uncle becomes a grand-uncle."""
        grandchild = tree.person("Grandchild")
        tree.parents(grandchild, mother=cousins["cousin_b"])

        result = await RelationshipResolver(reader).get_relationship(grandchild, cousins["uncle"])

        assert {p.name for p in result.paths} == {"grand-uncle/aunt"}
        assert all((p.generation_distance_a, p.generation_distance_b) == (3, 1) for p in result.paths)

    @pytest.mark.asyncio
    async def test_cousin_once_removed(self, reader, cousins, tree):
        child_of_a = tree.person("Junior")
        tree.parents(child_of_a, mother=cousins["cousin_a"])

        result = await RelationshipResolver(reader).get_relationship(child_of_a, cousins["cousin_b"])

        assert result.summary == "1st cousin once removed (via 2 paths)"

    @pytest.mark.asyncio
    async def test_non_dominating_ancestors_both_kept(self, reader, tree):
        """X is A's father and B's great-grandfather; Y is the mirror image.

        Neither is closer to both persons, so both paths are reported.
        """
        x = tree.person("X", gender=Gender.MALE)
        y = tree.person("Y", gender=Gender.MALE)
        a = tree.person("A")
        b = tree.person("B")
        a_mother = tree.person("AM", gender=Gender.FEMALE)
        a_grandmother = tree.person("AMM", gender=Gender.FEMALE)
        b_mother = tree.person("BM", gender=Gender.FEMALE)
        b_grandmother = tree.person("BMM", gender=Gender.FEMALE)
        tree.parents(a, father=x, mother=a_mother)
        tree.parents(a_mother, mother=a_grandmother)
        tree.parents(a_grandmother, father=y)
        tree.parents(b, father=y, mother=b_mother)
        tree.parents(b_mother, mother=b_grandmother)
        tree.parents(b_grandmother, father=x)

        result = await RelationshipResolver(reader).get_relationship(a, b)

        distances = {p.common_ancestor.id: (p.generation_distance_a, p.generation_distance_b) for p in result.paths}
        assert distances == {x: (1, 3), y: (3, 1)}
        assert result.summary == "grand-nephew/niece; grand-uncle/aunt"


class TestMalformedData:
    """Tests for cyclic links and bounded search."""

    @pytest.mark.asyncio
    async def test_two_cycle_is_finite(self, reader, tree):
        """A and B as each other's father yield one path in each direction."""
        a = tree.person("A", gender=Gender.MALE)
        b = tree.person("B", gender=Gender.MALE)
        tree.parents(a, father=b)
        tree.parents(b, father=a)

        result = await RelationshipResolver(reader).get_relationship(a, b)

        assert sorted(p.name for p in result.paths) == ["child", "parent"]
        assert result.is_related is True

    @pytest.mark.asyncio
    async def test_search_depth_bounded(self, reader, tree):
        """Ancestors beyond the configured bound are not considered."""
        line = tree.chain(4, "R")
        config = EngineConfig(relationship_generations=2)

        result = await RelationshipResolver(reader, config).get_relationship(line[-1], line[0])

        assert result.is_related is False

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self, reader, tree, monkeypatch):
        """Cancelling the caller's task interrupts a traversal mid-lookup."""
        a = tree.person("A")
        b = tree.person("B")
        tree.parents(a, father=tree.person("FA"))

        entered = asyncio.Event()
        never = asyncio.Event()

        async def blocking_parent_link(person_id):
            entered.set()
            await never.wait()

        monkeypatch.setattr(reader, "get_parent_link", blocking_parent_link)

        task = asyncio.create_task(RelationshipResolver(reader).get_relationship(a, b))
        await entered.wait()
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task


class TestBuildSummary:
    """Tests for summary text over a list of paths."""

    @staticmethod
    def _path(name: str) -> RelationshipPath:
        return RelationshipPath(name=name, kind=KinshipKind.COUSIN)

    def test_no_paths(self):
        assert build_summary([]) == "not related"

    def test_single_path(self):
        assert build_summary([self._path("2nd cousin")]) == "2nd cousin"

    def test_repeated_name(self):
        paths = [self._path("sibling")] * 3
        assert build_summary(paths) == "sibling (via 3 paths)"

    def test_distinct_names_keep_order(self):
        paths = [self._path("1st cousin"), self._path("2nd cousin"), self._path("1st cousin")]
        assert build_summary(paths) == "1st cousin; 2nd cousin"
