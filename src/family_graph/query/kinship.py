"""Kinship classification and English naming.

A relationship is first classified from the two generation distances to
the common ancestor, then rendered to text. Names describe what person B
is to person A: genA=1, genB=0 means B is A's parent.
"""
from __future__ import annotations

from dataclasses import dataclass

from .models import KinshipKind

_REMOVED_WORDS = {1: "once", 2: "twice", 3: "thrice"}


@dataclass(frozen=True)
class Kinship:
    """Classified relationship.

    generations: hops for direct lines; for uncle/aunt and nephew/niece,
        1 is the plain form and each extra step adds a grand-/great- level.
    degree, removed: cousin degree and generational offset.
    """
    kind: KinshipKind
    generations: int = 0
    degree: int = 0
    removed: int = 0


def classify(gen_a: int, gen_b: int) -> Kinship:
    """Classify a path from its generation distances (A side, B side)."""
    if gen_a == 0 and gen_b == 0:
        return Kinship(KinshipKind.SELF)
    if gen_a == 0:
        return Kinship(KinshipKind.DESCENDANT, generations=gen_b)
    if gen_b == 0:
        return Kinship(KinshipKind.ANCESTOR, generations=gen_a)
    if gen_a == 1 and gen_b == 1:
        return Kinship(KinshipKind.SIBLING)
    if gen_b == 1:
        return Kinship(KinshipKind.UNCLE_AUNT, generations=gen_a - 1)
    if gen_a == 1:
        return Kinship(KinshipKind.NEPHEW_NIECE, generations=gen_b - 1)
    return Kinship(
        KinshipKind.COUSIN,
        degree=min(gen_a, gen_b) - 1,
        removed=abs(gen_a - gen_b),
    )


def render(kinship: Kinship) -> str:
    """English name for a classified relationship."""
    kind = kinship.kind
    if kind == KinshipKind.SELF:
        return "self"
    if kind == KinshipKind.ANCESTOR:
        return _lineal_name(kinship.generations, "parent")
    if kind == KinshipKind.DESCENDANT:
        return _lineal_name(kinship.generations, "child")
    if kind == KinshipKind.SIBLING:
        return "sibling"
    if kind == KinshipKind.UNCLE_AUNT:
        return _collateral_name(kinship.generations, "uncle/aunt")
    if kind == KinshipKind.NEPHEW_NIECE:
        return _collateral_name(kinship.generations, "nephew/niece")
    return cousin_name(kinship.degree, kinship.removed)


def _lineal_name(generations: int, base: str) -> str:
    # parent, grandparent, great-grandparent, great-great-grandparent, 3rd great-grandparent
    if generations == 1:
        return base
    return f"{great_prefix(generations - 2)}grand{base}"


def _collateral_name(generations: int, base: str) -> str:
    # uncle/aunt, grand-uncle/aunt, great-grand-uncle/aunt, ...
    if generations == 1:
        return base
    return f"{great_prefix(generations - 2)}grand-{base}"


def great_prefix(count: int) -> str:
    """The "great-" ladder: "", "great-", "great-great-", then "3rd great-" onwards."""
    if count <= 0:
        return ""
    if count == 1:
        return "great-"
    if count == 2:
        return "great-great-"
    return f"{ordinal(count)} great-"


def cousin_name(degree: int, removed: int) -> str:
    """e.g. "1st cousin", "2nd cousin twice removed", "1st cousin 4 times removed"."""
    base = f"{ordinal(degree)} cousin"
    if removed == 0:
        return base
    times = _REMOVED_WORDS.get(removed, f"{removed} times")
    return f"{base} {times} removed"


def ordinal(n: int) -> str:
    """English ordinal: 1st, 2nd, 3rd, 4th, 11th, 12th, 13th, 21st, 111th, ..."""
    if n % 100 in (11, 12, 13):
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"
