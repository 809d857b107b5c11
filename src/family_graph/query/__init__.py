"""Genealogical graph queries.

Provides:
- Pedigree trees (ancestors, father/mother subtrees)
- Descendancy trees (spouses and children via family membership)
- Ahnentafel numbering (father = 2N, mother = 2N + 1)
- Relationship naming between two persons (lowest common ancestors)
"""
from .ahnentafel import AhnentafelNumberer
from .descendancy import DescendancyBuilder
from .errors import NotFoundError, QueryError
from .kinship import Kinship, classify, cousin_name, ordinal, render
from .models import (
    AhnentafelEntry,
    AhnentafelResult,
    AncestorInfo,
    DescendancyNode,
    DescendancyResult,
    KinshipKind,
    PedigreeNode,
    PedigreeResult,
    PersonSnapshot,
    RelationshipPath,
    RelationshipResult,
    SpouseInfo,
)
from .pedigree import PedigreeBuilder
from .relationship import RelationshipResolver

__all__ = [
    # Builders
    "PedigreeBuilder",
    "DescendancyBuilder",
    "AhnentafelNumberer",
    "RelationshipResolver",
    # Errors
    "QueryError",
    "NotFoundError",
    # Kinship naming
    "Kinship",
    "KinshipKind",
    "classify",
    "render",
    "cousin_name",
    "ordinal",
    # Results
    "PersonSnapshot",
    "PedigreeNode",
    "PedigreeResult",
    "DescendancyNode",
    "DescendancyResult",
    "SpouseInfo",
    "AhnentafelEntry",
    "AhnentafelResult",
    "AncestorInfo",
    "RelationshipPath",
    "RelationshipResult",
]
