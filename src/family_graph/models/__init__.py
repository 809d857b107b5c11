"""Read-model records and genealogical dates."""
from .dates import DateQualifier, GenDate, parse_gen_date
from .person import (
    ChildRelationType,
    FamilyChild,
    FamilyMembership,
    Gender,
    ParentLink,
    Person,
    RelationType,
)

__all__ = [
    "DateQualifier",
    "GenDate",
    "parse_gen_date",
    "Gender",
    "RelationType",
    "ChildRelationType",
    "Person",
    "ParentLink",
    "FamilyMembership",
    "FamilyChild",
]
