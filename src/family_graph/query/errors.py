"""Errors surfaced by graph queries.

Only a missing subject person is an error. Every other gap in the data
(no parent link, no common ancestor, a cycle) degrades to a partial result.
"""
from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID


class QueryError(Exception):
    """Base class for query failures."""


@dataclass
class NotFoundError(QueryError):
    """Raised when the subject of a query does not exist in the projection."""

    person_id: UUID

    def __str__(self) -> str:
        return f"person not found: {self.person_id}"
