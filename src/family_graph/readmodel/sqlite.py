"""SQLite read projection for persons, families and pedigree edges."""
from __future__ import annotations

import asyncio
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from uuid import UUID

from ..models import (
    ChildRelationType,
    FamilyChild,
    FamilyMembership,
    Gender,
    ParentLink,
    Person,
    RelationType,
)
from .store import AncestryReader


class SQLiteAncestryReader(AncestryReader):
    """SQLite-based read model for genealogy queries.

    Tables:
    - persons(id -> names, gender, birth/death date and place)
    - families(id -> partner ids/names, marriage date and place)
    - family_children(family_id, person_id -> relation type, sequence)
    - pedigree_edges(person_id -> father/mother ids and names)

    Reads run in a worker thread so the event loop stays responsive and
    each lookup remains cancellable.
    """

    def __init__(self, db_path: str | Path) -> None:
        # Each lookup opens its own connection, so ":memory:" would lose the schema
        if str(db_path) == ":memory:":
            raise ValueError("SQLiteAncestryReader needs a database file; use MemoryAncestryReader instead")
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()

    @contextmanager
    def _get_conn(self):
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        # Enforce PRAGMAs per-connection
        conn.execute("PRAGMA foreign_keys=ON;")
        conn.execute("PRAGMA journal_mode=WAL;")
        conn.execute("PRAGMA busy_timeout=5000;")
        try:
            yield conn
        finally:
            conn.close()

    def _init_schema(self) -> None:
        with self._get_conn() as conn:
            conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS persons (
                    id TEXT PRIMARY KEY,
                    given_name TEXT NOT NULL DEFAULT '',
                    surname TEXT NOT NULL DEFAULT '',
                    gender TEXT,
                    birth_date_raw TEXT,
                    birth_place TEXT,
                    death_date_raw TEXT,
                    death_place TEXT
                );

                CREATE INDEX IF NOT EXISTS idx_persons_surname ON persons(surname, given_name);

                CREATE TABLE IF NOT EXISTS families (
                    id TEXT PRIMARY KEY,
                    partner1_id TEXT,
                    partner1_name TEXT,
                    partner2_id TEXT,
                    partner2_name TEXT,
                    relationship_type TEXT,
                    marriage_date_raw TEXT,
                    marriage_place TEXT
                );

                CREATE INDEX IF NOT EXISTS idx_families_partner1 ON families(partner1_id);
                CREATE INDEX IF NOT EXISTS idx_families_partner2 ON families(partner2_id);

                CREATE TABLE IF NOT EXISTS family_children (
                    family_id TEXT NOT NULL,
                    person_id TEXT NOT NULL,
                    person_name TEXT,
                    relationship_type TEXT NOT NULL DEFAULT 'biological',
                    sequence INTEGER,
                    PRIMARY KEY (family_id, person_id),
                    FOREIGN KEY (family_id) REFERENCES families(id) ON DELETE CASCADE
                );

                CREATE INDEX IF NOT EXISTS idx_family_children_person ON family_children(person_id);

                -- father_id/mother_id may name persons absent from the persons table
                CREATE TABLE IF NOT EXISTS pedigree_edges (
                    person_id TEXT PRIMARY KEY,
                    father_id TEXT,
                    mother_id TEXT,
                    father_name TEXT,
                    mother_name TEXT
                );

                CREATE INDEX IF NOT EXISTS idx_pedigree_father ON pedigree_edges(father_id);
                CREATE INDEX IF NOT EXISTS idx_pedigree_mother ON pedigree_edges(mother_id);
                """
            )
            conn.commit()

    # --------------------------- Projection writes ---------------------------

    def save_person(self, person: Person) -> None:
        with self._get_conn() as conn:
            conn.execute(
                """
                INSERT INTO persons (
                    id, given_name, surname, gender,
                    birth_date_raw, birth_place, death_date_raw, death_place
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    given_name = excluded.given_name,
                    surname = excluded.surname,
                    gender = excluded.gender,
                    birth_date_raw = excluded.birth_date_raw,
                    birth_place = excluded.birth_place,
                    death_date_raw = excluded.death_date_raw,
                    death_place = excluded.death_place
                """,
                (
                    str(person.id),
                    person.given_name,
                    person.surname,
                    person.gender.value,
                    person.birth_date_raw,
                    person.birth_place,
                    person.death_date_raw,
                    person.death_place,
                ),
            )
            conn.commit()

    def save_parent_link(self, link: ParentLink) -> None:
        with self._get_conn() as conn:
            conn.execute(
                """
                INSERT INTO pedigree_edges (person_id, father_id, mother_id, father_name, mother_name)
                VALUES (?, ?, ?, ?, ?)
                ON CONFLICT(person_id) DO UPDATE SET
                    father_id = excluded.father_id,
                    mother_id = excluded.mother_id,
                    father_name = excluded.father_name,
                    mother_name = excluded.mother_name
                """,
                (
                    str(link.person_id),
                    _str_or_none(link.father_id),
                    _str_or_none(link.mother_id),
                    link.father_name,
                    link.mother_name,
                ),
            )
            conn.commit()

    def save_family(self, family: FamilyMembership) -> None:
        with self._get_conn() as conn:
            conn.execute(
                """
                INSERT INTO families (
                    id, partner1_id, partner1_name, partner2_id, partner2_name,
                    relationship_type, marriage_date_raw, marriage_place
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    partner1_id = excluded.partner1_id,
                    partner1_name = excluded.partner1_name,
                    partner2_id = excluded.partner2_id,
                    partner2_name = excluded.partner2_name,
                    relationship_type = excluded.relationship_type,
                    marriage_date_raw = excluded.marriage_date_raw,
                    marriage_place = excluded.marriage_place
                """,
                (
                    str(family.id),
                    _str_or_none(family.partner1_id),
                    family.partner1_name,
                    _str_or_none(family.partner2_id),
                    family.partner2_name,
                    family.relationship_type.value,
                    family.marriage_date_raw,
                    family.marriage_place,
                ),
            )
            conn.commit()

    def save_family_child(self, child: FamilyChild) -> None:
        with self._get_conn() as conn:
            conn.execute(
                """
                INSERT INTO family_children (family_id, person_id, person_name, relationship_type, sequence)
                VALUES (?, ?, ?, ?, ?)
                ON CONFLICT(family_id, person_id) DO UPDATE SET
                    person_name = excluded.person_name,
                    relationship_type = excluded.relationship_type,
                    sequence = excluded.sequence
                """,
                (
                    str(child.family_id),
                    str(child.person_id),
                    child.person_name,
                    child.relationship_type.value,
                    child.sequence,
                ),
            )
            conn.commit()

    # ------------------------------ Reads ------------------------------

    async def get_person(self, person_id: UUID) -> Person | None:
        return await asyncio.to_thread(self._fetch_person, person_id)

    async def get_parent_link(self, person_id: UUID) -> ParentLink | None:
        return await asyncio.to_thread(self._fetch_parent_link, person_id)

    async def get_families_for_person(self, person_id: UUID) -> list[FamilyMembership]:
        return await asyncio.to_thread(self._fetch_families, person_id)

    async def get_family_children(self, family_id: UUID) -> list[FamilyChild]:
        return await asyncio.to_thread(self._fetch_children, family_id)

    def _fetch_person(self, person_id: UUID) -> Person | None:
        with self._get_conn() as conn:
            row = conn.execute("SELECT * FROM persons WHERE id = ?", (str(person_id),)).fetchone()
        if row is None:
            return None
        return Person(
            id=UUID(row["id"]),
            given_name=row["given_name"] or "",
            surname=row["surname"] or "",
            gender=Gender(row["gender"]) if row["gender"] else Gender.UNKNOWN,
            birth_date_raw=row["birth_date_raw"] or "",
            birth_place=row["birth_place"] or "",
            death_date_raw=row["death_date_raw"] or "",
            death_place=row["death_place"] or "",
        )

    def _fetch_parent_link(self, person_id: UUID) -> ParentLink | None:
        with self._get_conn() as conn:
            row = conn.execute(
                "SELECT * FROM pedigree_edges WHERE person_id = ?",
                (str(person_id),),
            ).fetchone()
        if row is None:
            return None
        return ParentLink(
            person_id=UUID(row["person_id"]),
            father_id=_uuid_or_none(row["father_id"]),
            father_name=row["father_name"] or "",
            mother_id=_uuid_or_none(row["mother_id"]),
            mother_name=row["mother_name"] or "",
        )

    def _fetch_families(self, person_id: UUID) -> list[FamilyMembership]:
        with self._get_conn() as conn:
            rows = conn.execute(
                "SELECT * FROM families WHERE partner1_id = ? OR partner2_id = ? ORDER BY rowid",
                (str(person_id), str(person_id)),
            ).fetchall()
        return [
            FamilyMembership(
                id=UUID(row["id"]),
                partner1_id=_uuid_or_none(row["partner1_id"]),
                partner1_name=row["partner1_name"] or "",
                partner2_id=_uuid_or_none(row["partner2_id"]),
                partner2_name=row["partner2_name"] or "",
                relationship_type=RelationType(row["relationship_type"] or RelationType.UNKNOWN.value),
                marriage_date_raw=row["marriage_date_raw"] or "",
                marriage_place=row["marriage_place"] or "",
            )
            for row in rows
        ]

    def _fetch_children(self, family_id: UUID) -> list[FamilyChild]:
        with self._get_conn() as conn:
            rows = conn.execute(
                """
                SELECT * FROM family_children WHERE family_id = ?
                ORDER BY sequence IS NULL, sequence, rowid
                """,
                (str(family_id),),
            ).fetchall()
        return [
            FamilyChild(
                family_id=UUID(row["family_id"]),
                person_id=UUID(row["person_id"]),
                person_name=row["person_name"] or "",
                relationship_type=ChildRelationType(row["relationship_type"]),
                sequence=row["sequence"],
            )
            for row in rows
        ]


def _str_or_none(value: UUID | None) -> str | None:
    return str(value) if value is not None else None


def _uuid_or_none(value: str | None) -> UUID | None:
    return UUID(value) if value else None
