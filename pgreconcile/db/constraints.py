"""Table constraint dataclass and query."""

from collections import defaultdict
from dataclasses import dataclass

import psycopg


@dataclass(frozen=True)
class Constraint:
    """A primary key, unique, check, foreign key or exclusion constraint."""

    constraint_name: str
    # p, u, c, f or x as in pg_constraint.contype
    constraint_type: str
    definition: str
    validated: bool = True
    comment: str | None = None

    @property
    def key(self) -> tuple[str, ...]:
        return (self.constraint_name,)

    def __str__(self) -> str:
        return f"Constraint({self.constraint_name})"


# pg_get_constraintdef() gives the canonical definition, stable across
# rewrites of the original DDL.
QUERY = """
SELECT
    c.conrelid,
    c.conname,
    c.contype,
    pg_get_constraintdef(c.oid),
    c.convalidated,
    obj_description(c.oid, 'pg_constraint')
FROM pg_constraint c
JOIN pg_class r ON r.oid = c.conrelid
JOIN pg_namespace n ON n.oid = r.relnamespace
WHERE c.contype IN ('p', 'u', 'c', 'f', 'x')
  AND c.conislocal
  AND n.nspname !~ '^pg_'
  AND n.nspname <> 'information_schema'
ORDER BY c.conrelid, c.conname COLLATE "C"
"""


def fetch_constraints(conn: psycopg.Connection) -> dict[int, list[Constraint]]:
    """Fetch table constraints grouped by table oid, sorted by name."""
    constraints: dict[int, list[Constraint]] = defaultdict(list)
    with conn.cursor() as cur:
        cur.execute(QUERY)
        for row in cur.fetchall():
            constraints[row[0]].append(
                Constraint(
                    constraint_name=row[1],
                    constraint_type=row[2],
                    definition=row[3],
                    validated=row[4],
                    comment=row[5],
                )
            )
    return constraints
