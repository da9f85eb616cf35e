"""Sequence dataclass and query for PostgreSQL sequence introspection."""

from dataclasses import dataclass, field

import psycopg

from ..privileges import AclEntry, parse_acl


@dataclass(frozen=True)
class Sequence:
    """Represents a PostgreSQL sequence."""

    schema_name: str
    sequence_name: str
    data_type: str
    start_value: int
    minimum_value: int
    maximum_value: int
    increment: int
    cache: int
    cycle: bool
    owner: str
    comment: str | None = None
    acl: tuple[AclEntry, ...] | None = None
    oid: int = field(default=0, compare=False, repr=False)

    @property
    def key(self) -> tuple[str, ...]:
        return (self.schema_name, self.sequence_name)

    def __str__(self) -> str:
        return f"Sequence({self.schema_name}.{self.sequence_name})"


QUERY = """
SELECT
    c.oid,
    n.nspname,
    c.relname,
    format_type(s.seqtypid, NULL),
    s.seqstart,
    s.seqmin,
    s.seqmax,
    s.seqincrement,
    s.seqcache,
    s.seqcycle,
    pg_get_userbyid(c.relowner),
    obj_description(c.oid, 'pg_class'),
    c.relacl::text
FROM pg_sequence s
JOIN pg_class c ON c.oid = s.seqrelid
JOIN pg_namespace n ON n.oid = c.relnamespace
WHERE n.nspname !~ '^pg_'
  AND n.nspname <> 'information_schema'
  AND NOT EXISTS (
      SELECT 1 FROM pg_depend d
      WHERE d.classid = 'pg_class'::regclass
        AND d.objid = c.oid
        AND d.deptype = 'e'
  )
ORDER BY n.nspname COLLATE "C", c.relname COLLATE "C"
"""


def fetch_sequences(conn: psycopg.Connection) -> list[Sequence]:
    """Fetch all sequences from the database."""
    sequences = []
    with conn.cursor() as cur:
        cur.execute(QUERY)
        for row in cur.fetchall():
            sequences.append(
                Sequence(
                    oid=row[0],
                    schema_name=row[1],
                    sequence_name=row[2],
                    data_type=row[3],
                    start_value=row[4],
                    minimum_value=row[5],
                    maximum_value=row[6],
                    increment=row[7],
                    cache=row[8],
                    cycle=row[9],
                    owner=row[10],
                    comment=row[11],
                    acl=parse_acl(row[12]),
                )
            )
    return sequences
