"""Index dataclass and query for PostgreSQL index introspection."""

import re
from dataclasses import dataclass, field

import psycopg

from ..options import OptionSet, parse_options

# storage parameters are compared separately through the option set
_WITH_CLAUSE_RE = re.compile(r" WITH \([^)]*\)")


def strip_storage_parameters(definition: str) -> str:
    """Remove the ``WITH (...)`` clause from an index definition."""
    return _WITH_CLAUSE_RE.sub("", definition, count=1)


@dataclass(frozen=True)
class Index:
    """Represents an index not owned by a constraint."""

    schema_name: str
    index_name: str
    table_name: str
    # CREATE INDEX statement without storage parameters
    definition: str
    # complete CREATE INDEX statement as reported by pg_get_indexdef()
    statement: str = field(default="", compare=False)
    options: OptionSet | None = None
    tablespace: str | None = None
    comment: str | None = None
    oid: int = field(default=0, compare=False, repr=False)

    @property
    def key(self) -> tuple[str, ...]:
        return (self.schema_name, self.index_name)

    def __str__(self) -> str:
        return f"Index({self.schema_name}.{self.index_name})"


QUERY = """
SELECT
    i.oid,
    n.nspname,
    i.relname,
    t.relname,
    pg_get_indexdef(ix.indexrelid),
    i.reloptions,
    ts.spcname,
    obj_description(i.oid, 'pg_class')
FROM pg_index ix
JOIN pg_class i ON i.oid = ix.indexrelid
JOIN pg_class t ON t.oid = ix.indrelid
JOIN pg_namespace n ON n.oid = i.relnamespace
LEFT JOIN pg_tablespace ts ON ts.oid = i.reltablespace
WHERE t.relkind IN ('r', 'p', 'm')
  AND n.nspname !~ '^pg_'
  AND n.nspname <> 'information_schema'
  AND NOT EXISTS (
      SELECT 1 FROM pg_constraint con
      WHERE con.conindid = ix.indexrelid
        AND con.contype IN ('p', 'u', 'x')
  )
  AND NOT EXISTS (
      SELECT 1 FROM pg_depend d
      WHERE d.classid = 'pg_class'::regclass
        AND d.objid = t.oid
        AND d.deptype = 'e'
  )
ORDER BY n.nspname COLLATE "C", i.relname COLLATE "C"
"""


def fetch_indexes(conn: psycopg.Connection) -> list[Index]:
    """Fetch all indexes that are not created through a constraint."""
    indexes = []
    with conn.cursor() as cur:
        cur.execute(QUERY)
        for row in cur.fetchall():
            indexes.append(
                Index(
                    oid=row[0],
                    schema_name=row[1],
                    index_name=row[2],
                    table_name=row[3],
                    definition=strip_storage_parameters(row[4]),
                    statement=row[4],
                    options=parse_options(row[5]),
                    tablespace=row[6],
                    comment=row[7],
                )
            )
    return indexes
