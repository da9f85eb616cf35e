"""Table dataclass and query for PostgreSQL table introspection."""

from dataclasses import dataclass, field

import psycopg

from ..options import OptionSet, parse_options
from ..privileges import AclEntry, parse_acl
from .columns import Column, fetch_columns
from .constraints import Constraint, fetch_constraints


@dataclass(frozen=True)
class Table:
    """Represents a PostgreSQL table with its columns and constraints."""

    schema_name: str
    table_name: str
    owner: str
    # in attnum order
    columns: tuple[Column, ...] = ()
    # sorted by name
    constraints: tuple[Constraint, ...] = ()
    unlogged: bool = False
    partition_key: str | None = None
    options: OptionSet | None = None
    tablespace: str | None = None
    comment: str | None = None
    acl: tuple[AclEntry, ...] | None = None
    oid: int = field(default=0, compare=False, repr=False)

    @property
    def key(self) -> tuple[str, ...]:
        return (self.schema_name, self.table_name)

    def __str__(self) -> str:
        return f"Table({self.schema_name}.{self.table_name})"


QUERY = """
SELECT
    c.oid,
    n.nspname,
    c.relname,
    pg_get_userbyid(c.relowner),
    c.relpersistence = 'u',
    CASE WHEN c.relkind = 'p' THEN pg_get_partkeydef(c.oid) END,
    c.reloptions,
    ts.spcname,
    obj_description(c.oid, 'pg_class'),
    c.relacl::text
FROM pg_class c
JOIN pg_namespace n ON n.oid = c.relnamespace
LEFT JOIN pg_tablespace ts ON ts.oid = c.reltablespace
WHERE c.relkind IN ('r', 'p')
  AND NOT c.relispartition
  AND n.nspname !~ '^pg_'
  AND n.nspname <> 'information_schema'
  AND NOT EXISTS (
      SELECT 1 FROM pg_depend d
      WHERE d.classid = 'pg_class'::regclass
        AND d.objid = c.oid
        AND d.deptype = 'e'
  )
ORDER BY n.nspname COLLATE "C", c.relname COLLATE "C"
"""


def fetch_tables(conn: psycopg.Connection) -> list[Table]:
    """Fetch all ordinary and partitioned tables with columns and constraints."""
    columns = fetch_columns(conn)
    constraints = fetch_constraints(conn)
    tables = []
    with conn.cursor() as cur:
        cur.execute(QUERY)
        for row in cur.fetchall():
            tables.append(
                Table(
                    oid=row[0],
                    schema_name=row[1],
                    table_name=row[2],
                    owner=row[3],
                    columns=tuple(columns.get(row[0], ())),
                    constraints=tuple(constraints.get(row[0], ())),
                    unlogged=row[4],
                    partition_key=row[5],
                    options=parse_options(row[6]),
                    tablespace=row[7],
                    comment=row[8],
                    acl=parse_acl(row[9]),
                )
            )
    return tables
