"""Materialized view dataclass and query for PostgreSQL introspection."""

from dataclasses import dataclass, field

import psycopg

from ..options import OptionSet, parse_options
from ..privileges import AclEntry, parse_acl


@dataclass(frozen=True)
class MaterializedView:
    """Represents a PostgreSQL materialized view."""

    schema_name: str
    view_name: str
    definition: str
    owner: str
    populated: bool = True
    options: OptionSet | None = None
    tablespace: str | None = None
    comment: str | None = None
    acl: tuple[AclEntry, ...] | None = None
    oid: int = field(default=0, compare=False, repr=False)

    @property
    def key(self) -> tuple[str, ...]:
        return (self.schema_name, self.view_name)

    def __str__(self) -> str:
        return f"MaterializedView({self.schema_name}.{self.view_name})"


QUERY = """
SELECT
    c.oid,
    n.nspname,
    c.relname,
    pg_get_viewdef(c.oid),
    pg_get_userbyid(c.relowner),
    c.relispopulated,
    c.reloptions,
    ts.spcname,
    obj_description(c.oid, 'pg_class'),
    c.relacl::text
FROM pg_class c
JOIN pg_namespace n ON n.oid = c.relnamespace
LEFT JOIN pg_tablespace ts ON ts.oid = c.reltablespace
WHERE c.relkind = 'm'
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


def fetch_materialized_views(conn: psycopg.Connection) -> list[MaterializedView]:
    """Fetch all materialized views from the database."""
    views = []
    with conn.cursor() as cur:
        cur.execute(QUERY)
        for row in cur.fetchall():
            views.append(
                MaterializedView(
                    oid=row[0],
                    schema_name=row[1],
                    view_name=row[2],
                    definition=row[3].strip().rstrip(";"),
                    owner=row[4],
                    populated=row[5],
                    options=parse_options(row[6]),
                    tablespace=row[7],
                    comment=row[8],
                    acl=parse_acl(row[9]),
                )
            )
    return views
