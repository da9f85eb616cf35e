"""Schema dataclass and query for PostgreSQL schema introspection."""

from dataclasses import dataclass, field

import psycopg

from ..privileges import AclEntry, parse_acl


@dataclass(frozen=True)
class Schema:
    """Represents a PostgreSQL schema (namespace)."""

    schema_name: str
    owner: str
    comment: str | None = None
    acl: tuple[AclEntry, ...] | None = None
    oid: int = field(default=0, compare=False, repr=False)

    @property
    def key(self) -> tuple[str, ...]:
        """Sort key for comparison."""
        return (self.schema_name,)

    def __str__(self) -> str:
        return f"Schema({self.schema_name})"


QUERY = """
SELECT
    n.oid,
    n.nspname AS schema_name,
    pg_get_userbyid(n.nspowner) AS owner,
    obj_description(n.oid, 'pg_namespace') AS comment,
    n.nspacl::text AS acl
FROM pg_namespace n
WHERE n.nspname !~ '^pg_'
  AND n.nspname <> 'information_schema'
  AND NOT EXISTS (
      SELECT 1 FROM pg_depend d
      WHERE d.classid = 'pg_namespace'::regclass
        AND d.objid = n.oid
        AND d.deptype = 'e'
  )
ORDER BY n.nspname COLLATE "C"
"""


def fetch_schemas(conn: psycopg.Connection) -> list[Schema]:
    """Fetch all user schemas from the database."""
    schemas = []
    with conn.cursor() as cur:
        cur.execute(QUERY)
        for row in cur.fetchall():
            schemas.append(
                Schema(
                    oid=row[0],
                    schema_name=row[1],
                    owner=row[2],
                    comment=row[3],
                    acl=parse_acl(row[4]),
                )
            )
    return schemas
