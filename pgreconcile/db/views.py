"""View dataclass and query for PostgreSQL view introspection."""

from dataclasses import dataclass, field

import psycopg

from ..options import OptionSet, parse_options
from ..privileges import AclEntry, parse_acl


@dataclass(frozen=True)
class View:
    """Represents a PostgreSQL view.

    ``options`` holds the view's reloptions, including ``check_option``
    and ``security_barrier``.
    """

    schema_name: str
    view_name: str
    definition: str
    owner: str
    options: OptionSet | None = None
    comment: str | None = None
    acl: tuple[AclEntry, ...] | None = None
    oid: int = field(default=0, compare=False, repr=False)

    @property
    def key(self) -> tuple[str, ...]:
        return (self.schema_name, self.view_name)

    def __str__(self) -> str:
        return f"View({self.schema_name}.{self.view_name})"


QUERY = """
SELECT
    c.oid,
    n.nspname,
    c.relname,
    pg_get_viewdef(c.oid),
    pg_get_userbyid(c.relowner),
    c.reloptions,
    obj_description(c.oid, 'pg_class'),
    c.relacl::text
FROM pg_class c
JOIN pg_namespace n ON n.oid = c.relnamespace
WHERE c.relkind = 'v'
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


def fetch_views(conn: psycopg.Connection) -> list[View]:
    """Fetch all views from the database."""
    views = []
    with conn.cursor() as cur:
        cur.execute(QUERY)
        for row in cur.fetchall():
            views.append(
                View(
                    oid=row[0],
                    schema_name=row[1],
                    view_name=row[2],
                    definition=row[3].strip().rstrip(";"),
                    owner=row[4],
                    options=parse_options(row[5]),
                    comment=row[6],
                    acl=parse_acl(row[7]),
                )
            )
    return views
