"""Extension dataclass and query for PostgreSQL extension introspection."""

from dataclasses import dataclass, field

import psycopg


@dataclass(frozen=True)
class Extension:
    """Represents an installed extension."""

    extension_name: str
    schema_name: str
    version: str
    relocatable: bool = False
    comment: str | None = None
    oid: int = field(default=0, compare=False, repr=False)

    @property
    def key(self) -> tuple[str, ...]:
        return (self.extension_name,)

    def __str__(self) -> str:
        return f"Extension({self.extension_name})"


QUERY = """
SELECT
    e.oid,
    e.extname,
    n.nspname,
    e.extversion,
    e.extrelocatable,
    obj_description(e.oid, 'pg_extension')
FROM pg_extension e
JOIN pg_namespace n ON n.oid = e.extnamespace
WHERE e.extname <> 'plpgsql'
ORDER BY e.extname COLLATE "C"
"""


def fetch_extensions(conn: psycopg.Connection) -> list[Extension]:
    """Fetch all extensions except the built-in plpgsql."""
    extensions = []
    with conn.cursor() as cur:
        cur.execute(QUERY)
        for row in cur.fetchall():
            extensions.append(
                Extension(
                    oid=row[0],
                    extension_name=row[1],
                    schema_name=row[2],
                    version=row[3],
                    relocatable=row[4],
                    comment=row[5],
                )
            )
    return extensions
