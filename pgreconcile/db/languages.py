"""Procedural language dataclass and query."""

from dataclasses import dataclass, field

import psycopg

from ..privileges import AclEntry, parse_acl


@dataclass(frozen=True)
class Language:
    """Represents a procedural language not installed by an extension."""

    language_name: str
    trusted: bool
    call_handler: str | None
    inline_handler: str | None
    validator: str | None
    owner: str
    comment: str | None = None
    acl: tuple[AclEntry, ...] | None = None
    oid: int = field(default=0, compare=False, repr=False)

    @property
    def key(self) -> tuple[str, ...]:
        return (self.language_name,)

    def __str__(self) -> str:
        return f"Language({self.language_name})"


QUERY = """
SELECT
    l.oid,
    l.lanname,
    l.lanpltrusted,
    NULLIF(l.lanplcallfoid, 0)::regproc::text,
    NULLIF(l.laninline, 0)::regproc::text,
    NULLIF(l.lanvalidator, 0)::regproc::text,
    pg_get_userbyid(l.lanowner),
    obj_description(l.oid, 'pg_language'),
    l.lanacl::text
FROM pg_language l
WHERE l.lanispl
  AND NOT EXISTS (
      SELECT 1 FROM pg_depend d
      WHERE d.classid = 'pg_language'::regclass
        AND d.objid = l.oid
        AND d.deptype = 'e'
  )
ORDER BY l.lanname COLLATE "C"
"""


def fetch_languages(conn: psycopg.Connection) -> list[Language]:
    """Fetch procedural languages."""
    languages = []
    with conn.cursor() as cur:
        cur.execute(QUERY)
        for row in cur.fetchall():
            languages.append(
                Language(
                    oid=row[0],
                    language_name=row[1],
                    trusted=row[2],
                    call_handler=row[3],
                    inline_handler=row[4],
                    validator=row[5],
                    owner=row[6],
                    comment=row[7],
                    acl=parse_acl(row[8]),
                )
            )
    return languages
