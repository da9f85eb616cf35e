"""Trigger dataclass and query for PostgreSQL trigger introspection."""

from dataclasses import dataclass, field

import psycopg


@dataclass(frozen=True)
class Trigger:
    """Represents a user-defined table trigger."""

    schema_name: str
    table_name: str
    trigger_name: str
    # CREATE TRIGGER statement from pg_get_triggerdef()
    definition: str
    # O (origin), D (disabled), R (replica) or A (always)
    enabled: str = "O"
    comment: str | None = None
    oid: int = field(default=0, compare=False, repr=False)

    @property
    def key(self) -> tuple[str, ...]:
        return (self.schema_name, self.table_name, self.trigger_name)

    def __str__(self) -> str:
        return f"Trigger({self.schema_name}.{self.table_name}.{self.trigger_name})"


QUERY = """
SELECT
    t.oid,
    n.nspname,
    c.relname,
    t.tgname,
    pg_get_triggerdef(t.oid),
    t.tgenabled,
    obj_description(t.oid, 'pg_trigger')
FROM pg_trigger t
JOIN pg_class c ON c.oid = t.tgrelid
JOIN pg_namespace n ON n.oid = c.relnamespace
WHERE NOT t.tgisinternal
  AND n.nspname !~ '^pg_'
  AND n.nspname <> 'information_schema'
ORDER BY n.nspname COLLATE "C", c.relname COLLATE "C", t.tgname COLLATE "C"
"""


def fetch_triggers(conn: psycopg.Connection) -> list[Trigger]:
    """Fetch all non-internal triggers from the database."""
    triggers = []
    with conn.cursor() as cur:
        cur.execute(QUERY)
        for row in cur.fetchall():
            triggers.append(
                Trigger(
                    oid=row[0],
                    schema_name=row[1],
                    table_name=row[2],
                    trigger_name=row[3],
                    definition=row[4],
                    enabled=row[5],
                    comment=row[6],
                )
            )
    return triggers
