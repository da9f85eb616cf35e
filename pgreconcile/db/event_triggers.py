"""Event trigger dataclass and query."""

from dataclasses import dataclass, field

import psycopg


@dataclass(frozen=True)
class EventTrigger:
    """Represents a database-wide event trigger."""

    trigger_name: str
    event: str
    # schema-qualified, already quoted
    function_name: str
    owner: str
    tags: tuple[str, ...] = ()
    # O (origin), D (disabled), R (replica) or A (always)
    enabled: str = "O"
    comment: str | None = None
    oid: int = field(default=0, compare=False, repr=False)

    @property
    def key(self) -> tuple[str, ...]:
        return (self.trigger_name,)

    def __str__(self) -> str:
        return f"EventTrigger({self.trigger_name})"


QUERY = """
SELECT
    e.oid,
    e.evtname,
    e.evtevent,
    e.evtfoid::regproc::text,
    pg_get_userbyid(e.evtowner),
    e.evttags,
    e.evtenabled,
    obj_description(e.oid, 'pg_event_trigger')
FROM pg_event_trigger e
WHERE NOT EXISTS (
    SELECT 1 FROM pg_depend d
    WHERE d.classid = 'pg_event_trigger'::regclass
      AND d.objid = e.oid
      AND d.deptype = 'e'
)
ORDER BY e.evtname COLLATE "C"
"""


def fetch_event_triggers(conn: psycopg.Connection) -> list[EventTrigger]:
    """Fetch all event triggers from the database."""
    triggers = []
    with conn.cursor() as cur:
        cur.execute(QUERY)
        for row in cur.fetchall():
            triggers.append(
                EventTrigger(
                    oid=row[0],
                    trigger_name=row[1],
                    event=row[2],
                    function_name=row[3],
                    owner=row[4],
                    tags=tuple(row[5] or ()),
                    enabled=row[6],
                    comment=row[7],
                )
            )
    return triggers
