"""Rewrite rule dataclass and query."""

from dataclasses import dataclass, field

import psycopg


@dataclass(frozen=True)
class Rule:
    """Represents a rewrite rule other than a view's _RETURN rule."""

    schema_name: str
    table_name: str
    rule_name: str
    # CREATE RULE statement from pg_get_ruledef(), without trailing semicolon
    definition: str
    comment: str | None = None
    oid: int = field(default=0, compare=False, repr=False)

    @property
    def key(self) -> tuple[str, ...]:
        return (self.schema_name, self.table_name, self.rule_name)

    def __str__(self) -> str:
        return f"Rule({self.schema_name}.{self.table_name}.{self.rule_name})"


QUERY = """
SELECT
    r.oid,
    n.nspname,
    c.relname,
    r.rulename,
    pg_get_ruledef(r.oid),
    obj_description(r.oid, 'pg_rewrite')
FROM pg_rewrite r
JOIN pg_class c ON c.oid = r.ev_class
JOIN pg_namespace n ON n.oid = c.relnamespace
WHERE r.rulename <> '_RETURN'
  AND n.nspname !~ '^pg_'
  AND n.nspname <> 'information_schema'
ORDER BY n.nspname COLLATE "C", c.relname COLLATE "C", r.rulename COLLATE "C"
"""


def fetch_rules(conn: psycopg.Connection) -> list[Rule]:
    """Fetch all rewrite rules from the database."""
    rules = []
    with conn.cursor() as cur:
        cur.execute(QUERY)
        for row in cur.fetchall():
            rules.append(
                Rule(
                    oid=row[0],
                    schema_name=row[1],
                    table_name=row[2],
                    rule_name=row[3],
                    definition=row[4].rstrip().rstrip(";"),
                    comment=row[5],
                )
            )
    return rules
