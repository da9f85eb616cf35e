"""Domain dataclasses and queries for PostgreSQL domain introspection."""

from collections import defaultdict
from dataclasses import dataclass, field

import psycopg

from ..privileges import AclEntry, parse_acl


@dataclass(frozen=True)
class DomainConstraint:
    """A CHECK constraint attached to a domain."""

    constraint_name: str
    definition: str
    validated: bool = True

    @property
    def key(self) -> tuple[str, ...]:
        return (self.constraint_name,)


@dataclass(frozen=True)
class Domain:
    """Represents a PostgreSQL domain."""

    schema_name: str
    domain_name: str
    data_type: str
    owner: str
    not_null: bool = False
    collation: str | None = None
    default: str | None = None
    constraints: tuple[DomainConstraint, ...] = ()
    comment: str | None = None
    acl: tuple[AclEntry, ...] | None = None
    oid: int = field(default=0, compare=False, repr=False)

    @property
    def key(self) -> tuple[str, ...]:
        return (self.schema_name, self.domain_name)

    def __str__(self) -> str:
        return f"Domain({self.schema_name}.{self.domain_name})"


QUERY = """
SELECT
    t.oid,
    n.nspname,
    t.typname,
    format_type(t.typbasetype, t.typtypmod),
    pg_get_userbyid(t.typowner),
    t.typnotnull,
    CASE WHEN t.typcollation <> 0 AND t.typcollation <> bt.typcollation
         THEN (SELECT quote_ident(cn.nspname) || '.' || quote_ident(co.collname)
               FROM pg_collation co JOIN pg_namespace cn ON cn.oid = co.collnamespace
               WHERE co.oid = t.typcollation)
    END,
    t.typdefault,
    obj_description(t.oid, 'pg_type'),
    t.typacl::text
FROM pg_type t
JOIN pg_namespace n ON n.oid = t.typnamespace
JOIN pg_type bt ON bt.oid = t.typbasetype
WHERE t.typtype = 'd'
  AND n.nspname !~ '^pg_'
  AND n.nspname <> 'information_schema'
  AND NOT EXISTS (
      SELECT 1 FROM pg_depend d
      WHERE d.classid = 'pg_type'::regclass
        AND d.objid = t.oid
        AND d.deptype = 'e'
  )
ORDER BY n.nspname COLLATE "C", t.typname COLLATE "C"
"""

CONSTRAINTS_QUERY = """
SELECT
    c.contypid,
    c.conname,
    pg_get_constraintdef(c.oid),
    c.convalidated
FROM pg_constraint c
JOIN pg_type t ON t.oid = c.contypid
JOIN pg_namespace n ON n.oid = t.typnamespace
WHERE c.contypid <> 0
  AND c.contype = 'c'
  AND n.nspname !~ '^pg_'
  AND n.nspname <> 'information_schema'
ORDER BY c.contypid, c.conname COLLATE "C"
"""


def fetch_domain_constraints(conn: psycopg.Connection) -> dict[int, list[DomainConstraint]]:
    """Fetch CHECK constraints of all domains, grouped by domain oid."""
    constraints: dict[int, list[DomainConstraint]] = defaultdict(list)
    with conn.cursor() as cur:
        cur.execute(CONSTRAINTS_QUERY)
        for row in cur.fetchall():
            constraints[row[0]].append(
                DomainConstraint(constraint_name=row[1], definition=row[2], validated=row[3])
            )
    return constraints


def fetch_domains(conn: psycopg.Connection) -> list[Domain]:
    """Fetch all domains with their constraints."""
    constraints = fetch_domain_constraints(conn)
    domains = []
    with conn.cursor() as cur:
        cur.execute(QUERY)
        for row in cur.fetchall():
            domains.append(
                Domain(
                    oid=row[0],
                    schema_name=row[1],
                    domain_name=row[2],
                    data_type=row[3],
                    owner=row[4],
                    not_null=row[5],
                    collation=row[6],
                    default=row[7],
                    constraints=tuple(constraints.get(row[0], ())),
                    comment=row[8],
                    acl=parse_acl(row[9]),
                )
            )
    return domains
