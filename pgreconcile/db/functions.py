"""Function/procedure dataclass and query for PostgreSQL introspection."""

from dataclasses import dataclass, field

import psycopg

from ..options import OptionSet, parse_options
from ..privileges import AclEntry, parse_acl


@dataclass(frozen=True)
class Function:
    """Represents a PostgreSQL function or procedure."""

    schema_name: str
    function_name: str
    # identity arguments, used to tell overloads apart
    arguments: str
    kind: str  # 'function' or 'procedure'
    result: str | None
    language: str
    source: str
    # complete CREATE OR REPLACE statement from pg_get_functiondef()
    definition: str
    volatility: str = "volatile"
    strict: bool = False
    security_definer: bool = False
    leakproof: bool = False
    parallel: str = "unsafe"
    cost: float = 100.0
    rows: float = 0.0
    options: OptionSet | None = None
    owner: str = ""
    comment: str | None = None
    acl: tuple[AclEntry, ...] | None = None
    oid: int = field(default=0, compare=False, repr=False)

    @property
    def key(self) -> tuple[str, ...]:
        return (self.schema_name, self.function_name, self.arguments)

    @property
    def signature(self) -> str:
        return f"{self.function_name}({self.arguments})"

    def __str__(self) -> str:
        return f"Function({self.schema_name}.{self.signature})"


QUERY = """
SELECT
    p.oid,
    n.nspname,
    p.proname,
    pg_get_function_identity_arguments(p.oid),
    CASE p.prokind WHEN 'p' THEN 'procedure' ELSE 'function' END,
    pg_get_function_result(p.oid),
    l.lanname,
    p.prosrc,
    pg_get_functiondef(p.oid),
    CASE p.provolatile
        WHEN 'i' THEN 'immutable'
        WHEN 's' THEN 'stable'
        ELSE 'volatile'
    END,
    p.proisstrict,
    p.prosecdef,
    p.proleakproof,
    CASE p.proparallel
        WHEN 's' THEN 'safe'
        WHEN 'r' THEN 'restricted'
        ELSE 'unsafe'
    END,
    p.procost,
    p.prorows,
    p.proconfig,
    pg_get_userbyid(p.proowner),
    obj_description(p.oid, 'pg_proc'),
    p.proacl::text
FROM pg_proc p
JOIN pg_namespace n ON n.oid = p.pronamespace
JOIN pg_language l ON l.oid = p.prolang
WHERE p.prokind IN ('f', 'p')
  AND n.nspname !~ '^pg_'
  AND n.nspname <> 'information_schema'
  AND NOT EXISTS (
      SELECT 1 FROM pg_depend d
      WHERE d.classid = 'pg_proc'::regclass
        AND d.objid = p.oid
        AND d.deptype = 'e'
  )
ORDER BY n.nspname COLLATE "C", p.proname COLLATE "C",
         pg_get_function_identity_arguments(p.oid) COLLATE "C"
"""


def fetch_functions(conn: psycopg.Connection) -> list[Function]:
    """Fetch all functions and procedures from the database."""
    functions = []
    with conn.cursor() as cur:
        cur.execute(QUERY)
        for row in cur.fetchall():
            functions.append(
                Function(
                    oid=row[0],
                    schema_name=row[1],
                    function_name=row[2],
                    arguments=row[3],
                    kind=row[4],
                    result=row[5],
                    language=row[6],
                    source=row[7],
                    definition=row[8],
                    volatility=row[9],
                    strict=row[10],
                    security_definer=row[11],
                    leakproof=row[12],
                    parallel=row[13],
                    cost=float(row[14]),
                    rows=float(row[15]),
                    options=parse_options(row[16]),
                    owner=row[17],
                    comment=row[18],
                    acl=parse_acl(row[19]),
                )
            )
    return functions
