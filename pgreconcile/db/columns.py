"""Column dataclass and query for PostgreSQL column introspection."""

from collections import defaultdict
from dataclasses import dataclass, field

import psycopg


@dataclass(frozen=True)
class Column:
    """Represents a table column."""

    column_name: str
    data_type: str
    not_null: bool = False
    default: str | None = None
    collation: str | None = None
    # 'a' (always) or 'd' (by default) for identity columns, '' otherwise
    identity: str = ""
    # 's' for stored generated columns, '' otherwise
    generated: str = ""
    comment: str | None = None
    position: int = field(default=0, compare=False)

    @property
    def key(self) -> tuple[str, ...]:
        return (self.column_name,)

    def __str__(self) -> str:
        return f"Column({self.column_name})"


QUERY = """
SELECT
    a.attrelid,
    a.attname,
    format_type(a.atttypid, a.atttypmod),
    a.attnotnull,
    pg_get_expr(ad.adbin, ad.adrelid),
    CASE WHEN a.attcollation <> 0 AND a.attcollation <> t.typcollation
         THEN (SELECT quote_ident(cn.nspname) || '.' || quote_ident(co.collname)
               FROM pg_collation co JOIN pg_namespace cn ON cn.oid = co.collnamespace
               WHERE co.oid = a.attcollation)
    END,
    a.attidentity,
    a.attgenerated,
    col_description(a.attrelid, a.attnum),
    a.attnum
FROM pg_attribute a
JOIN pg_class c ON c.oid = a.attrelid
JOIN pg_namespace n ON n.oid = c.relnamespace
JOIN pg_type t ON t.oid = a.atttypid
LEFT JOIN pg_attrdef ad ON ad.adrelid = a.attrelid AND ad.adnum = a.attnum
WHERE c.relkind IN ('r', 'p')
  AND a.attnum > 0
  AND NOT a.attisdropped
  AND n.nspname !~ '^pg_'
  AND n.nspname <> 'information_schema'
ORDER BY a.attrelid, a.attnum
"""


def fetch_columns(conn: psycopg.Connection) -> dict[int, list[Column]]:
    """Fetch columns of all user tables, grouped by table oid in attnum order."""
    columns: dict[int, list[Column]] = defaultdict(list)
    with conn.cursor() as cur:
        cur.execute(QUERY)
        for row in cur.fetchall():
            columns[row[0]].append(
                Column(
                    column_name=row[1],
                    data_type=row[2],
                    not_null=row[3],
                    default=row[4],
                    collation=row[5],
                    identity=row[6],
                    generated=row[7],
                    comment=row[8],
                    position=row[9],
                )
            )
    return columns
