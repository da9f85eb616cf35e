"""Base, enum, range and composite type dataclasses and queries."""

from collections import defaultdict
from dataclasses import dataclass, field

import psycopg

from ..privileges import AclEntry, parse_acl


@dataclass(frozen=True)
class BaseType:
    """Represents a base type built from C input/output functions.

    Support functions are regproc names; unset ones are None.
    """

    schema_name: str
    type_name: str
    owner: str
    input: str
    output: str
    receive: str | None = None
    send: str | None = None
    typmod_in: str | None = None
    typmod_out: str | None = None
    analyze: str | None = None
    # pg_type.typlen; negative means variable length
    length: int = -1
    by_value: bool = False
    alignment: str = "i"
    storage: str = "p"
    category: str = "U"
    preferred: bool = False
    default: str | None = None
    delimiter: str = ","
    collatable: bool = False
    comment: str | None = None
    acl: tuple[AclEntry, ...] | None = None
    oid: int = field(default=0, compare=False, repr=False)

    @property
    def key(self) -> tuple[str, ...]:
        return (self.schema_name, self.type_name)

    def __str__(self) -> str:
        return f"BaseType({self.schema_name}.{self.type_name})"


@dataclass(frozen=True)
class EnumType:
    """Represents an enum type; labels are in sort order."""

    schema_name: str
    type_name: str
    labels: tuple[str, ...]
    owner: str
    comment: str | None = None
    acl: tuple[AclEntry, ...] | None = None
    oid: int = field(default=0, compare=False, repr=False)

    @property
    def key(self) -> tuple[str, ...]:
        return (self.schema_name, self.type_name)

    def __str__(self) -> str:
        return f"EnumType({self.schema_name}.{self.type_name})"


@dataclass(frozen=True)
class RangeType:
    """Represents a range type over a subtype."""

    schema_name: str
    type_name: str
    subtype: str
    owner: str
    # qualified operator class; None when it is the subtype's default
    subtype_opclass: str | None = None
    collation: str | None = None
    canonical: str | None = None
    subtype_diff: str | None = None
    comment: str | None = None
    acl: tuple[AclEntry, ...] | None = None
    oid: int = field(default=0, compare=False, repr=False)

    @property
    def key(self) -> tuple[str, ...]:
        return (self.schema_name, self.type_name)

    def __str__(self) -> str:
        return f"RangeType({self.schema_name}.{self.type_name})"


@dataclass(frozen=True)
class TypeAttribute:
    """One attribute of a composite type."""

    attribute_name: str
    data_type: str
    collation: str | None = None

    @property
    def key(self) -> tuple[str, ...]:
        return (self.attribute_name,)


@dataclass(frozen=True)
class CompositeType:
    """Represents a stand-alone composite type (CREATE TYPE ... AS)."""

    schema_name: str
    type_name: str
    attributes: tuple[TypeAttribute, ...]
    owner: str
    comment: str | None = None
    acl: tuple[AclEntry, ...] | None = None
    oid: int = field(default=0, compare=False, repr=False)

    @property
    def key(self) -> tuple[str, ...]:
        return (self.schema_name, self.type_name)

    def __str__(self) -> str:
        return f"CompositeType({self.schema_name}.{self.type_name})"


_USER_TYPES = """
  AND n.nspname !~ '^pg_'
  AND n.nspname <> 'information_schema'
  AND NOT EXISTS (
      SELECT 1 FROM pg_depend d
      WHERE d.classid = 'pg_type'::regclass
        AND d.objid = t.oid
        AND d.deptype = 'e'
  )
"""

# array types and the row types of tables are created implicitly
BASE_QUERY = f"""
SELECT
    t.oid,
    n.nspname,
    t.typname,
    pg_get_userbyid(t.typowner),
    t.typinput::text,
    t.typoutput::text,
    NULLIF(t.typreceive::text, '-'),
    NULLIF(t.typsend::text, '-'),
    NULLIF(t.typmodin::text, '-'),
    NULLIF(t.typmodout::text, '-'),
    NULLIF(t.typanalyze::text, '-'),
    t.typlen,
    t.typbyval,
    t.typalign,
    t.typstorage,
    t.typcategory,
    t.typispreferred,
    t.typdefault,
    t.typdelim,
    t.typcollation <> 0,
    obj_description(t.oid, 'pg_type'),
    t.typacl::text
FROM pg_type t
JOIN pg_namespace n ON n.oid = t.typnamespace
WHERE t.typtype = 'b'
  AND t.typrelid = 0
  AND NOT EXISTS (
      SELECT 1 FROM pg_type el
      WHERE el.oid = t.typelem AND el.typarray = t.oid
  )
{_USER_TYPES}
ORDER BY n.nspname COLLATE "C", t.typname COLLATE "C"
"""

RANGE_QUERY = f"""
SELECT
    t.oid,
    n.nspname,
    t.typname,
    format_type(r.rngsubtype, NULL),
    pg_get_userbyid(t.typowner),
    CASE WHEN NOT o.opcdefault
         THEN quote_ident(opcn.nspname) || '.' || quote_ident(o.opcname)
    END,
    CASE WHEN r.rngcollation <> 0 AND r.rngcollation <> st.typcollation
         THEN quote_ident(cn.nspname) || '.' || quote_ident(co.collname)
    END,
    NULLIF(r.rngcanonical::text, '-'),
    NULLIF(r.rngsubdiff::text, '-'),
    obj_description(t.oid, 'pg_type'),
    t.typacl::text
FROM pg_type t
JOIN pg_namespace n ON n.oid = t.typnamespace
JOIN pg_range r ON r.rngtypid = t.oid
JOIN pg_type st ON st.oid = r.rngsubtype
JOIN pg_opclass o ON o.oid = r.rngsubopc
JOIN pg_namespace opcn ON opcn.oid = o.opcnamespace
LEFT JOIN pg_collation co ON co.oid = r.rngcollation
LEFT JOIN pg_namespace cn ON cn.oid = co.collnamespace
WHERE t.typtype = 'r'
{_USER_TYPES}
ORDER BY n.nspname COLLATE "C", t.typname COLLATE "C"
"""

ENUM_QUERY = f"""
SELECT
    t.oid,
    n.nspname,
    t.typname,
    array_agg(e.enumlabel::text ORDER BY e.enumsortorder),
    pg_get_userbyid(t.typowner),
    obj_description(t.oid, 'pg_type'),
    t.typacl::text
FROM pg_type t
JOIN pg_namespace n ON n.oid = t.typnamespace
JOIN pg_enum e ON e.enumtypid = t.oid
WHERE t.typtype = 'e'
{_USER_TYPES}
GROUP BY t.oid, n.nspname, t.typname, t.typowner, t.typacl
ORDER BY n.nspname COLLATE "C", t.typname COLLATE "C"
"""

COMPOSITE_QUERY = f"""
SELECT
    t.oid,
    n.nspname,
    t.typname,
    pg_get_userbyid(t.typowner),
    obj_description(t.oid, 'pg_type'),
    t.typacl::text,
    t.typrelid
FROM pg_type t
JOIN pg_namespace n ON n.oid = t.typnamespace
JOIN pg_class c ON c.oid = t.typrelid
WHERE t.typtype = 'c'
  AND c.relkind = 'c'
{_USER_TYPES}
ORDER BY n.nspname COLLATE "C", t.typname COLLATE "C"
"""

ATTRIBUTES_QUERY = """
SELECT
    a.attrelid,
    a.attname,
    format_type(a.atttypid, a.atttypmod),
    CASE WHEN a.attcollation <> 0 AND a.attcollation <> at.typcollation
         THEN (SELECT quote_ident(cn.nspname) || '.' || quote_ident(co.collname)
               FROM pg_collation co JOIN pg_namespace cn ON cn.oid = co.collnamespace
               WHERE co.oid = a.attcollation)
    END
FROM pg_attribute a
JOIN pg_class c ON c.oid = a.attrelid
JOIN pg_type at ON at.oid = a.atttypid
WHERE c.relkind = 'c'
  AND a.attnum > 0
  AND NOT a.attisdropped
ORDER BY a.attrelid, a.attnum
"""


def fetch_enum_types(conn: psycopg.Connection) -> list[EnumType]:
    """Fetch enum types and their labels."""
    types = []
    with conn.cursor() as cur:
        cur.execute(ENUM_QUERY)
        for row in cur.fetchall():
            types.append(
                EnumType(
                    oid=row[0],
                    schema_name=row[1],
                    type_name=row[2],
                    labels=tuple(row[3]),
                    owner=row[4],
                    comment=row[5],
                    acl=parse_acl(row[6]),
                )
            )
    return types


def fetch_composite_types(conn: psycopg.Connection) -> list[CompositeType]:
    """Fetch composite types; attributes keep their declared order."""
    attributes: dict[int, list[TypeAttribute]] = defaultdict(list)
    with conn.cursor() as cur:
        cur.execute(ATTRIBUTES_QUERY)
        for row in cur.fetchall():
            attributes[row[0]].append(TypeAttribute(row[1], row[2], row[3]))

    types = []
    with conn.cursor() as cur:
        cur.execute(COMPOSITE_QUERY)
        for row in cur.fetchall():
            types.append(
                CompositeType(
                    oid=row[0],
                    schema_name=row[1],
                    type_name=row[2],
                    attributes=tuple(attributes.get(row[6], ())),
                    owner=row[3],
                    comment=row[4],
                    acl=parse_acl(row[5]),
                )
            )
    return types


def fetch_base_types(conn: psycopg.Connection) -> list[BaseType]:
    """Fetch user-defined base types."""
    types = []
    with conn.cursor() as cur:
        cur.execute(BASE_QUERY)
        for row in cur.fetchall():
            types.append(
                BaseType(
                    oid=row[0],
                    schema_name=row[1],
                    type_name=row[2],
                    owner=row[3],
                    input=row[4],
                    output=row[5],
                    receive=row[6],
                    send=row[7],
                    typmod_in=row[8],
                    typmod_out=row[9],
                    analyze=row[10],
                    length=row[11],
                    by_value=row[12],
                    alignment=row[13],
                    storage=row[14],
                    category=row[15],
                    preferred=row[16],
                    default=row[17],
                    delimiter=row[18],
                    collatable=row[19],
                    comment=row[20],
                    acl=parse_acl(row[21]),
                )
            )
    return types


def fetch_range_types(conn: psycopg.Connection) -> list[RangeType]:
    """Fetch range types."""
    types = []
    with conn.cursor() as cur:
        cur.execute(RANGE_QUERY)
        for row in cur.fetchall():
            types.append(
                RangeType(
                    oid=row[0],
                    schema_name=row[1],
                    type_name=row[2],
                    subtype=row[3],
                    owner=row[4],
                    subtype_opclass=row[5],
                    collation=row[6],
                    canonical=row[7],
                    subtype_diff=row[8],
                    comment=row[9],
                    acl=parse_acl(row[10]),
                )
            )
    return types
