"""PostgreSQL keyword table used to decide identifier quoting.

Only keywords that are not UNRESERVED are listed: an unreserved keyword is a
valid bare identifier, so it behaves exactly like an unknown word. The table
is pinned to the PostgreSQL release in KEYWORDS_VERSION; newer servers may
reserve words that are missing here.
"""

from enum import Enum


class KeywordCategory(Enum):
    """Grammar category of a keyword (see src/include/parser/kwlist.h)."""

    UNRESERVED = "unreserved"
    COL_NAME = "col_name"
    TYPE_FUNC_NAME = "type_func_name"
    RESERVED = "reserved"


# server_version_num of the release the table was taken from
KEYWORDS_VERSION = 170000

_RESERVED = """
all analyse analyze and any array as asc asymmetric both case cast check
collate column constraint create current_catalog current_date current_role
current_time current_timestamp current_user default deferrable desc distinct
do else end except false fetch for foreign from grant group having in
initially intersect into lateral leading limit localtime localtimestamp not
null offset on only or order placing primary references returning select
session_user some symmetric system_user table then to trailing true union
unique user using variadic when where window with
"""

_TYPE_FUNC_NAME = """
authorization binary collation concurrently cross current_schema freeze full
ilike inner is isnull join left like natural notnull outer overlaps right
similar tablesample verbose
"""

_COL_NAME = """
between bigint bit boolean char character coalesce dec decimal exists extract
float greatest grouping inout int integer interval json json_array
json_arrayagg json_exists json_object json_objectagg json_query json_scalar
json_serialize json_table json_value least merge_action national nchar none
normalize nullif numeric out overlay position precision real row setof
smallint substring time timestamp treat trim values varchar xmlattributes
xmlconcat xmlelement xmlexists xmlforest xmlnamespaces xmlparse xmlpi xmlroot
xmlserialize xmltable
"""

KEYWORDS: dict[str, KeywordCategory] = {
    **{word: KeywordCategory.COL_NAME for word in _COL_NAME.split()},
    **{word: KeywordCategory.TYPE_FUNC_NAME for word in _TYPE_FUNC_NAME.split()},
    **{word: KeywordCategory.RESERVED for word in _RESERVED.split()},
}


def lookup_keyword(word: str) -> KeywordCategory | None:
    """Return the category of a keyword, or None if it is not a keyword.

    The lookup downcases ASCII letters only, like the server's scanner.
    """
    folded = "".join(
        chr(ord(ch) + 32) if "A" <= ch <= "Z" else ch for ch in word
    )
    return KEYWORDS.get(folded)
