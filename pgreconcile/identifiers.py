"""Identifier quoting for generated SQL."""

import re

from .keywords import KeywordCategory, lookup_keyword

_PLAIN_IDENTIFIER = re.compile(r"[a-z_][a-z0-9_]*")


def needs_quoting(name: str) -> bool:
    """Check if a name must be double-quoted to survive the SQL parser."""
    if not _PLAIN_IDENTIFIER.fullmatch(name):
        return True
    category = lookup_keyword(name)
    return category is not None and category != KeywordCategory.UNRESERVED


def format_identifier(name: str) -> str:
    """Return name as-is or quoted, doubling any embedded quote."""
    if not needs_quoting(name):
        return name
    escaped = name.replace('"', '""')
    return f'"{escaped}"'


def qualified_name(schema_name: str, object_name: str) -> str:
    """Return schema.object with both parts formatted."""
    return f"{format_identifier(schema_name)}.{format_identifier(object_name)}"


def format_role(role: str) -> str:
    """Format a role name for GRANT/REVOKE/OWNER TO. Empty role is PUBLIC."""
    if role == "":
        return "PUBLIC"
    return format_identifier(role)


def quote_literal(value: str) -> str:
    """Return value as a SQL string literal."""
    escaped = value.replace("'", "''")
    if "\\" in value:
        return "E'" + escaped.replace("\\", "\\\\") + "'"
    return f"'{escaped}'"
