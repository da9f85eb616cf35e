"""CREATE/ALTER/DROP FUNCTION and PROCEDURE statements."""

import logging

from ..config import ReconcileConfig
from ..db.functions import Function
from ..identifiers import format_identifier, qualified_name, quote_literal
from ..options import OptionEntry
from ..privileges import ObjectType
from .common import (
    ObjectDelta,
    alter_comment,
    alter_owner,
    alter_privileges,
    create_comment,
    create_owner,
    create_privileges,
)

logger = logging.getLogger(__name__)

# settings whose values are lists and must not be quoted as one literal
_LIST_SETTINGS = {"datestyle", "search_path"}

# attributes that CREATE OR REPLACE rewrites in one go
_BODY_ATTRIBUTES = (
    "kind",
    "language",
    "source",
    "volatility",
    "strict",
    "security_definer",
    "leakproof",
    "parallel",
    "cost",
    "rows",
)


def _object_type(function: Function) -> ObjectType:
    if function.kind == "procedure":
        return ObjectType.PROCEDURE
    return ObjectType.FUNCTION


def signature(function: Function) -> str:
    """schema.name(arguments), as used after ALTER/DROP/COMMENT ON."""
    name = qualified_name(function.schema_name, function.function_name)
    return f"{name}({function.arguments})"


def _set_option(entry: OptionEntry) -> str:
    key = format_identifier(entry.key)
    if entry.value is None:
        return f"SET {key} TO DEFAULT"
    if entry.key.lower() in _LIST_SETTINGS:
        return f"SET {key} TO {entry.value}"
    return f"SET {key} TO {quote_literal(entry.value)}"


def create(function: Function, config: ReconcileConfig) -> list[str]:
    name = signature(function)
    object_type = _object_type(function).value
    statements = [function.definition.rstrip() + ";"]
    statements += create_comment(object_type, name, function.comment, config)
    statements += create_owner(object_type, name, function.owner, config)
    statements += create_privileges(_object_type(function), name, function.acl, config)
    return statements


def drop(function: Function, config: ReconcileConfig) -> list[str]:
    return [f"DROP {_object_type(function).value} {signature(function)};"]


def alter(source: Function, target: Function, delta: ObjectDelta, config: ReconcileConfig) -> list[str]:
    """Replace, recreate or alter a function.

    A different result type cannot be changed by CREATE OR REPLACE, so the
    function is dropped and created again; both statements go to the pre
    buffer so the replacement is in place before dependent objects.
    """
    name = signature(target)
    object_type = _object_type(target).value
    statements = []

    if source.result != target.result:
        logger.debug(
            "function %s: result type changed (%s -> %s)", name, source.result, target.result
        )
        return drop(source, config) + create(target, config)

    replaced = any(
        getattr(source, attribute) != getattr(target, attribute)
        for attribute in _BODY_ATTRIBUTES
    )
    if replaced:
        # the replacement also carries the complete SET list
        statements.append(target.definition.rstrip() + ";")
    else:
        prefix = f"ALTER {object_type} {name}"
        if delta.options.reset_all:
            statements.append(f"{prefix} RESET ALL;")
        else:
            for key in delta.options.to_reset:
                statements.append(f"{prefix} RESET {format_identifier(key)};")
            for entry in delta.options.to_set:
                statements.append(f"{prefix} {_set_option(entry)};")

    statements += alter_comment(object_type, name, source.comment, target.comment, config)
    statements += alter_owner(object_type, name, source.owner, target.owner, config)
    statements += alter_privileges(_object_type(target), name, delta, config)
    return statements
