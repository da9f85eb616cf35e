"""CREATE/ALTER/DROP TYPE statements for base types.

Only comments, owners and privileges can be reconciled in place; the I/O
functions and storage properties are fixed once the type exists.
"""

import logging
from dataclasses import fields

from ..config import ReconcileConfig
from ..db.types import BaseType
from ..identifiers import qualified_name, quote_literal
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

ALIGNMENTS = {"c": "char", "s": "int2", "i": "int4", "d": "double"}
STORAGES = {"p": "plain", "e": "external", "m": "main", "x": "extended"}

# attributes reconciled by the statements below
_MUTABLE = {"comment", "owner", "acl", "oid"}


def _properties(base: BaseType) -> list[str]:
    properties = [f"INPUT = {base.input}", f"OUTPUT = {base.output}"]
    for keyword, function in (
        ("RECEIVE", base.receive),
        ("SEND", base.send),
        ("TYPMOD_IN", base.typmod_in),
        ("TYPMOD_OUT", base.typmod_out),
        ("ANALYZE", base.analyze),
    ):
        if function is not None:
            properties.append(f"{keyword} = {function}")
    if base.length < 0:
        properties.append("INTERNALLENGTH = VARIABLE")
    else:
        properties.append(f"INTERNALLENGTH = {base.length}")
    if base.by_value:
        properties.append("PASSEDBYVALUE")
    properties.append(f"ALIGNMENT = {ALIGNMENTS[base.alignment]}")
    properties.append(f"STORAGE = {STORAGES[base.storage]}")
    if base.category != "U":
        properties.append(f"CATEGORY = {quote_literal(base.category)}")
    if base.preferred:
        properties.append("PREFERRED = true")
    if base.default is not None:
        properties.append(f"DEFAULT = {quote_literal(base.default)}")
    if base.delimiter != ",":
        properties.append(f"DELIMITER = {quote_literal(base.delimiter)}")
    if base.collatable:
        properties.append("COLLATABLE = true")
    return properties


def create(base: BaseType, config: ReconcileConfig) -> list[str]:
    name = qualified_name(base.schema_name, base.type_name)
    body = ",\n".join(f"\t{p}" for p in _properties(base))
    statements = [f"CREATE TYPE {name} (\n{body}\n);"]
    statements += create_comment("TYPE", name, base.comment, config)
    statements += create_owner("TYPE", name, base.owner, config)
    statements += create_privileges(ObjectType.TYPE, name, base.acl, config)
    return statements


def drop(base: BaseType, config: ReconcileConfig) -> list[str]:
    return [f"DROP TYPE {qualified_name(base.schema_name, base.type_name)};"]


def alter(source: BaseType, target: BaseType, delta: ObjectDelta, config: ReconcileConfig) -> list[str]:
    name = qualified_name(target.schema_name, target.type_name)
    changed = [
        f.name for f in fields(BaseType)
        if f.name not in _MUTABLE and getattr(source, f.name) != getattr(target, f.name)
    ]
    if changed:
        logger.warning(
            "base type %s: %s changed; not supported", name, ", ".join(changed)
        )

    statements = alter_comment("TYPE", name, source.comment, target.comment, config)
    statements += alter_owner("TYPE", name, source.owner, target.owner, config)
    statements += alter_privileges(ObjectType.TYPE, name, delta, config)
    return statements
