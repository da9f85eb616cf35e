"""CREATE/ALTER/DROP TYPE statements for range types."""

import logging

from ..config import ReconcileConfig
from ..db.types import RangeType
from ..identifiers import qualified_name
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


def _definition(rng: RangeType) -> tuple:
    return (rng.subtype, rng.subtype_opclass, rng.collation, rng.canonical, rng.subtype_diff)


def create(rng: RangeType, config: ReconcileConfig) -> list[str]:
    name = qualified_name(rng.schema_name, rng.type_name)
    properties = [f"SUBTYPE = {rng.subtype}"]
    if rng.subtype_opclass is not None:
        properties.append(f"SUBTYPE_OPCLASS = {rng.subtype_opclass}")
    if rng.collation is not None:
        properties.append(f"COLLATION = {rng.collation}")
    if rng.canonical is not None:
        properties.append(f"CANONICAL = {rng.canonical}")
    if rng.subtype_diff is not None:
        properties.append(f"SUBTYPE_DIFF = {rng.subtype_diff}")
    body = ",\n".join(f"\t{p}" for p in properties)

    statements = [f"CREATE TYPE {name} AS RANGE (\n{body}\n);"]
    statements += create_comment("TYPE", name, rng.comment, config)
    statements += create_owner("TYPE", name, rng.owner, config)
    statements += create_privileges(ObjectType.TYPE, name, rng.acl, config)
    return statements


def drop(rng: RangeType, config: ReconcileConfig) -> list[str]:
    return [f"DROP TYPE {qualified_name(rng.schema_name, rng.type_name)};"]


def alter(source: RangeType, target: RangeType, delta: ObjectDelta, config: ReconcileConfig) -> list[str]:
    name = qualified_name(target.schema_name, target.type_name)
    if _definition(source) != _definition(target):
        logger.warning(
            "range type %s: definition changed (subtype %s -> %s); not supported",
            name, source.subtype, target.subtype,
        )

    statements = alter_comment("TYPE", name, source.comment, target.comment, config)
    statements += alter_owner("TYPE", name, source.owner, target.owner, config)
    statements += alter_privileges(ObjectType.TYPE, name, delta, config)
    return statements
