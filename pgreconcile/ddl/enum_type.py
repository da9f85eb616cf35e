"""CREATE/ALTER/DROP TYPE statements for enum types."""

import logging

from ..config import ReconcileConfig
from ..db.types import EnumType
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


def create(enum: EnumType, config: ReconcileConfig) -> list[str]:
    name = qualified_name(enum.schema_name, enum.type_name)
    labels = ", ".join(quote_literal(label) for label in enum.labels)
    statements = [f"CREATE TYPE {name} AS ENUM ({labels});"]
    statements += create_comment("TYPE", name, enum.comment, config)
    statements += create_owner("TYPE", name, enum.owner, config)
    statements += create_privileges(ObjectType.TYPE, name, enum.acl, config)
    return statements


def drop(enum: EnumType, config: ReconcileConfig) -> list[str]:
    return [f"DROP TYPE {qualified_name(enum.schema_name, enum.type_name)};"]


def alter(source: EnumType, target: EnumType, delta: ObjectDelta, config: ReconcileConfig) -> list[str]:
    """Add missing labels in place; labels cannot be removed or reordered."""
    name = qualified_name(target.schema_name, target.type_name)
    statements = []

    existing = set(source.labels)
    for position, label in enumerate(target.labels):
        if label in existing:
            continue
        statement = f"ALTER TYPE {name} ADD VALUE {quote_literal(label)}"
        if position > 0:
            statement += f" AFTER {quote_literal(target.labels[position - 1])}"
        else:
            following = next((lb for lb in target.labels if lb in existing), None)
            if following is not None:
                statement += f" BEFORE {quote_literal(following)}"
        statements.append(statement + ";")
        existing.add(label)

    removed = [label for label in source.labels if label not in set(target.labels)]
    if removed:
        logger.warning(
            "enum %s: labels %s cannot be removed; recreate the type manually",
            name, ", ".join(removed),
        )

    statements += alter_comment("TYPE", name, source.comment, target.comment, config)
    statements += alter_owner("TYPE", name, source.owner, target.owner, config)
    statements += alter_privileges(ObjectType.TYPE, name, delta, config)
    return statements
