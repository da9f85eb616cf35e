"""CREATE/ALTER/DROP TYPE statements for composite types."""

from ..comparator import Action, classify
from ..config import ReconcileConfig
from ..db.types import CompositeType, TypeAttribute
from ..identifiers import format_identifier, qualified_name
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


def _attribute_definition(attribute: TypeAttribute) -> str:
    definition = f"{format_identifier(attribute.attribute_name)} {attribute.data_type}"
    if attribute.collation:
        definition += f" COLLATE {attribute.collation}"
    return definition


def create(composite: CompositeType, config: ReconcileConfig) -> list[str]:
    name = qualified_name(composite.schema_name, composite.type_name)
    attributes = ", ".join(_attribute_definition(a) for a in composite.attributes)
    statements = [f"CREATE TYPE {name} AS ({attributes});"]
    statements += create_comment("TYPE", name, composite.comment, config)
    statements += create_owner("TYPE", name, composite.owner, config)
    statements += create_privileges(ObjectType.TYPE, name, composite.acl, config)
    return statements


def drop(composite: CompositeType, config: ReconcileConfig) -> list[str]:
    return [f"DROP TYPE {qualified_name(composite.schema_name, composite.type_name)};"]


def alter(
    source: CompositeType, target: CompositeType, delta: ObjectDelta, config: ReconcileConfig
) -> list[str]:
    name = qualified_name(target.schema_name, target.type_name)
    statements = []

    for item in classify(
        sorted(source.attributes, key=lambda a: a.key),
        sorted(target.attributes, key=lambda a: a.key),
    ):
        if item.action == Action.ADD:
            statements.append(
                f"ALTER TYPE {name} ADD ATTRIBUTE {_attribute_definition(item.target)};"
            )
        elif item.action == Action.REMOVE:
            attribute = format_identifier(item.source.attribute_name)
            statements.append(f"ALTER TYPE {name} DROP ATTRIBUTE {attribute};")
        elif item.action == Action.MODIFY:
            attribute = format_identifier(item.target.attribute_name)
            statement = f"ALTER TYPE {name} ALTER ATTRIBUTE {attribute} TYPE {item.target.data_type}"
            if item.target.collation:
                statement += f" COLLATE {item.target.collation}"
            statements.append(statement + ";")

    statements += alter_comment("TYPE", name, source.comment, target.comment, config)
    statements += alter_owner("TYPE", name, source.owner, target.owner, config)
    statements += alter_privileges(ObjectType.TYPE, name, delta, config)
    return statements
