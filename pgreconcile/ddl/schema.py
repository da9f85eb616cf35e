"""CREATE/ALTER/DROP SCHEMA statements."""

from ..config import ReconcileConfig
from ..db.schemas import Schema
from ..identifiers import format_identifier
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


def create(schema: Schema, config: ReconcileConfig) -> list[str]:
    name = format_identifier(schema.schema_name)
    statements = [f"CREATE SCHEMA {name};"]
    statements += create_comment("SCHEMA", name, schema.comment, config)
    statements += create_owner("SCHEMA", name, schema.owner, config)
    statements += create_privileges(ObjectType.SCHEMA, name, schema.acl, config)
    return statements


def drop(schema: Schema, config: ReconcileConfig) -> list[str]:
    return [f"DROP SCHEMA {format_identifier(schema.schema_name)};"]


def alter(source: Schema, target: Schema, delta: ObjectDelta, config: ReconcileConfig) -> list[str]:
    name = format_identifier(target.schema_name)
    statements = alter_comment("SCHEMA", name, source.comment, target.comment, config)
    statements += alter_owner("SCHEMA", name, source.owner, target.owner, config)
    statements += alter_privileges(ObjectType.SCHEMA, name, delta, config)
    return statements
