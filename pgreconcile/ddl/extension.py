"""CREATE/ALTER/DROP EXTENSION statements."""

import logging

from ..config import ReconcileConfig
from ..db.extensions import Extension
from ..identifiers import format_identifier, quote_literal
from .common import ObjectDelta, alter_comment, create_comment

logger = logging.getLogger(__name__)


def create(extension: Extension, config: ReconcileConfig) -> list[str]:
    name = format_identifier(extension.extension_name)
    statements = [
        f"CREATE EXTENSION {name} WITH SCHEMA {format_identifier(extension.schema_name)}"
        f" VERSION {quote_literal(extension.version)};"
    ]
    statements += create_comment("EXTENSION", name, extension.comment, config)
    return statements


def drop(extension: Extension, config: ReconcileConfig) -> list[str]:
    return [f"DROP EXTENSION {format_identifier(extension.extension_name)};"]


def alter(
    source: Extension, target: Extension, delta: ObjectDelta, config: ReconcileConfig
) -> list[str]:
    name = format_identifier(target.extension_name)
    statements = []
    if source.version != target.version:
        statements.append(f"ALTER EXTENSION {name} UPDATE TO {quote_literal(target.version)};")
    if source.schema_name != target.schema_name:
        if source.relocatable:
            statements.append(
                f"ALTER EXTENSION {name} SET SCHEMA {format_identifier(target.schema_name)};"
            )
        else:
            logger.warning(
                "extension %s is not relocatable; cannot move it from schema %s to %s",
                target.extension_name, source.schema_name, target.schema_name,
            )
    statements += alter_comment("EXTENSION", name, source.comment, target.comment, config)
    return statements
