"""CREATE/ALTER/DROP TABLE statements, including columns and constraints."""

import logging

from ..comparator import Action, classify
from ..config import ReconcileConfig
from ..db.columns import Column
from ..db.constraints import Constraint
from ..db.tables import Table
from ..identifiers import format_identifier, qualified_name
from ..privileges import ObjectType
from .common import (
    ObjectDelta,
    alter_comment,
    alter_options,
    alter_owner,
    alter_privileges,
    comment_on,
    create_comment,
    create_owner,
    create_privileges,
    with_options,
)

logger = logging.getLogger(__name__)


def column_definition(column: Column) -> str:
    """Column clause as used by CREATE TABLE and ADD COLUMN."""
    parts = [format_identifier(column.column_name), column.data_type]
    if column.collation:
        parts.append(f"COLLATE {column.collation}")
    if column.generated == "s":
        parts.append(f"GENERATED ALWAYS AS ({column.default}) STORED")
    elif column.identity == "a":
        parts.append("GENERATED ALWAYS AS IDENTITY")
    elif column.identity == "d":
        parts.append("GENERATED BY DEFAULT AS IDENTITY")
    elif column.default is not None:
        parts.append(f"DEFAULT {column.default}")
    if column.not_null:
        parts.append("NOT NULL")
    return " ".join(parts)


def constraint_definition(constraint: Constraint) -> str:
    return f"CONSTRAINT {format_identifier(constraint.constraint_name)} {constraint.definition}"


def _column_comment(table_name: str, column: Column, comment: str | None) -> str:
    return comment_on("COLUMN", f"{table_name}.{format_identifier(column.column_name)}", comment)


def _constraint_comment(table_name: str, constraint: Constraint, comment: str | None) -> str:
    target = f"{format_identifier(constraint.constraint_name)} ON {table_name}"
    return comment_on("CONSTRAINT", target, comment)


def create(table: Table, config: ReconcileConfig) -> list[str]:
    name = qualified_name(table.schema_name, table.table_name)
    elements = [column_definition(column) for column in table.columns]
    # NOT VALID constraints are added afterwards through ALTER TABLE
    elements += [constraint_definition(c) for c in table.constraints if c.validated]

    unlogged = "UNLOGGED " if table.unlogged else ""
    body = ",\n".join(f"    {element}" for element in elements)
    statement = f"CREATE {unlogged}TABLE {name} (\n{body}\n)"
    if table.partition_key:
        statement += f" PARTITION BY {table.partition_key}"
    statement += with_options(table.options)
    if table.tablespace:
        statement += f" TABLESPACE {format_identifier(table.tablespace)}"
    statements = [statement + ";"]

    for constraint in table.constraints:
        if not constraint.validated:
            statements.append(
                f"ALTER TABLE {name} ADD {constraint_definition(constraint)} NOT VALID;"
            )

    statements += create_comment("TABLE", name, table.comment, config)
    if config.comment:
        for column in table.columns:
            if column.comment is not None:
                statements.append(_column_comment(name, column, column.comment))
        for constraint in table.constraints:
            if constraint.comment is not None:
                statements.append(_constraint_comment(name, constraint, constraint.comment))
    statements += create_owner("TABLE", name, table.owner, config)
    statements += create_privileges(ObjectType.TABLE, name, table.acl, config)
    return statements


def drop(table: Table, config: ReconcileConfig) -> list[str]:
    return [f"DROP TABLE {qualified_name(table.schema_name, table.table_name)};"]


def _alter_column(name: str, source: Column, target: Column, config: ReconcileConfig) -> list[str]:
    column = f"ALTER TABLE {name} ALTER COLUMN {format_identifier(target.column_name)}"
    statements = []
    if source.data_type != target.data_type or source.collation != target.collation:
        statement = f"{column} TYPE {target.data_type}"
        if target.collation:
            statement += f" COLLATE {target.collation}"
        statements.append(statement + ";")

    if source.identity != target.identity:
        if not target.identity:
            statements.append(f"{column} DROP IDENTITY;")
        elif not source.identity:
            kind = "ALWAYS" if target.identity == "a" else "BY DEFAULT"
            statements.append(f"{column} ADD GENERATED {kind} AS IDENTITY;")
        else:
            kind = "ALWAYS" if target.identity == "a" else "BY DEFAULT"
            statements.append(f"{column} SET GENERATED {kind};")

    if source.generated != target.generated or (
        target.generated and source.default != target.default
    ):
        logger.warning(
            "table %s: generation expression of column %s changed; not supported",
            name, target.column_name,
        )
    elif not target.generated and source.default != target.default:
        if target.default is None:
            statements.append(f"{column} DROP DEFAULT;")
        else:
            statements.append(f"{column} SET DEFAULT {target.default};")

    if source.not_null != target.not_null:
        action = "SET" if target.not_null else "DROP"
        statements.append(f"{column} {action} NOT NULL;")

    if config.comment and source.comment != target.comment:
        statements.append(_column_comment(name, target, target.comment))
    return statements


def _alter_columns(name: str, source: Table, target: Table, config: ReconcileConfig) -> list[str]:
    statements = []
    for item in classify(
        sorted(source.columns, key=lambda c: c.key),
        sorted(target.columns, key=lambda c: c.key),
    ):
        if item.action == Action.ADD:
            statements.append(f"ALTER TABLE {name} ADD COLUMN {column_definition(item.target)};")
            if config.comment and item.target.comment is not None:
                statements.append(_column_comment(name, item.target, item.target.comment))
        elif item.action == Action.REMOVE:
            column = format_identifier(item.source.column_name)
            statements.append(f"ALTER TABLE {name} DROP COLUMN {column};")
        elif item.action == Action.MODIFY:
            statements += _alter_column(name, item.source, item.target, config)
    return statements


def _add_constraint(name: str, constraint: Constraint) -> str:
    suffix = "" if constraint.validated else " NOT VALID"
    return f"ALTER TABLE {name} ADD {constraint_definition(constraint)}{suffix};"


def _alter_constraints(name: str, source: Table, target: Table, config: ReconcileConfig) -> list[str]:
    statements = []
    for item in classify(source.constraints, target.constraints):
        if item.action == Action.ADD:
            statements.append(_add_constraint(name, item.target))
        elif item.action == Action.REMOVE:
            constraint = format_identifier(item.source.constraint_name)
            statements.append(f"ALTER TABLE {name} DROP CONSTRAINT {constraint};")
        elif item.action == Action.MODIFY:
            constraint = format_identifier(item.target.constraint_name)
            if (item.source.constraint_type, item.source.definition) != (
                item.target.constraint_type, item.target.definition
            ):
                statements.append(f"ALTER TABLE {name} DROP CONSTRAINT {constraint};")
                statements.append(_add_constraint(name, item.target))
            elif item.target.validated and not item.source.validated:
                statements.append(f"ALTER TABLE {name} VALIDATE CONSTRAINT {constraint};")
            if config.comment and item.source.comment != item.target.comment:
                statements.append(_constraint_comment(name, item.target, item.target.comment))
    return statements


def alter(source: Table, target: Table, delta: ObjectDelta, config: ReconcileConfig) -> list[str]:
    name = qualified_name(target.schema_name, target.table_name)
    statements = []

    if source.partition_key != target.partition_key:
        logger.warning(
            "table %s: partitioning changed (%s -> %s); not supported",
            name, source.partition_key, target.partition_key,
        )

    if source.unlogged != target.unlogged:
        persistence = "UNLOGGED" if target.unlogged else "LOGGED"
        statements.append(f"ALTER TABLE {name} SET {persistence};")

    statements += _alter_columns(name, source, target, config)
    statements += _alter_constraints(name, source, target, config)
    statements += alter_options(f"ALTER TABLE {name}", delta.options)

    if source.tablespace != target.tablespace:
        tablespace = format_identifier(target.tablespace or "pg_default")
        statements.append(f"ALTER TABLE {name} SET TABLESPACE {tablespace};")

    statements += alter_comment("TABLE", name, source.comment, target.comment, config)
    statements += alter_owner("TABLE", name, source.owner, target.owner, config)
    statements += alter_privileges(ObjectType.TABLE, name, delta, config)
    return statements
