"""CREATE/ALTER/DROP TRIGGER statements."""

from ..config import ReconcileConfig
from ..db.triggers import Trigger
from ..identifiers import format_identifier, qualified_name
from .common import ENABLE_CLAUSES, ObjectDelta, alter_comment, create_comment


def _target(trigger: Trigger) -> str:
    """``name ON schema.table``"""
    table = qualified_name(trigger.schema_name, trigger.table_name)
    return f"{format_identifier(trigger.trigger_name)} ON {table}"


def _enable(trigger: Trigger) -> str:
    table = qualified_name(trigger.schema_name, trigger.table_name)
    clause = ENABLE_CLAUSES[trigger.enabled]
    return f"ALTER TABLE {table} {clause} TRIGGER {format_identifier(trigger.trigger_name)};"


def create(trigger: Trigger, config: ReconcileConfig) -> list[str]:
    statements = [trigger.definition + ";"]
    if trigger.enabled != "O":
        statements.append(_enable(trigger))
    statements += create_comment("TRIGGER", _target(trigger), trigger.comment, config)
    return statements


def drop(trigger: Trigger, config: ReconcileConfig) -> list[str]:
    return [f"DROP TRIGGER {_target(trigger)};"]


def alter(source: Trigger, target: Trigger, delta: ObjectDelta, config: ReconcileConfig) -> list[str]:
    if source.definition != target.definition:
        return drop(source, config) + create(target, config)

    statements = []
    if source.enabled != target.enabled:
        statements.append(_enable(target))
    statements += alter_comment("TRIGGER", _target(target), source.comment, target.comment, config)
    return statements
