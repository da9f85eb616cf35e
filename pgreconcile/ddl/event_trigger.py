"""CREATE/ALTER/DROP EVENT TRIGGER statements."""

from ..config import ReconcileConfig
from ..db.event_triggers import EventTrigger
from ..identifiers import format_identifier, quote_literal
from .common import (
    ENABLE_CLAUSES,
    ObjectDelta,
    alter_comment,
    alter_owner,
    create_comment,
    create_owner,
)


def _enable(trigger: EventTrigger) -> str:
    name = format_identifier(trigger.trigger_name)
    return f"ALTER EVENT TRIGGER {name} {ENABLE_CLAUSES[trigger.enabled]};"


def create(trigger: EventTrigger, config: ReconcileConfig) -> list[str]:
    name = format_identifier(trigger.trigger_name)
    statement = f"CREATE EVENT TRIGGER {name} ON {trigger.event}"
    if trigger.tags:
        tags = ", ".join(quote_literal(tag) for tag in trigger.tags)
        statement += f" WHEN TAG IN ({tags})"
    # EXECUTE PROCEDURE is still accepted where EXECUTE FUNCTION is not (10)
    statement += f" EXECUTE PROCEDURE {trigger.function_name}();"
    statements = [statement]
    if trigger.enabled != "O":
        statements.append(_enable(trigger))
    statements += create_comment("EVENT TRIGGER", name, trigger.comment, config)
    statements += create_owner("EVENT TRIGGER", name, trigger.owner, config)
    return statements


def drop(trigger: EventTrigger, config: ReconcileConfig) -> list[str]:
    return [f"DROP EVENT TRIGGER {format_identifier(trigger.trigger_name)};"]


def alter(
    source: EventTrigger, target: EventTrigger, delta: ObjectDelta, config: ReconcileConfig
) -> list[str]:
    if (source.event, source.function_name, source.tags) != (
        target.event, target.function_name, target.tags
    ):
        return drop(source, config) + create(target, config)

    name = format_identifier(target.trigger_name)
    statements = []
    if source.enabled != target.enabled:
        statements.append(_enable(target))
    statements += alter_comment("EVENT TRIGGER", name, source.comment, target.comment, config)
    statements += alter_owner("EVENT TRIGGER", name, source.owner, target.owner, config)
    return statements
