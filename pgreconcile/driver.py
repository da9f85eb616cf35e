"""Reconcile two catalog snapshots kind by kind into pre/post statements."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from types import ModuleType
from typing import Any

from .comparator import Action, classify
from .config import ReconcileConfig
from .db import Database
from .ddl import (
    base_type,
    composite_type,
    domain,
    enum_type,
    event_trigger,
    extension,
    function,
    index,
    language,
    materialized_view,
    range_type,
    rule,
    schema,
    sequence,
    table,
    trigger,
    view,
)
from .ddl.common import ObjectDelta
from .options import EMPTY_DELTA, reconcile_options
from .output import OutputSink
from .privileges import reconcile_acl
from .summary import Statistics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ObjectKind:
    """How one kind of catalog object is compared and written."""

    name: str
    label: str
    # Database attribute holding the sorted objects
    attribute: str
    writer: ModuleType
    has_options: bool = False
    has_acl: bool = False


# dependency order: objects of a kind may only depend on earlier kinds
OBJECT_KINDS: tuple[ObjectKind, ...] = (
    ObjectKind("language", "Languages", "languages", language, has_acl=True),
    ObjectKind("schema", "Schemas", "schemas", schema, has_acl=True),
    ObjectKind("extension", "Extensions", "extensions", extension),
    ObjectKind("base type", "Base Types", "base_types", base_type, has_acl=True),
    ObjectKind("domain", "Domains", "domains", domain, has_acl=True),
    ObjectKind("enum type", "Enum Types", "enum_types", enum_type, has_acl=True),
    ObjectKind("range type", "Range Types", "range_types", range_type, has_acl=True),
    ObjectKind("composite type", "Composite Types", "composite_types", composite_type, has_acl=True),
    ObjectKind("sequence", "Sequences", "sequences", sequence, has_acl=True),
    ObjectKind("table", "Tables", "tables", table, has_options=True, has_acl=True),
    ObjectKind("index", "Indexes", "indexes", index, has_options=True),
    ObjectKind("function", "Functions", "functions", function, has_options=True, has_acl=True),
    ObjectKind("view", "Views", "views", view, has_options=True, has_acl=True),
    ObjectKind(
        "materialized view", "Materialized Views", "materialized_views", materialized_view,
        has_options=True, has_acl=True,
    ),
    ObjectKind("trigger", "Triggers", "triggers", trigger),
    ObjectKind("rule", "Rules", "rules", rule),
    ObjectKind("event trigger", "Event Triggers", "event_triggers", event_trigger),
)


@dataclass
class ReconcileResult:
    """Statements and counters produced by one run."""

    sink: OutputSink = field(default_factory=OutputSink)
    statistics: Statistics = field(default_factory=Statistics)

    @property
    def has_statements(self) -> bool:
        return not self.sink.is_empty()


def describe(obj: Any) -> str:
    """Dotted name of an object, from its key."""
    return ".".join(obj.key)


def object_delta(kind: ObjectKind, source: Any, target: Any) -> ObjectDelta:
    """Option and ACL deltas between two versions of the same object."""
    options = EMPTY_DELTA
    if kind.has_options:
        options = reconcile_options(source.options, target.options)
    privileges = []
    if kind.has_acl:
        privileges = reconcile_acl(source.acl, target.acl)
    return ObjectDelta(options=options, privileges=privileges)


def reconcile_kind(
    kind: ObjectKind,
    source: Sequence[Any],
    target: Sequence[Any],
    config: ReconcileConfig,
    sink: OutputSink,
    statistics: Statistics,
) -> None:
    """Classify the objects of one kind and write their statements.

    Creations and alterations go to the pre buffer, drops to the post
    buffer; unchanged objects produce nothing.
    """
    row = statistics.row(kind.label)
    row.source_count = len(source)
    row.target_count = len(target)

    for item in classify(source, target):
        if item.action == Action.NONE:
            continue
        statistics.record(kind.label, item.action)
        if item.action == Action.ADD:
            logger.debug("%s %s: target", kind.name, describe(item.target))
            sink.add_pre(kind.writer.create(item.target, config))
        elif item.action == Action.REMOVE:
            logger.debug("%s %s: source", kind.name, describe(item.source))
            sink.add_post(kind.writer.drop(item.source, config))
        else:
            logger.debug("%s %s: source target", kind.name, describe(item.target))
            delta = object_delta(kind, item.source, item.target)
            sink.add_pre(kind.writer.alter(item.source, item.target, delta, config))


def reconcile_databases(
    source: Database,
    target: Database,
    config: ReconcileConfig,
    sink: OutputSink | None = None,
) -> ReconcileResult:
    """Produce the statements that turn the source schema into the target schema.

    Args:
        source: Snapshot of the database to be changed.
        target: Snapshot of the database to match.
        config: Which optional statement families to emit.
        sink: Buffer to append to; a new one is created when omitted.

    Returns:
        The filled sink and per-kind statistics.
    """
    result = ReconcileResult(sink=sink if sink is not None else OutputSink())
    for kind in OBJECT_KINDS:
        reconcile_kind(
            kind,
            getattr(source, kind.attribute),
            getattr(target, kind.attribute),
            config,
            result.sink,
            result.statistics,
        )
    logger.debug(
        "%d statements (%d pre, %d post)",
        len(result.sink), len(result.sink.pre), len(result.sink.post),
    )
    return result
