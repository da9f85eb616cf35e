"""CREATE/ALTER/DROP SEQUENCE statements."""

from ..config import ReconcileConfig
from ..db.sequences import Sequence
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


def create(sequence: Sequence, config: ReconcileConfig) -> list[str]:
    name = qualified_name(sequence.schema_name, sequence.sequence_name)
    cycle = "CYCLE" if sequence.cycle else "NO CYCLE"
    statements = [
        f"CREATE SEQUENCE {name} AS {sequence.data_type}"
        f" INCREMENT BY {sequence.increment}"
        f" MINVALUE {sequence.minimum_value}"
        f" MAXVALUE {sequence.maximum_value}"
        f" START WITH {sequence.start_value}"
        f" CACHE {sequence.cache}"
        f" {cycle};"
    ]
    statements += create_comment("SEQUENCE", name, sequence.comment, config)
    statements += create_owner("SEQUENCE", name, sequence.owner, config)
    statements += create_privileges(ObjectType.SEQUENCE, name, sequence.acl, config)
    return statements


def drop(sequence: Sequence, config: ReconcileConfig) -> list[str]:
    return [f"DROP SEQUENCE {qualified_name(sequence.schema_name, sequence.sequence_name)};"]


def alter(source: Sequence, target: Sequence, delta: ObjectDelta, config: ReconcileConfig) -> list[str]:
    name = qualified_name(target.schema_name, target.sequence_name)
    clauses = []
    if source.data_type != target.data_type:
        clauses.append(f"AS {target.data_type}")
    if source.increment != target.increment:
        clauses.append(f"INCREMENT BY {target.increment}")
    if source.minimum_value != target.minimum_value:
        clauses.append(f"MINVALUE {target.minimum_value}")
    if source.maximum_value != target.maximum_value:
        clauses.append(f"MAXVALUE {target.maximum_value}")
    if source.start_value != target.start_value:
        clauses.append(f"START WITH {target.start_value}")
    if source.cache != target.cache:
        clauses.append(f"CACHE {target.cache}")
    if source.cycle != target.cycle:
        clauses.append("CYCLE" if target.cycle else "NO CYCLE")

    statements = []
    if clauses:
        statements.append(f"ALTER SEQUENCE {name} {' '.join(clauses)};")
    statements += alter_comment("SEQUENCE", name, source.comment, target.comment, config)
    statements += alter_owner("SEQUENCE", name, source.owner, target.owner, config)
    statements += alter_privileges(ObjectType.SEQUENCE, name, delta, config)
    return statements
