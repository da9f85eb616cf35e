"""CREATE/ALTER/DROP INDEX statements."""

from ..config import ReconcileConfig
from ..db.indexes import Index
from ..identifiers import format_identifier, qualified_name
from .common import ObjectDelta, alter_comment, alter_options, create_comment


def create(index: Index, config: ReconcileConfig) -> list[str]:
    name = qualified_name(index.schema_name, index.index_name)
    statements = [(index.statement or index.definition) + ";"]
    if index.tablespace:
        statements.append(
            f"ALTER INDEX {name} SET TABLESPACE {format_identifier(index.tablespace)};"
        )
    statements += create_comment("INDEX", name, index.comment, config)
    return statements


def drop(index: Index, config: ReconcileConfig) -> list[str]:
    return [f"DROP INDEX {qualified_name(index.schema_name, index.index_name)};"]


def alter(source: Index, target: Index, delta: ObjectDelta, config: ReconcileConfig) -> list[str]:
    """Rebuild the index when its definition changed, else alter in place."""
    if source.definition != target.definition:
        return drop(source, config) + create(target, config)

    name = qualified_name(target.schema_name, target.index_name)
    statements = alter_options(f"ALTER INDEX {name}", delta.options)
    if source.tablespace != target.tablespace:
        tablespace = format_identifier(target.tablespace or "pg_default")
        statements.append(f"ALTER INDEX {name} SET TABLESPACE {tablespace};")
    statements += alter_comment("INDEX", name, source.comment, target.comment, config)
    return statements
