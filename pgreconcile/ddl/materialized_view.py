"""CREATE/ALTER/DROP MATERIALIZED VIEW statements."""

from ..config import ReconcileConfig
from ..db.materialized_views import MaterializedView
from ..identifiers import format_identifier, qualified_name
from ..privileges import ObjectType
from .common import (
    ObjectDelta,
    alter_comment,
    alter_options,
    alter_owner,
    alter_privileges,
    create_comment,
    create_owner,
    create_privileges,
    with_options,
)


def create(view: MaterializedView, config: ReconcileConfig) -> list[str]:
    name = qualified_name(view.schema_name, view.view_name)
    statement = f"CREATE MATERIALIZED VIEW {name}{with_options(view.options)}"
    if view.tablespace:
        statement += f" TABLESPACE {format_identifier(view.tablespace)}"
    statement += f" AS\n{view.definition}"
    if not view.populated:
        statement += "\nWITH NO DATA"
    statements = [statement + ";"]
    statements += create_comment("MATERIALIZED VIEW", name, view.comment, config)
    statements += create_owner("MATERIALIZED VIEW", name, view.owner, config)
    statements += create_privileges(ObjectType.TABLE, name, view.acl, config)
    return statements


def drop(view: MaterializedView, config: ReconcileConfig) -> list[str]:
    return [f"DROP MATERIALIZED VIEW {qualified_name(view.schema_name, view.view_name)};"]


def alter(
    source: MaterializedView, target: MaterializedView, delta: ObjectDelta, config: ReconcileConfig
) -> list[str]:
    """Recreate on a new query; there is no CREATE OR REPLACE MATERIALIZED VIEW."""
    if source.definition != target.definition:
        return drop(source, config) + create(target, config)

    name = qualified_name(target.schema_name, target.view_name)
    statements = alter_options(f"ALTER MATERIALIZED VIEW {name}", delta.options)
    if source.tablespace != target.tablespace:
        tablespace = format_identifier(target.tablespace or "pg_default")
        statements.append(f"ALTER MATERIALIZED VIEW {name} SET TABLESPACE {tablespace};")
    statements += alter_comment("MATERIALIZED VIEW", name, source.comment, target.comment, config)
    statements += alter_owner("MATERIALIZED VIEW", name, source.owner, target.owner, config)
    statements += alter_privileges(ObjectType.TABLE, name, delta, config)
    return statements
