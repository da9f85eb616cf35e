"""CREATE/ALTER/DROP VIEW statements."""

from ..config import ReconcileConfig
from ..db.views import View
from ..identifiers import qualified_name
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


def create(view: View, config: ReconcileConfig) -> list[str]:
    name = qualified_name(view.schema_name, view.view_name)
    statements = [f"CREATE VIEW {name}{with_options(view.options)} AS\n{view.definition};"]
    statements += create_comment("VIEW", name, view.comment, config)
    statements += create_owner("VIEW", name, view.owner, config)
    # views share the table privilege syntax
    statements += create_privileges(ObjectType.TABLE, name, view.acl, config)
    return statements


def drop(view: View, config: ReconcileConfig) -> list[str]:
    return [f"DROP VIEW {qualified_name(view.schema_name, view.view_name)};"]


def alter(source: View, target: View, delta: ObjectDelta, config: ReconcileConfig) -> list[str]:
    name = qualified_name(target.schema_name, target.view_name)
    statements = []
    if source.definition != target.definition:
        # replacing a view also replaces its reloptions
        statements.append(
            f"CREATE OR REPLACE VIEW {name}{with_options(target.options)} AS\n{target.definition};"
        )
    else:
        statements += alter_options(f"ALTER VIEW {name}", delta.options)
    statements += alter_comment("VIEW", name, source.comment, target.comment, config)
    statements += alter_owner("VIEW", name, source.owner, target.owner, config)
    statements += alter_privileges(ObjectType.TABLE, name, delta, config)
    return statements
