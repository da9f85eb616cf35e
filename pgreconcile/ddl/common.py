"""Statement fragments shared by every object kind."""

from dataclasses import dataclass, field

from ..config import ReconcileConfig
from ..identifiers import format_role, quote_literal
from ..options import EMPTY_DELTA, OptionDelta, OptionSet, format_options
from ..privileges import AclChange, AclEntry, ObjectType, format_privileges, reconcile_acl


@dataclass(frozen=True)
class ObjectDelta:
    """Option and privilege deltas of one changed object."""

    options: OptionDelta = EMPTY_DELTA
    privileges: list[AclChange] = field(default_factory=list)


def comment_on(object_type: str, name: str, comment: str | None) -> str:
    """COMMENT ON statement; a None comment removes it."""
    text = "NULL" if comment is None else quote_literal(comment)
    return f"COMMENT ON {object_type} {name} IS {text};"


def create_comment(
    object_type: str, name: str, comment: str | None, config: ReconcileConfig
) -> list[str]:
    if not config.comment or comment is None:
        return []
    return [comment_on(object_type, name, comment)]


def alter_comment(
    object_type: str,
    name: str,
    source_comment: str | None,
    target_comment: str | None,
    config: ReconcileConfig,
) -> list[str]:
    if not config.comment or source_comment == target_comment:
        return []
    return [comment_on(object_type, name, target_comment)]


def owner_to(object_type: str, name: str, owner: str) -> str:
    return f"ALTER {object_type} {name} OWNER TO {format_role(owner)};"


def create_owner(object_type: str, name: str, owner: str, config: ReconcileConfig) -> list[str]:
    if not config.owner:
        return []
    return [owner_to(object_type, name, owner)]


def alter_owner(
    object_type: str,
    name: str,
    source_owner: str,
    target_owner: str,
    config: ReconcileConfig,
) -> list[str]:
    if not config.owner or source_owner == target_owner:
        return []
    return [owner_to(object_type, name, target_owner)]


def acl_statements(
    object_type: ObjectType,
    name: str,
    changes: list[AclChange],
    columns: str | None = None,
) -> list[str]:
    """Render GRANT/REVOKE statements in the order the changes were computed."""
    statements = []
    for change in changes:
        privileges = format_privileges(change.privileges, columns)
        role = format_role(change.grantee)
        if change.action.is_grant:
            statements.append(f"GRANT {privileges} ON {object_type.value} {name} TO {role};")
        else:
            statements.append(f"REVOKE {privileges} ON {object_type.value} {name} FROM {role};")
    return statements


def create_privileges(
    object_type: ObjectType,
    name: str,
    acl: tuple[AclEntry, ...] | None,
    config: ReconcileConfig,
) -> list[str]:
    """GRANT statements for an object created with its default ACL."""
    if not config.privileges:
        return []
    return acl_statements(object_type, name, reconcile_acl(None, acl))


def alter_privileges(
    object_type: ObjectType,
    name: str,
    delta: ObjectDelta,
    config: ReconcileConfig,
) -> list[str]:
    if not config.privileges:
        return []
    return acl_statements(object_type, name, delta.privileges)


def with_options(options: OptionSet | None) -> str:
    """`` WITH (...)`` clause, or an empty string without options."""
    if not options:
        return ""
    return f" WITH ({format_options(options)})"


def alter_options(prefix: str, delta: OptionDelta) -> list[str]:
    """RESET then SET statements for a storage parameter delta.

    Args:
        prefix: Statement head, such as ``ALTER TABLE public.t``.
        delta: Result of reconciling the two option sets.
    """
    statements = []
    if delta.to_reset:
        statements.append(f"{prefix} RESET ({format_options(delta.to_reset)});")
    if delta.to_set:
        statements.append(f"{prefix} SET ({format_options(delta.to_set)});")
    return statements


# pg_trigger.tgenabled / pg_event_trigger.evtenabled
ENABLE_CLAUSES = {
    "O": "ENABLE",
    "D": "DISABLE",
    "R": "ENABLE REPLICA",
    "A": "ENABLE ALWAYS",
}
