"""CREATE/ALTER/DROP DOMAIN statements."""

import logging

from ..comparator import Action, classify
from ..config import ReconcileConfig
from ..db.domains import Domain, DomainConstraint
from ..identifiers import format_identifier, qualified_name
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

logger = logging.getLogger(__name__)


def _constraint_clause(constraint: DomainConstraint) -> str:
    clause = f"CONSTRAINT {format_identifier(constraint.constraint_name)} {constraint.definition}"
    if not constraint.validated:
        clause += " NOT VALID"
    return clause


def create(domain: Domain, config: ReconcileConfig) -> list[str]:
    name = qualified_name(domain.schema_name, domain.domain_name)
    parts = [f"CREATE DOMAIN {name} AS {domain.data_type}"]
    if domain.collation:
        parts.append(f"COLLATE {domain.collation}")
    if domain.default is not None:
        parts.append(f"DEFAULT {domain.default}")
    if domain.not_null:
        parts.append("NOT NULL")
    statements = [" ".join(parts) + ";"]
    # NOT VALID is only accepted by ALTER DOMAIN
    for constraint in domain.constraints:
        statements.append(f"ALTER DOMAIN {name} ADD {_constraint_clause(constraint)};")
    statements += create_comment("DOMAIN", name, domain.comment, config)
    statements += create_owner("DOMAIN", name, domain.owner, config)
    statements += create_privileges(ObjectType.DOMAIN, name, domain.acl, config)
    return statements


def drop(domain: Domain, config: ReconcileConfig) -> list[str]:
    return [f"DROP DOMAIN {qualified_name(domain.schema_name, domain.domain_name)};"]


def alter(source: Domain, target: Domain, delta: ObjectDelta, config: ReconcileConfig) -> list[str]:
    name = qualified_name(target.schema_name, target.domain_name)
    statements = []

    if source.data_type != target.data_type or source.collation != target.collation:
        logger.warning(
            "domain %s: base type or collation changed (%s -> %s); not supported",
            name, source.data_type, target.data_type,
        )

    if source.default != target.default:
        if target.default is None:
            statements.append(f"ALTER DOMAIN {name} DROP DEFAULT;")
        else:
            statements.append(f"ALTER DOMAIN {name} SET DEFAULT {target.default};")

    if source.not_null != target.not_null:
        action = "SET" if target.not_null else "DROP"
        statements.append(f"ALTER DOMAIN {name} {action} NOT NULL;")

    for item in classify(
        sorted(source.constraints, key=lambda c: c.key),
        sorted(target.constraints, key=lambda c: c.key),
    ):
        if item.action == Action.ADD:
            statements.append(f"ALTER DOMAIN {name} ADD {_constraint_clause(item.target)};")
        elif item.action == Action.REMOVE:
            constraint_name = format_identifier(item.source.constraint_name)
            statements.append(f"ALTER DOMAIN {name} DROP CONSTRAINT {constraint_name};")
        elif item.action == Action.MODIFY:
            constraint_name = format_identifier(item.target.constraint_name)
            if item.source.definition != item.target.definition:
                statements.append(f"ALTER DOMAIN {name} DROP CONSTRAINT {constraint_name};")
                statements.append(f"ALTER DOMAIN {name} ADD {_constraint_clause(item.target)};")
            elif item.target.validated:
                statements.append(f"ALTER DOMAIN {name} VALIDATE CONSTRAINT {constraint_name};")

    statements += alter_comment("DOMAIN", name, source.comment, target.comment, config)
    statements += alter_owner("DOMAIN", name, source.owner, target.owner, config)
    statements += alter_privileges(ObjectType.DOMAIN, name, delta, config)
    return statements
