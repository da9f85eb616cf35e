"""CREATE/DROP RULE statements."""

from ..config import ReconcileConfig
from ..db.rules import Rule
from ..identifiers import format_identifier, qualified_name
from .common import ObjectDelta, alter_comment, create_comment


def _target(rule: Rule) -> str:
    table = qualified_name(rule.schema_name, rule.table_name)
    return f"{format_identifier(rule.rule_name)} ON {table}"


def create(rule: Rule, config: ReconcileConfig) -> list[str]:
    statements = [rule.definition + ";"]
    statements += create_comment("RULE", _target(rule), rule.comment, config)
    return statements


def drop(rule: Rule, config: ReconcileConfig) -> list[str]:
    return [f"DROP RULE {_target(rule)};"]


def alter(source: Rule, target: Rule, delta: ObjectDelta, config: ReconcileConfig) -> list[str]:
    statements = []
    if source.definition != target.definition:
        statements.append(target.definition.replace("CREATE RULE", "CREATE OR REPLACE RULE", 1) + ";")
    statements += alter_comment("RULE", _target(target), source.comment, target.comment, config)
    return statements
