"""CREATE/ALTER/DROP LANGUAGE statements."""

from ..config import ReconcileConfig
from ..db.languages import Language
from ..identifiers import format_identifier
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


def _definition(language: Language, replace: bool = False) -> str:
    parts = ["CREATE"]
    if replace:
        parts.append("OR REPLACE")
    if language.trusted:
        parts.append("TRUSTED")
    parts.append(f"LANGUAGE {format_identifier(language.language_name)}")
    if language.call_handler:
        parts.append(f"HANDLER {language.call_handler}")
        if language.inline_handler:
            parts.append(f"INLINE {language.inline_handler}")
        if language.validator:
            parts.append(f"VALIDATOR {language.validator}")
    return " ".join(parts) + ";"


def create(language: Language, config: ReconcileConfig) -> list[str]:
    name = format_identifier(language.language_name)
    statements = [_definition(language)]
    statements += create_comment("LANGUAGE", name, language.comment, config)
    statements += create_owner("LANGUAGE", name, language.owner, config)
    statements += create_privileges(ObjectType.LANGUAGE, name, language.acl, config)
    return statements


def drop(language: Language, config: ReconcileConfig) -> list[str]:
    return [f"DROP LANGUAGE {format_identifier(language.language_name)};"]


def alter(
    source: Language, target: Language, delta: ObjectDelta, config: ReconcileConfig
) -> list[str]:
    name = format_identifier(target.language_name)
    statements = []
    if (source.trusted, source.call_handler, source.inline_handler, source.validator) != (
        target.trusted, target.call_handler, target.inline_handler, target.validator
    ):
        statements.append(_definition(target, replace=True))
    statements += alter_comment("LANGUAGE", name, source.comment, target.comment, config)
    statements += alter_owner("LANGUAGE", name, source.owner, target.owner, config)
    statements += alter_privileges(ObjectType.LANGUAGE, name, delta, config)
    return statements
