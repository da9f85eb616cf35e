"""Access control lists and the GRANT/REVOKE deltas between them.

PostgreSQL reports an ACL as an array literal such as
``{=r/postgres,alice=rw/postgres}``. Each item is
``grantee=privileges/grantor``; an empty grantee is PUBLIC, stored here as
the empty string.
"""

import logging
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)

# privilege code -> keyword, in the order aclitemout prints them
PRIVILEGE_KEYWORDS: dict[str, str] = {
    "a": "INSERT",
    "r": "SELECT",
    "w": "UPDATE",
    "d": "DELETE",
    "D": "TRUNCATE",
    "x": "REFERENCES",
    "t": "TRIGGER",
    "X": "EXECUTE",
    "U": "USAGE",
    "C": "CREATE",
    "c": "CONNECT",
    "T": "TEMPORARY",
    "s": "SET",
    "A": "ALTER SYSTEM",
    "m": "MAINTAIN",
}


class ObjectType(Enum):
    """Object class as written after ``GRANT ... ON``."""

    TABLE = "TABLE"
    SEQUENCE = "SEQUENCE"
    FUNCTION = "FUNCTION"
    PROCEDURE = "PROCEDURE"
    SCHEMA = "SCHEMA"
    DOMAIN = "DOMAIN"
    TYPE = "TYPE"
    LANGUAGE = "LANGUAGE"


class AclAction(Enum):
    """Kind of privilege change."""

    REVOKE_ALL = "revoke all"
    GRANT_ALL = "grant all"
    REVOKE = "revoke"
    GRANT = "grant"

    @property
    def is_grant(self) -> bool:
        return self in (AclAction.GRANT, AclAction.GRANT_ALL)


@dataclass(frozen=True)
class AclEntry:
    """Privileges one grantor gave one grantee."""

    grantee: str
    grantor: str
    privileges: str

    @property
    def is_public(self) -> bool:
        return self.grantee == ""


@dataclass(frozen=True)
class AclChange:
    """One GRANT or REVOKE to emit."""

    action: AclAction
    grantee: str
    privileges: str


class MalformedAclError(ValueError):
    """An ACL string does not follow the aclitem array syntax."""


def _split_array(raw: str) -> list[str]:
    """Split a one-dimensional array literal into its unescaped elements."""
    if len(raw) < 2 or raw[0] != "{" or raw[-1] != "}":
        raise MalformedAclError(f"missing array delimiters in {raw!r}")

    body = raw[1:-1]
    if body == "":
        return []

    items: list[str] = []
    current: list[str] = []
    quoted = False
    pos = 0
    while pos < len(body):
        ch = body[pos]
        if quoted:
            if ch == "\\":
                pos += 1
                if pos == len(body):
                    raise MalformedAclError(f"dangling escape in {raw!r}")
                current.append(body[pos])
            elif ch == '"':
                quoted = False
            else:
                current.append(ch)
        elif ch == '"':
            quoted = True
        elif ch == ",":
            items.append("".join(current))
            current = []
        else:
            current.append(ch)
        pos += 1

    if quoted:
        raise MalformedAclError(f"unterminated quote in {raw!r}")
    items.append("".join(current))
    return items


def _read_role(text: str, pos: int, stop: str) -> tuple[str, int]:
    """Read a possibly double-quoted role name up to the stop character."""
    if pos < len(text) and text[pos] == '"':
        name: list[str] = []
        pos += 1
        while pos < len(text):
            if text[pos] == '"':
                if pos + 1 < len(text) and text[pos + 1] == '"':
                    name.append('"')
                    pos += 2
                    continue
                return "".join(name), pos + 1
            name.append(text[pos])
            pos += 1
        raise MalformedAclError(f"unterminated role name in {text!r}")

    end = text.find(stop, pos) if stop else -1
    if end == -1:
        end = len(text)
    return text[pos:end], end


def split_acl_item(item: str) -> AclEntry:
    """Parse one ``grantee=privileges/grantor`` item."""
    grantee, pos = _read_role(item, 0, "=")
    if pos >= len(item) or item[pos] != "=":
        raise MalformedAclError(f"missing '=' in ACL item {item!r}")

    slash = item.find("/", pos + 1)
    if slash == -1:
        raise MalformedAclError(f"missing grantor in ACL item {item!r}")
    privileges = item[pos + 1:slash]
    # grant options (r*) are not tracked
    privileges = privileges.replace("*", "")
    unknown = set(privileges) - set(PRIVILEGE_KEYWORDS)
    if unknown:
        raise MalformedAclError(
            f"unknown privilege code(s) {''.join(sorted(unknown))!r} in {item!r}"
        )

    grantor, _ = _read_role(item, slash + 1, "")
    return AclEntry(grantee=grantee, grantor=grantor, privileges=privileges)


def parse_acl(raw: str | None) -> tuple[AclEntry, ...] | None:
    """Parse an aclitem[] literal into entries sorted by grantee.

    Returns None for a NULL ACL and, after logging a warning, for a malformed
    one. Entries for the same grantee from different grantors are merged.
    """
    if raw is None:
        logger.debug("acl is empty")
        return None

    try:
        items = [split_acl_item(item) for item in _split_array(raw)]
    except MalformedAclError as e:
        logger.warning("malformed ACL %r: %s", raw, e)
        return None

    merged: dict[str, AclEntry] = {}
    for entry in items:
        previous = merged.get(entry.grantee)
        if previous is not None:
            codes = previous.privileges + diff_privileges(entry.privileges, previous.privileges)
            entry = AclEntry(entry.grantee, previous.grantor, codes)
        merged[entry.grantee] = entry

    acl = tuple(sorted(merged.values(), key=lambda e: e.grantee))
    for entry in acl:
        logger.debug("grantee: %r ; privs: %s", entry.grantee, entry.privileges)
    return acl


def diff_privileges(p: str, q: str | None) -> str:
    """Return the codes of p that are not in q, keeping p's order."""
    if q is None:
        return p
    return "".join(code for code in p if code not in q)


def reconcile_acl(
    a: tuple[AclEntry, ...] | None,
    b: tuple[AclEntry, ...] | None,
) -> list[AclChange]:
    """Compute the REVOKE/GRANT sequence that turns ACL a into ACL b.

    For a grantee on both sides the revoke always precedes the grant.
    """
    left = a or ()
    right = b or ()
    changes: list[AclChange] = []

    i = j = 0
    while i < len(left) or j < len(right):
        if i == len(left):
            logger.debug("grant to %r: target only", right[j].grantee)
            changes.append(AclChange(AclAction.GRANT_ALL, right[j].grantee, right[j].privileges))
            j += 1
        elif j == len(right):
            logger.debug("revoke from %r: source only", left[i].grantee)
            changes.append(AclChange(AclAction.REVOKE_ALL, left[i].grantee, left[i].privileges))
            i += 1
        elif left[i].grantee == right[j].grantee:
            grantee = left[i].grantee
            revoked = diff_privileges(left[i].privileges, right[j].privileges)
            granted = diff_privileges(right[j].privileges, left[i].privileges)
            if revoked:
                changes.append(AclChange(AclAction.REVOKE, grantee, revoked))
            if granted:
                changes.append(AclChange(AclAction.GRANT, grantee, granted))
            i += 1
            j += 1
        elif left[i].grantee < right[j].grantee:
            logger.debug("revoke from %r: source only", left[i].grantee)
            changes.append(AclChange(AclAction.REVOKE_ALL, left[i].grantee, left[i].privileges))
            i += 1
        else:
            logger.debug("grant to %r: target only", right[j].grantee)
            changes.append(AclChange(AclAction.GRANT_ALL, right[j].grantee, right[j].privileges))
            j += 1

    return changes


def apply_changes(
    a: tuple[AclEntry, ...] | None,
    changes: list[AclChange],
    grantor: str = "",
) -> tuple[AclEntry, ...]:
    """Return the ACL produced by applying changes to a."""
    current = {entry.grantee: entry for entry in (a or ())}
    for change in changes:
        previous = current.get(change.grantee)
        if change.action is AclAction.REVOKE_ALL:
            current.pop(change.grantee, None)
        elif change.action is AclAction.REVOKE and previous is not None:
            remaining = diff_privileges(previous.privileges, change.privileges)
            if remaining:
                current[change.grantee] = AclEntry(change.grantee, previous.grantor, remaining)
            else:
                current.pop(change.grantee)
        elif change.action.is_grant:
            codes = change.privileges
            owner = grantor
            if previous is not None:
                codes = previous.privileges + diff_privileges(change.privileges, previous.privileges)
                owner = previous.grantor
            current[change.grantee] = AclEntry(change.grantee, owner, codes)
    return tuple(sorted(current.values(), key=lambda e: e.grantee))


def format_privileges(codes: str, columns: str | None = None) -> str:
    """Render privilege codes as ``SELECT, UPDATE`` (optionally per column)."""
    keywords = [PRIVILEGE_KEYWORDS[code] for code in codes]
    if columns:
        keywords = [f"{keyword} ({columns})" for keyword in keywords]
    logger.debug("privileges: %s", ", ".join(keywords))
    return ", ".join(keywords)
