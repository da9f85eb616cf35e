"""Option sets (reloptions, function configuration) and their deltas.

An option string such as ``fillfactor=70,autovacuum_enabled=true`` becomes
an OptionSet ordered by key. Two option sets reconcile into the keys to
RESET, the keys whose value changes and the keys to add.
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OptionEntry:
    """A bare flag (value is None) or a key=value pair."""

    key: str
    value: str | None = None

    def __str__(self) -> str:
        if self.value is None:
            return self.key
        return f"{self.key}={self.value}"


@dataclass(frozen=True)
class OptionSet:
    """Entries sorted by key, keys unique."""

    entries: tuple[OptionEntry, ...] = ()

    @property
    def keys(self) -> tuple[str, ...]:
        return tuple(entry.key for entry in self.entries)

    def get(self, key: str) -> OptionEntry | None:
        for entry in self.entries:
            if entry.key == key:
                return entry
        return None

    def __iter__(self):
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __str__(self) -> str:
        return format_options(self.entries)


@dataclass(frozen=True)
class OptionChange:
    """A key present on both sides with a different value."""

    key: str
    old: str | None
    new: str | None

    @property
    def entry(self) -> OptionEntry:
        return OptionEntry(self.key, self.new)


@dataclass(frozen=True)
class OptionDelta:
    """Result of reconciling two option sets."""

    to_reset: tuple[str, ...] = ()
    to_change: tuple[OptionChange, ...] = ()
    to_add: tuple[OptionEntry, ...] = ()
    # the target side has no options at all
    reset_all: bool = False

    @property
    def to_set(self) -> tuple[OptionEntry, ...]:
        """Entries for a SET (...) clause: changed values, then new keys."""
        return tuple(change.entry for change in self.to_change) + self.to_add

    def is_empty(self) -> bool:
        return not (self.to_reset or self.to_change or self.to_add)


EMPTY_DELTA = OptionDelta()


def _parse_token(token: str) -> OptionEntry | None:
    token = token.strip()
    if not token:
        return None
    key, sep, value = token.partition("=")
    key = key.strip()
    if not key:
        raise ValueError(f"option without a name: {token!r}")
    return OptionEntry(key, value.strip() if sep else None)


def parse_options(raw: str | Sequence[str] | None) -> OptionSet | None:
    """Build an OptionSet from a comma-separated string or a text[] value.

    Returns None when raw is None. A malformed token is logged and makes the
    whole set None, so reconciliation treats that side as "no options".
    """
    if raw is None:
        return None

    tokens: Iterable[str] = raw.split(",") if isinstance(raw, str) else raw
    parsed: dict[str, OptionEntry] = {}
    for token in tokens:
        try:
            entry = _parse_token(token)
        except ValueError as e:
            logger.warning("malformed option list %r: %s", raw, e)
            return None
        if entry is None:
            continue
        if entry.key in parsed:
            logger.warning("option %r repeated in %r, keeping the last value", entry.key, raw)
        parsed[entry.key] = entry
        logger.debug("option item: %s", entry)

    entries = tuple(sorted(parsed.values(), key=lambda e: e.key))
    return OptionSet(entries)


def format_options(entries: Iterable[OptionEntry | str]) -> str:
    """Render entries (or bare keys) as ``a=1, b``."""
    return ", ".join(str(entry) for entry in entries)


def reconcile_options(a: OptionSet | None, b: OptionSet | None) -> OptionDelta:
    """Compute what turns option set a into option set b.

    None on either side means "no options", which differs from an empty
    set only in that reset_all is flagged when b is None.
    """
    if a is None and b is None:
        return EMPTY_DELTA
    if a is None:
        return OptionDelta(to_add=b.entries)  # type: ignore[union-attr]
    if b is None:
        return OptionDelta(to_reset=a.keys, reset_all=True)

    to_reset: list[str] = []
    to_change: list[OptionChange] = []
    to_add: list[OptionEntry] = []

    left, right = a.entries, b.entries
    i = j = 0
    while i < len(left) or j < len(right):
        if i == len(left):
            to_add.append(right[j])
            j += 1
        elif j == len(right):
            to_reset.append(left[i].key)
            i += 1
        elif left[i].key == right[j].key:
            if left[i].value != right[j].value:
                to_change.append(OptionChange(left[i].key, left[i].value, right[j].value))
            i += 1
            j += 1
        elif left[i].key < right[j].key:
            to_reset.append(left[i].key)
            i += 1
        else:
            to_add.append(right[j])
            j += 1

    delta = OptionDelta(tuple(to_reset), tuple(to_change), tuple(to_add))
    logger.debug(
        "options: reset %s ; change %s ; add %s",
        delta.to_reset, [str(c.entry) for c in delta.to_change], [str(e) for e in delta.to_add],
    )
    return delta


def apply_delta(a: OptionSet | None, delta: OptionDelta) -> OptionSet | None:
    """Return the option set produced by applying delta to a."""
    if delta.reset_all:
        return None
    current = {entry.key: entry for entry in (a.entries if a else ())}
    if a is None and not delta.to_add:
        return None
    for key in delta.to_reset:
        current.pop(key, None)
    for entry in delta.to_set:
        current[entry.key] = entry
    return OptionSet(tuple(sorted(current.values(), key=lambda e: e.key)))
