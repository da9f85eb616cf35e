"""Main Database class that collects all catalog objects of one server."""

import logging
from dataclasses import dataclass, field

import psycopg

from ..exceptions import CatalogError, UnsupportedVersionError
from ..keywords import KEYWORDS_VERSION
from .domains import Domain, fetch_domains
from .event_triggers import EventTrigger, fetch_event_triggers
from .extensions import Extension, fetch_extensions
from .functions import Function, fetch_functions
from .indexes import Index, fetch_indexes
from .languages import Language, fetch_languages
from .materialized_views import MaterializedView, fetch_materialized_views
from .rules import Rule, fetch_rules
from .schemas import Schema, fetch_schemas
from .sequences import Sequence, fetch_sequences
from .tables import Table, fetch_tables
from .triggers import Trigger, fetch_triggers
from .types import (
    BaseType,
    CompositeType,
    EnumType,
    RangeType,
    fetch_base_types,
    fetch_composite_types,
    fetch_enum_types,
    fetch_range_types,
)
from .views import View, fetch_views

logger = logging.getLogger(__name__)

MINIMUM_SERVER_VERSION = 100000


def _fetch_server_version(conn: psycopg.Connection) -> tuple[int, str]:
    """Return (server_version_num, server_version) of the connected server."""
    with conn.cursor() as cur:
        cur.execute(
            "SELECT current_setting('server_version_num')::integer, "
            "current_setting('server_version')"
        )
        row = cur.fetchone()
    if row is None:
        raise CatalogError("could not determine server version")
    return row[0], row[1]


def major_version(version_num: int) -> int:
    """Major version (e.g. 16) of a server_version_num (e.g. 160002)."""
    return version_num // 10000


@dataclass
class Database:
    """A snapshot of the catalog objects of one PostgreSQL database.

    Every list is sorted by the ``key`` of its objects.
    """

    connection_string: str = ""
    server_version_num: int = 0
    server_version: str = ""
    languages: list[Language] = field(default_factory=list)
    schemas: list[Schema] = field(default_factory=list)
    extensions: list[Extension] = field(default_factory=list)
    base_types: list[BaseType] = field(default_factory=list)
    domains: list[Domain] = field(default_factory=list)
    enum_types: list[EnumType] = field(default_factory=list)
    range_types: list[RangeType] = field(default_factory=list)
    composite_types: list[CompositeType] = field(default_factory=list)
    sequences: list[Sequence] = field(default_factory=list)
    tables: list[Table] = field(default_factory=list)
    indexes: list[Index] = field(default_factory=list)
    functions: list[Function] = field(default_factory=list)
    views: list[View] = field(default_factory=list)
    materialized_views: list[MaterializedView] = field(default_factory=list)
    triggers: list[Trigger] = field(default_factory=list)
    rules: list[Rule] = field(default_factory=list)
    event_triggers: list[EventTrigger] = field(default_factory=list)

    @property
    def major_version(self) -> int:
        return major_version(self.server_version_num)

    @classmethod
    def from_connection_string(cls, connection_string: str) -> "Database":
        """Create a Database snapshot by connecting and fetching all objects."""
        db = cls(connection_string=connection_string)
        db.fetch_all()
        return db

    def fetch_all(self) -> None:
        """Fetch all catalog objects inside one transaction.

        The transaction is rolled back at the end, so the snapshot is
        consistent and nothing is left behind on the server.

        Raises:
            CatalogError: The connection or a catalog query failed.
            UnsupportedVersionError: The server is older than PostgreSQL 10.
        """
        try:
            with psycopg.connect(self.connection_string, autocommit=True) as conn:
                with conn.transaction():
                    self._fetch_objects(conn)
                    # consumed by the transaction block
                    raise psycopg.Rollback()
        except psycopg.Error as e:
            raise CatalogError(f"catalog query failed: {e}") from e

    def _fetch_objects(self, conn: psycopg.Connection) -> None:
        self.server_version_num, self.server_version = _fetch_server_version(conn)
        logger.debug("server version: %s (%d)", self.server_version, self.server_version_num)
        if self.server_version_num < MINIMUM_SERVER_VERSION:
            raise UnsupportedVersionError(
                f"PostgreSQL {self.server_version} is not supported (10 or later required)"
            )

        self.languages = fetch_languages(conn)
        self.schemas = fetch_schemas(conn)
        self.extensions = fetch_extensions(conn)
        self.base_types = fetch_base_types(conn)
        self.domains = fetch_domains(conn)
        self.enum_types = fetch_enum_types(conn)
        self.range_types = fetch_range_types(conn)
        self.composite_types = fetch_composite_types(conn)
        self.sequences = fetch_sequences(conn)
        self.tables = fetch_tables(conn)
        self.indexes = fetch_indexes(conn)
        self.functions = fetch_functions(conn)
        self.views = fetch_views(conn)
        self.materialized_views = fetch_materialized_views(conn)
        self.triggers = fetch_triggers(conn)
        self.rules = fetch_rules(conn)
        self.event_triggers = fetch_event_triggers(conn)
        logger.debug("fetched from %s:\n%s", self.server_version, self.summary())

    def summary(self) -> str:
        """Return a summary of the database contents."""
        return (
            f"  Languages: {len(self.languages)}\n"
            f"  Schemas: {len(self.schemas)}\n"
            f"  Extensions: {len(self.extensions)}\n"
            f"  Base Types: {len(self.base_types)}\n"
            f"  Domains: {len(self.domains)}\n"
            f"  Enum Types: {len(self.enum_types)}\n"
            f"  Range Types: {len(self.range_types)}\n"
            f"  Composite Types: {len(self.composite_types)}\n"
            f"  Sequences: {len(self.sequences)}\n"
            f"  Tables: {len(self.tables)}\n"
            f"  Indexes: {len(self.indexes)}\n"
            f"  Functions: {len(self.functions)}\n"
            f"  Views: {len(self.views)}\n"
            f"  Materialized Views: {len(self.materialized_views)}\n"
            f"  Triggers: {len(self.triggers)}\n"
            f"  Rules: {len(self.rules)}\n"
            f"  Event Triggers: {len(self.event_triggers)}"
        )


def check_versions(source: Database, target: Database, ignore_version: bool = False) -> None:
    """Refuse servers newer than the keyword table unless told otherwise.

    Raises:
        UnsupportedVersionError: A server is newer than the pinned keyword
            table and ignore_version is false.
    """
    newest = major_version(KEYWORDS_VERSION)
    for side, db in (("source", source), ("target", target)):
        if db.major_version > newest:
            message = (
                f"{side} server is PostgreSQL {db.server_version}; "
                f"identifier quoting is only known up to PostgreSQL {newest}"
            )
            if not ignore_version:
                raise UnsupportedVersionError(message + " (use --ignore-version to proceed)")
            logger.warning(message)

    if target.server_version_num < source.server_version_num:
        logger.warning(
            "target server (%s) is older than source server (%s); "
            "generated statements may not apply",
            target.server_version,
            source.server_version,
        )
