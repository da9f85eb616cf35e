"""Run configuration: INI file plus command-line overrides."""

import configparser
import logging
from dataclasses import dataclass, field
from pathlib import Path

from psycopg.conninfo import make_conninfo

from .exceptions import ConfigError

logger = logging.getLogger(__name__)

APPLICATION_NAME = "pgreconcile"

_CONNECTION_KEYS = ("host", "port", "user", "password", "dbname")


@dataclass
class ConnectionConfig:
    """How to reach one of the two databases."""

    conninfo: str = ""
    host: str | None = None
    port: str | None = None
    user: str | None = None
    password: str | None = None
    dbname: str | None = None

    def to_conninfo(self) -> str:
        """Build a libpq connection string; explicit fields win over conninfo."""
        params = {
            key: getattr(self, key)
            for key in _CONNECTION_KEYS
            if getattr(self, key) is not None
        }
        return make_conninfo(
            self.conninfo,
            fallback_application_name=APPLICATION_NAME,
            **params,
        )

    def describe(self) -> str:
        """Connection description without the password, for messages."""
        if self.conninfo and not any(getattr(self, k) for k in _CONNECTION_KEYS):
            return self.conninfo
        host = self.host or "localhost"
        port = self.port or "5432"
        return f"{self.dbname or ''}@{host}:{port}"


@dataclass
class ReconcileConfig:
    """Options that shape one comparison run."""

    output: str = "-"
    verbose: bool = False
    statistics: bool = False
    comment: bool = False
    owner: bool = False
    privileges: bool = False
    ignore_version: bool = False
    source: ConnectionConfig = field(default_factory=ConnectionConfig)
    target: ConnectionConfig = field(default_factory=ConnectionConfig)


def _get_boolean(parser: configparser.ConfigParser, key: str, default: bool) -> bool:
    try:
        return parser.getboolean("general", key, fallback=default)
    except ValueError:
        raise ConfigError(
            f'invalid value for boolean option "{key}": {parser.get("general", key)}'
        ) from None


def _connection_from_section(parser: configparser.ConfigParser, section: str) -> ConnectionConfig:
    if not parser.has_section(section):
        return ConnectionConfig()
    values = {key: parser.get(section, key, fallback=None) for key in _CONNECTION_KEYS}
    return ConnectionConfig(
        conninfo=parser.get(section, "conninfo", fallback=""),
        **values,
    )


def load_config(path: str | Path) -> ReconcileConfig:
    """Read an INI configuration file.

    Sections: ``[general]`` (output, verbose, statistics, comment, owner,
    privileges, ignore-version), ``[from]`` and ``[to]`` (host, port, user,
    password, dbname or conninfo).
    """
    path = Path(path)
    parser = configparser.ConfigParser(interpolation=None)
    try:
        with path.open() as fp:
            parser.read_file(fp)
    except OSError as e:
        raise ConfigError(f"could not read config file {path}: {e}") from e
    except configparser.Error as e:
        raise ConfigError(f"error while loading config file {path}: {e}") from e

    logger.debug("config file %s loaded", path)
    for section in parser.sections():
        for key, value in parser.items(section):
            if key == "password":
                value = "********"
            logger.debug('section: "%s" ; key: "%s" ; value: "%s"', section, key, value)

    return ReconcileConfig(
        output=parser.get("general", "output", fallback="-"),
        verbose=_get_boolean(parser, "verbose", False),
        statistics=_get_boolean(parser, "statistics", False),
        comment=_get_boolean(parser, "comment", False),
        owner=_get_boolean(parser, "owner", False),
        privileges=_get_boolean(parser, "privileges", False),
        ignore_version=_get_boolean(parser, "ignore-version", False),
        source=_connection_from_section(parser, "from"),
        target=_connection_from_section(parser, "to"),
    )
