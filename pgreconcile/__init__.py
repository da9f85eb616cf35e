"""pgreconcile - turn one PostgreSQL schema into another."""

__version__ = "0.1.0"

from .comparator import Action, Classification, classify
from .config import ConnectionConfig, ReconcileConfig, load_config
from .db import Database, check_versions
from .driver import OBJECT_KINDS, ReconcileResult, reconcile_databases
from .exceptions import CatalogError, ConfigError, ReconcileError, UnsupportedVersionError
from .identifiers import format_identifier, qualified_name
from .options import OptionDelta, OptionSet, parse_options, reconcile_options
from .output import OutputSink
from .privileges import AclChange, AclEntry, diff_privileges, parse_acl, reconcile_acl
from .summary import Statistics, SummaryRow

__all__ = [
    "__version__",
    "Action",
    "Classification",
    "classify",
    "ConnectionConfig",
    "ReconcileConfig",
    "load_config",
    "Database",
    "check_versions",
    "OBJECT_KINDS",
    "ReconcileResult",
    "reconcile_databases",
    "CatalogError",
    "ConfigError",
    "ReconcileError",
    "UnsupportedVersionError",
    "format_identifier",
    "qualified_name",
    "OptionDelta",
    "OptionSet",
    "parse_options",
    "reconcile_options",
    "OutputSink",
    "AclChange",
    "AclEntry",
    "diff_privileges",
    "parse_acl",
    "reconcile_acl",
    "Statistics",
    "SummaryRow",
]
