"""Catalog introspection submodule for pgreconcile."""

from .database import Database, check_versions
from .columns import Column
from .constraints import Constraint
from .domains import Domain, DomainConstraint
from .event_triggers import EventTrigger
from .extensions import Extension
from .functions import Function
from .indexes import Index
from .languages import Language
from .materialized_views import MaterializedView
from .rules import Rule
from .schemas import Schema
from .sequences import Sequence
from .tables import Table
from .triggers import Trigger
from .types import BaseType, CompositeType, EnumType, RangeType, TypeAttribute
from .views import View

__all__ = [
    "Database",
    "check_versions",
    "BaseType",
    "Column",
    "CompositeType",
    "Constraint",
    "Domain",
    "DomainConstraint",
    "EnumType",
    "EventTrigger",
    "Extension",
    "Function",
    "Index",
    "Language",
    "MaterializedView",
    "RangeType",
    "Rule",
    "Schema",
    "Sequence",
    "Table",
    "Trigger",
    "TypeAttribute",
    "View",
]
