"""Statement writers, one module per object kind.

Every module exposes ``create(obj, config)``, ``drop(obj, config)`` and
``alter(source, target, delta, config)``, each returning a list of SQL
statements.
"""

from .common import ObjectDelta

__all__ = ["ObjectDelta"]
