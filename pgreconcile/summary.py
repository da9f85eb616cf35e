"""Per object kind counters of what a run produced."""

from dataclasses import dataclass, field

from .comparator import Action


@dataclass
class SummaryRow:
    """Counts for one object kind."""

    object_type: str
    source_count: int = 0
    target_count: int = 0
    added: int = 0
    removed: int = 0
    changed: int = 0

    @property
    def is_different(self) -> bool:
        return bool(self.added or self.removed or self.changed)


@dataclass
class Statistics:
    """Summary rows in the order object kinds were processed."""

    rows: dict[str, SummaryRow] = field(default_factory=dict)

    def row(self, object_type: str) -> SummaryRow:
        if object_type not in self.rows:
            self.rows[object_type] = SummaryRow(object_type)
        return self.rows[object_type]

    def record(self, object_type: str, action: Action) -> None:
        """Count one classification result."""
        row = self.row(object_type)
        if action == Action.ADD:
            row.added += 1
        elif action == Action.REMOVE:
            row.removed += 1
        elif action == Action.MODIFY:
            row.changed += 1

    def __iter__(self):
        return iter(self.rows.values())

    def has_differences(self) -> bool:
        return any(row.is_different for row in self.rows.values())

    @property
    def total_added(self) -> int:
        return sum(row.added for row in self.rows.values())

    @property
    def total_removed(self) -> int:
        return sum(row.removed for row in self.rows.values())

    @property
    def total_changed(self) -> int:
        return sum(row.changed for row in self.rows.values())
