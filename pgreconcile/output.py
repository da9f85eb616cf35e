"""Two-phase statement buffer.

CREATE and ALTER statements are collected in ``pre`` and DROP statements in
``post``. Rendering always emits pre before post, whatever object kind
produced each statement, so new objects exist before dependents reference
them and old objects go away after their dependents.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TextIO


@dataclass
class OutputSink:
    """Ordered pre/post statement buffers for one run."""

    pre: list[str] = field(default_factory=list)
    post: list[str] = field(default_factory=list)

    def add_pre(self, statements: Iterable[str]) -> None:
        self.pre.extend(statements)

    def add_post(self, statements: Iterable[str]) -> None:
        self.post.extend(statements)

    def is_empty(self) -> bool:
        return not self.pre and not self.post

    def __len__(self) -> int:
        return len(self.pre) + len(self.post)

    def statements(self) -> list[str]:
        """All statements in output order."""
        return self.pre + self.post

    def render(self, header: list[str] | None = None) -> str:
        """Render the buffers, with a comment header, as one SQL script.

        Returns an empty string when there is nothing to do.
        """
        if self.is_empty():
            return ""
        lines = []
        if header:
            lines.append("--")
            lines.extend(f"-- {line}" for line in header)
            lines.append("--")
        parts = ["\n".join(lines)] if lines else []
        parts.extend(self.statements())
        return "\n\n".join(parts) + "\n"

    def write(self, fp: TextIO, header: list[str] | None = None) -> None:
        fp.write(self.render(header))
