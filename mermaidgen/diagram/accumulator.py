"""Thread-safe, deduplicating collection of diagram statements."""

from __future__ import annotations

import threading
from typing import Iterable, List, Optional, Sequence, Set, Tuple

import yaml

DEFAULT_TITLE = "Class Diagram"


class ClassDiagram:
    """Ordered set of unique Mermaid statements for one generation run.

    Statements are compared by exact text. The first occurrence of a statement fixes
    its position; later duplicates are dropped. ``add`` is safe to call from several
    worker threads at once.
    """

    def __init__(self, title: Optional[str] = None) -> None:
        self.title = title
        self._lock = threading.Lock()
        self._statements: List[str] = []
        self._seen: Set[str] = set()

    def add(self, statement: str) -> bool:
        """Insert ``statement`` unless an identical one exists; return True if inserted."""
        with self._lock:
            if statement in self._seen:
                return False
            self._seen.add(statement)
            self._statements.append(statement)
            return True

    def extend(self, statements: Iterable[str]) -> int:
        """Add statements one by one, preserving their order; return how many were new."""
        return sum(1 for statement in statements if self.add(statement))

    @property
    def statements(self) -> Tuple[str, ...]:
        with self._lock:
            return tuple(self._statements)

    def render(self, title: Optional[str] = None) -> str:
        """Return the Mermaid document; never mutates the collection."""
        return render_diagram(self.statements, title or self.title or DEFAULT_TITLE)

    def __len__(self) -> int:
        with self._lock:
            return len(self._statements)

    def __contains__(self, statement: object) -> bool:
        with self._lock:
            return statement in self._seen


def _front_matter(title: str) -> str:
    # Plain titles stay unquoted; anything YAML would misread gets quoted.
    return yaml.safe_dump(
        {"title": title}, allow_unicode=True, default_flow_style=False, width=float("inf")
    ).rstrip("\n")


def render_diagram(statements: Sequence[str], title: str) -> str:
    """Wrap statements in the front-matter title block and the classDiagram section."""
    lines = ["---", _front_matter(title), "---", "classDiagram"]
    lines.extend(f"\t{statement}" for statement in statements)
    return "\n".join(lines) + "\n"


__all__ = ["ClassDiagram", "DEFAULT_TITLE", "render_diagram"]
