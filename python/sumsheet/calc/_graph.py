"""Dependency graph for formula cells."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable

from sumsheet._cell import CellIdentifier


class DependencyGraph:
    """Tracks formula cell dependencies.

    Edges may form cycles; every traversal here terminates regardless.
    """

    __slots__ = ("precedents", "dependents")

    def __init__(self) -> None:
        # cell -> cells it reads from
        self.precedents: dict[CellIdentifier, set[CellIdentifier]] = {}
        # cell -> cells that read from it (reverse edges)
        self.dependents: dict[CellIdentifier, set[CellIdentifier]] = {}

    @property
    def formula_cells(self) -> frozenset[CellIdentifier]:
        return frozenset(self.precedents)

    def add_formula(self, cell: CellIdentifier, references: Iterable[CellIdentifier]) -> None:
        """Register a formula cell, replacing any previous edges it had."""
        self.discard(cell)
        refs = set(references)
        self.precedents[cell] = refs
        for ref in refs:
            self.dependents.setdefault(ref, set()).add(cell)

    def discard(self, cell: CellIdentifier) -> None:
        """Drop the outgoing edges of *cell* (it is no longer a formula)."""
        refs = self.precedents.pop(cell, None)
        if not refs:
            return
        for ref in refs:
            readers = self.dependents.get(ref)
            if readers is None:
                continue
            readers.discard(cell)
            if not readers:
                del self.dependents[ref]

    def affected_cells(self, changed_cells: Iterable[CellIdentifier]) -> list[CellIdentifier]:
        """Find all formula cells that transitively read any changed cell.

        A changed cell is included only if some other changed cell leads
        back to it. Result is sorted by identifier.
        """
        affected: set[CellIdentifier] = set()
        queue: deque[CellIdentifier] = deque(changed_cells)
        visited: set[CellIdentifier] = set(queue)

        while queue:
            cell = queue.popleft()
            for dep in self.dependents.get(cell, ()):
                if dep in self.precedents:
                    affected.add(dep)
                if dep not in visited:
                    visited.add(dep)
                    queue.append(dep)

        return sorted(affected)

    def max_depth(self, roots: Iterable[CellIdentifier]) -> int:
        """Longest dependency chain from root cells through formula cells.

        Chains through a cycle are cut once they exceed the number of
        formula cells, the longest possible simple path.
        """
        roots = set(roots)
        if not roots:
            return 0

        limit = len(self.precedents)
        depth: dict[CellIdentifier, int] = {r: 0 for r in roots}
        queue: deque[CellIdentifier] = deque(roots)
        max_d = 0

        while queue:
            cell = queue.popleft()
            new_depth = depth[cell] + 1
            if new_depth > limit:
                continue
            for dep in self.dependents.get(cell, ()):
                if dep in self.precedents and new_depth > depth.get(dep, 0):
                    depth[dep] = new_depth
                    max_d = max(max_d, new_depth)
                    queue.append(dep)

        return max_d
