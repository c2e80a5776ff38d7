"""Dependency graph over discovered units: construction, cycle detection, leveling."""

from __future__ import annotations

from collections.abc import Iterator

from build_order.models import Unit

_PROCESSED = -1


class DependencyGraph:
    """Adjacency-list graph keyed by unit id.

    An edge ``a -> b`` means *a depends on b*. Successor sets are
    insertion-ordered and deduplicated. Every edge endpoint is a key of the
    adjacency map, so a node can exist before its unit metadata does.
    """

    def __init__(self) -> None:
        self._units: dict[str, Unit] = {}
        self._edges: dict[str, dict[str, None]] = {}

    # ── construction ──────────────────────────────────────────

    def add_unit(self, unit: Unit) -> None:
        """Insert or replace a unit's metadata; existing edges are kept."""
        self._units[unit.id] = unit
        self._edges.setdefault(unit.id, {})

    def add_edge(self, from_id: str, to_id: str) -> bool:
        """Record that ``from_id`` depends on ``to_id``.

        Both endpoints are created on demand. Returns False when the edge
        was already present.
        """
        successors = self._edges.setdefault(from_id, {})
        self._edges.setdefault(to_id, {})
        if to_id in successors:
            return False
        successors[to_id] = None
        return True

    # ── queries ───────────────────────────────────────────────

    @property
    def units(self) -> dict[str, Unit]:
        return dict(self._units)

    @property
    def nodes(self) -> list[str]:
        return list(self._edges)

    @property
    def edge_count(self) -> int:
        return sum(len(s) for s in self._edges.values())

    def successors(self, node_id: str) -> list[str]:
        return list(self._edges.get(node_id, ()))

    def has_edge(self, from_id: str, to_id: str) -> bool:
        return to_id in self._edges.get(from_id, ())

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._edges

    def __len__(self) -> int:
        return len(self._edges)

    def __iter__(self) -> Iterator[str]:
        return iter(self._edges)

    # ── cycles ────────────────────────────────────────────────

    def detect_cycles(self) -> set[str]:
        """Return every node that lies on at least one cycle.

        Tarjan's strongly-connected-components algorithm, run iteratively
        from every unvisited node so that all components are covered. A node
        is circular when its component has more than one member or when it
        has an edge to itself. The result does not depend on visit order.
        """
        index_of: dict[str, int] = {}
        lowlink: dict[str, int] = {}
        stack: list[str] = []
        on_stack: set[str] = set()
        circular: set[str] = set()
        counter = 0

        for root in self._edges:
            if root in index_of:
                continue

            index_of[root] = lowlink[root] = counter
            counter += 1
            stack.append(root)
            on_stack.add(root)
            work = [(root, iter(self._edges[root]))]

            while work:
                node, pending = work[-1]
                descended = False
                for succ in pending:
                    if succ not in index_of:
                        index_of[succ] = lowlink[succ] = counter
                        counter += 1
                        stack.append(succ)
                        on_stack.add(succ)
                        work.append((succ, iter(self._edges[succ])))
                        descended = True
                        break
                    if succ in on_stack:
                        lowlink[node] = min(lowlink[node], index_of[succ])
                if descended:
                    continue

                work.pop()
                if work:
                    parent = work[-1][0]
                    lowlink[parent] = min(lowlink[parent], lowlink[node])

                if lowlink[node] == index_of[node]:
                    component: list[str] = []
                    while True:
                        member = stack.pop()
                        on_stack.discard(member)
                        component.append(member)
                        if member == node:
                            break
                    if len(component) > 1 or node in self._edges[node]:
                        circular.update(component)

        return circular

    # ── leveling ──────────────────────────────────────────────

    def levels(self) -> list[list[str]]:
        """Group nodes into build levels.

        Kahn's algorithm counting *out*-degree: a node is ready once every
        node it depends on has been placed. Nodes that never become ready
        (cycles and whatever depends on them) are left out.
        """
        remaining = {node: len(succ) for node, succ in self._edges.items()}
        dependents: dict[str, list[str]] = {node: [] for node in self._edges}
        for node, succ in self._edges.items():
            for dep in succ:
                dependents[dep].append(node)

        result: list[list[str]] = []
        while True:
            current = [node for node, count in remaining.items() if count == 0]
            if not current:
                break
            for node in current:
                remaining[node] = _PROCESSED
            for node in current:
                for dependent in dependents[node]:
                    if remaining[dependent] > 0:
                        remaining[dependent] -= 1
            result.append(current)
        return result
