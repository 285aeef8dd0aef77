"""Dependency sequencing: table creation order.

A table depends on another when it will hold a foreign key (or own a bridge
table) pointing at it, so the referenced table must be created first.
Independent tables keep alphabetical order, which makes the result
reproducible across runs.
"""

from __future__ import annotations

import heapq
import logging
from collections.abc import Iterable

from tablegraph.exceptions import CircularRelationshipError
from tablegraph.schema.models import MainTable

logger = logging.getLogger(__name__)


def sequence_tables(tables: Iterable[MainTable]) -> list[MainTable]:
    """Order tables so that every referenced table precedes its referencers.

    Tables are pre-sorted by name, then topologically sorted, always taking
    the ready table that comes first by name. Self-references are ignored:
    a table may hold a foreign key to itself.

    Args:
        tables: Tables to order

    Returns:
        Tables in creation order

    Raises:
        CircularRelationshipError: If the dependencies contain a cycle
    """
    nodes = sorted(tables, key=lambda t: t.name)

    # dependents[i]: indexes of tables that must come after nodes[i]
    dependents: list[list[int]] = [[] for _ in nodes]
    in_degree = [0] * len(nodes)
    for i, table in enumerate(nodes):
        for j, other in enumerate(nodes):
            if i != j and table.depends_on(other):
                dependents[j].append(i)
                in_degree[i] += 1

    ready = [i for i, degree in enumerate(in_degree) if degree == 0]
    heapq.heapify(ready)
    order: list[MainTable] = []
    while ready:
        index = heapq.heappop(ready)
        order.append(nodes[index])
        for dependent in dependents[index]:
            in_degree[dependent] -= 1
            if in_degree[dependent] == 0:
                heapq.heappush(ready, dependent)

    if len(order) != len(nodes):
        remaining = [table for i, table in enumerate(nodes) if in_degree[i] > 0]
        raise CircularRelationshipError(find_cycle(remaining))

    logger.info(f"Table creation order: {', '.join(t.name for t in order)}")
    return order


def find_cycle(tables: list[MainTable]) -> list[str]:
    """Extract one dependency cycle from tables that could not be ordered.

    Every table left over by the sort depends on another left-over table, so
    following dependencies from the first one must revisit a table.

    Returns:
        Table names along the cycle, first name repeated at the end
    """
    by_name = {t.name: t for t in tables}
    path: list[str] = []
    seen: dict[str, int] = {}
    current = tables[0]
    while current.name not in seen:
        seen[current.name] = len(path)
        path.append(current.name)
        current = next(
            by_name[name]
            for name in sorted(by_name)
            if name != current.name and current.depends_on(by_name[name])
        )
    cycle = path[seen[current.name] :]
    cycle.append(current.name)
    return cycle
