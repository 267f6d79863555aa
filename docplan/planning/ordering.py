"""Dependency-respecting generation order for build descriptors."""

from __future__ import annotations

import heapq
from typing import Dict, List, Sequence, Set, Tuple

from ..logging import get_logger
from ..models import BuildDescriptor, StaleLink

_LOGGER = get_logger("planning.ordering")

NOT_PLANNED = "not-planned"
GENERATED_LATER = "generated-later"


def dependency_order(descriptors: Sequence[BuildDescriptor]) -> Tuple[BuildDescriptor, ...]:
    """Order descriptors so each comes after the components it links to offline.

    Ties keep plan order. A dependency cycle is broken by releasing its
    earliest member in plan order, which leaves a link inside the cycle stale.
    Components that only wait on a cycle are never released early.
    """
    index: Dict[Tuple[str, str], int] = {d.key: i for i, d in enumerate(descriptors)}
    dependents: Dict[int, Set[int]] = {i: set() for i in range(len(descriptors))}
    pending: Dict[int, int] = {}
    requires_of: Dict[int, Set[int]] = {}

    for position, descriptor in enumerate(descriptors):
        requires = {
            index[link.key]
            for link in descriptor.offline_links
            if link.key in index and index[link.key] != position
        }
        requires_of[position] = requires
        pending[position] = len(requires)
        for dependency in requires:
            dependents[dependency].add(position)

    ready = [position for position, count in pending.items() if count == 0]
    heapq.heapify(ready)
    ordered: List[int] = []
    done: Set[int] = set()

    while len(ordered) < len(descriptors):
        if not ready:
            position = next(
                p
                for p in range(len(descriptors))
                if p not in done and _on_cycle(p, requires_of, done)
            )
            _LOGGER.warning(
                "Dependency cycle involving %s:%s; generating it before its dependencies",
                descriptors[position].vendor,
                descriptors[position].name,
            )
            pending[position] = 0
            heapq.heappush(ready, position)
        position = heapq.heappop(ready)
        if position in done:
            continue
        done.add(position)
        ordered.append(position)
        for dependent in sorted(dependents[position]):
            if dependent in done:
                continue
            pending[dependent] -= 1
            if pending[dependent] == 0:
                heapq.heappush(ready, dependent)

    return tuple(descriptors[position] for position in ordered)


def _on_cycle(start: int, requires_of: Dict[int, Set[int]], done: Set[int]) -> bool:
    """True when ``start`` reaches itself through unfinished dependencies."""
    stack = [dep for dep in requires_of[start] if dep not in done]
    seen: Set[int] = set()
    while stack:
        node = stack.pop()
        if node == start:
            return True
        if node in seen:
            continue
        seen.add(node)
        stack.extend(dep for dep in requires_of[node] if dep not in done)
    return False


def find_stale_links(ordered: Sequence[BuildDescriptor]) -> Tuple[StaleLink, ...]:
    """Report offline links whose package index will not exist in time."""
    positions = {descriptor.key: i for i, descriptor in enumerate(ordered)}
    stale: List[StaleLink] = []
    for position, descriptor in enumerate(ordered):
        for link in descriptor.offline_links:
            target = positions.get(link.key)
            if target is None:
                stale.append(StaleLink(source=descriptor.key, link=link, reason=NOT_PLANNED))
            elif target > position:
                stale.append(StaleLink(source=descriptor.key, link=link, reason=GENERATED_LATER))
    return tuple(stale)


__all__ = ["GENERATED_LATER", "NOT_PLANNED", "dependency_order", "find_stale_links"]
