"""Heap nodes and the circular doubly-linked rings that hold them.

Every node belongs to exactly one ring at a time: either the root ring of a
heap or the child ring of a single parent. A node that is alone points to
itself in both directions. The functions here only rewire ``next``/``prev``;
the heap is responsible for ``parent``, ``child``, ``rank`` and ``lost``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

__all__ = [
    "HeapNode",
    "is_singleton",
    "join",
    "ring_nodes",
    "splice_after",
    "unlink",
]


@dataclass(eq=False)
class HeapNode[V]:
    """A single element of a Fibonacci heap.

    Nodes are handed out by ``FibHeap.insert`` and serve as handles for
    ``decrease_key`` and ``delete``. Clients may read any attribute but must
    not modify them.

    Attributes:
        key: The positive integer priority of this node.
        payload: Opaque data carried alongside the key.
        rank: Number of direct children.
        lost: Children lost to cuts since this node last became a child.
        parent: The parent node, or None for roots.
        child: Any one member of the child ring, or None when rank is 0.
        next: Successor in the ring holding this node.
        prev: Predecessor in the ring holding this node.
    """

    key: int
    payload: V
    rank: int = 0
    lost: int = 0
    parent: Optional[HeapNode[V]] = field(default=None, repr=False)
    child: Optional[HeapNode[V]] = field(default=None, repr=False)
    next: HeapNode[V] = field(init=False, repr=False)
    prev: HeapNode[V] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.next = self
        self.prev = self

    def is_root(self) -> bool:
        return self.parent is None


def is_singleton[V](node: HeapNode[V]) -> bool:
    return node.next is node


def ring_nodes[V](start: HeapNode[V]) -> List[HeapNode[V]]:
    """Collect the members of a ring, starting at ``start``.

    The result is a snapshot, so callers may rewire the ring while walking it.

    Args:
        start: Any member of the ring.

    Returns:
        The ring members in ``next`` order.
    """
    nodes = [start]
    cur = start.next
    while cur is not start:
        nodes.append(cur)
        cur = cur.next
    return nodes


def splice_after[V](node: HeapNode[V], anchor: HeapNode[V]) -> None:
    """Insert the singleton ``node`` directly after ``anchor``.

    Time Complexity: O(1)
    """
    node.next = anchor.next
    node.prev = anchor
    anchor.next.prev = node
    anchor.next = node


def unlink[V](node: HeapNode[V]) -> Optional[HeapNode[V]]:
    """Remove ``node`` from its ring, leaving it as a singleton.

    Time Complexity: O(1)

    Returns:
        A remaining member of the ring, or None if ``node`` was the only one.
    """
    if node.next is node:
        return None
    rest = node.next
    node.next.prev = node.prev
    node.prev.next = node.next
    node.next = node
    node.prev = node
    return rest


def join[V](first: HeapNode[V], second: HeapNode[V]) -> None:
    """Splice two disjoint rings into one by exchanging two neighbor pairs.

    Time Complexity: O(1)
    """
    first_next = first.next
    second_next = second.next
    first.next = second_next
    second_next.prev = first
    second.next = first_next
    first_next.prev = second
