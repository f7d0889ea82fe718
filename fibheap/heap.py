"""Mutable Fibonacci heap with a configurable cascading-cut threshold.

The heap keeps its trees in a circular doubly-linked root ring and caches a
pointer to the minimum root. Insertion and melding are lazy: they only splice
rings together. The real work happens in two places:

- ``delete_min`` promotes the children of the minimum to the root ring and
  then consolidates, linking roots of equal rank until at most one tree of
  each rank remains.
- ``decrease_key`` cuts a node that violates heap order away from its parent
  and then cascades upward, cutting every ancestor that has lost at least
  ``cut_threshold`` children since it last became a child.

With ``cut_threshold=2`` this is the textbook structure of Fredman and Tarjan,
where a node is "marked" after its first loss and cut on its second.

Every link and cut is counted over the lifetime of the heap, which makes the
structure useful for measuring amortized costs.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple, override

from fibheap import constants
from fibheap.common import Impossible, InvalidArgument, Iterating, Sized
from fibheap.node import HeapNode, join, ring_nodes, splice_after, unlink

__all__ = ["FibHeap", "HeapStats"]


@dataclass(frozen=True)
class HeapStats:
    """Snapshot of the structural counters of a heap.

    Attributes:
        size: Number of live nodes.
        trees: Number of roots in the root ring.
        total_links: Links performed over the lifetime of the heap.
        total_cuts: Cuts performed over the lifetime of the heap.
        cut_threshold: The cascading-cut threshold of the heap.
    """

    size: int
    trees: int
    total_links: int
    total_cuts: int
    cut_threshold: int


class FibHeap[V](Sized, Iterating[HeapNode[V]]):
    """A Fibonacci heap over positive integer keys"""

    def __init__(self, cut_threshold: int = constants.DEFAULT_CUT_THRESHOLD):
        """Create an empty heap.

        Args:
            cut_threshold: Number of children an ancestor may lose before it
                is itself cut. Must be at least 2.

        Raises:
            InvalidArgument: If ``cut_threshold`` is below 2.
        """
        if cut_threshold < constants.MIN_CUT_THRESHOLD:
            raise InvalidArgument(
                f"cut threshold must be >= {constants.MIN_CUT_THRESHOLD} (got {cut_threshold})"
            )
        self._cut_threshold = cut_threshold
        self._min: Optional[HeapNode[V]] = None
        self._size = 0
        self._trees = 0
        self._total_links = 0
        self._total_cuts = 0

    @staticmethod
    def mk(
        entries: Iterable[Tuple[int, V]],
        cut_threshold: int = constants.DEFAULT_CUT_THRESHOLD,
    ) -> FibHeap[V]:
        """Create a heap from an iterable of (key, payload) pairs.

        Args:
            entries: Pairs to insert, in order.
            cut_threshold: The cascading-cut threshold of the new heap.

        Returns:
            A heap containing all the given entries.
        """
        heap: FibHeap[V] = FibHeap(cut_threshold)
        for key, payload in entries:
            heap.insert(key, payload)
        return heap

    @property
    def cut_threshold(self) -> int:
        return self._cut_threshold

    @override
    def size(self) -> int:
        return self._size

    def num_trees(self) -> int:
        return self._trees

    def total_links(self) -> int:
        return self._total_links

    def total_cuts(self) -> int:
        return self._total_cuts

    def stats(self) -> HeapStats:
        return HeapStats(
            size=self._size,
            trees=self._trees,
            total_links=self._total_links,
            total_cuts=self._total_cuts,
            cut_threshold=self._cut_threshold,
        )

    # ===== Root ring =====

    def _splice_into_roots(
        self, node: HeapNode[V], anchor: Optional[HeapNode[V]]
    ) -> None:
        if anchor is None:
            node.next = node
            node.prev = node
            self._min = node
        else:
            splice_after(node, anchor)

    def _remove_from_roots(self, node: HeapNode[V]) -> None:
        rest = unlink(node)
        if rest is None:
            self._min = None
        elif self._min is node:
            self._min = rest

    def _remove_from_children(self, node: HeapNode[V], parent: HeapNode[V]) -> None:
        rest = unlink(node)
        if rest is None:
            parent.child = None
        elif parent.child is node:
            parent.child = rest

    def insert(self, key: int, payload: V = None) -> HeapNode[V]:  # type: ignore[assignment]
        """Insert a key with its payload.

        Time Complexity: O(1)

        Args:
            key: A positive integer priority.
            payload: Data to carry with the key.

        Returns:
            The new node, usable as a handle for ``decrease_key`` and ``delete``.

        Raises:
            InvalidArgument: If ``key`` is not positive.
        """
        if key <= 0:
            raise InvalidArgument(f"key must be positive (got {key})")
        node = HeapNode(key, payload)
        if self._min is None:
            self._splice_into_roots(node, None)
        else:
            self._splice_into_roots(node, self._min)
            if node.key < self._min.key:
                self._min = node
        self._size += 1
        self._trees += 1
        return node

    def find_min(self) -> Optional[HeapNode[V]]:
        """Return the node with the smallest key, or None if the heap is empty.

        Time Complexity: O(1)
        """
        return self._min

    def meld(self, other: Optional[FibHeap[V]]) -> None:
        """Move every node of ``other`` into this heap.

        Time Complexity: O(1)

        Afterwards ``other`` is empty. Its lifetime counters are added to ours
        and it should not be used as an independent heap again.

        Args:
            other: The heap to absorb. Nothing happens if it is None, empty,
                or this heap.
        """
        if other is None or other is self or other._min is None:
            return
        if self._min is None:
            self._min = other._min
        else:
            join(self._min, other._min)
            if other._min.key < self._min.key:
                self._min = other._min
        self._size += other._size
        self._trees += other._trees
        self._total_links += other._total_links
        self._total_cuts += other._total_cuts
        logging.debug(
            "melded %d nodes in %d trees, size now %d",
            other._size,
            other._trees,
            self._size,
        )
        other._min = None
        other._size = 0
        other._trees = 0

    # ===== Consolidation =====

    def _rank_bound(self) -> int:
        return int(math.log2(max(self._size, 1))) + constants.RANK_SLACK

    def _link(self, child: HeapNode[V], parent: HeapNode[V]) -> None:
        self._remove_from_roots(child)
        if parent.child is None:
            parent.child = child
        else:
            splice_after(child, parent.child)
        child.parent = parent
        child.lost = 0
        parent.rank += 1
        self._total_links += 1
        self._trees -= 1

    def _consolidate(self) -> int:
        if self._min is None:
            return 0
        slots: List[Optional[HeapNode[V]]] = [None] * self._rank_bound()
        links = 0
        for root in ring_nodes(self._min):
            winner = root
            rank = winner.rank
            while rank < len(slots) and slots[rank] is not None:
                loser = slots[rank]
                assert loser is not None
                if loser.key < winner.key:
                    winner, loser = loser, winner
                self._link(loser, winner)
                links += 1
                slots[rank] = None
                rank = winner.rank
            if rank >= len(slots):
                # Large thresholds allow ranks past the logarithmic bound
                slots.extend([None] * (rank + 1 - len(slots)))
            slots[rank] = winner
        self._min = None
        self._trees = 0
        for root in slots:
            if root is None:
                continue
            if self._min is None:
                self._splice_into_roots(root, None)
            else:
                root.next = root
                root.prev = root
                self._splice_into_roots(root, self._min)
                if root.key < self._min.key:
                    self._min = root
            self._trees += 1
        logging.debug("consolidated into %d trees with %d links", self._trees, links)
        return links

    # ===== Cuts =====

    def _cut(self, node: HeapNode[V], parent: HeapNode[V]) -> None:
        self._remove_from_children(node, parent)
        parent.rank -= 1
        node.parent = None
        self._splice_into_roots(node, self._min)
        self._trees += 1
        node.lost = 0
        if parent.parent is not None:
            parent.lost += 1
        self._total_cuts += 1

    def _lower_key(self, node: HeapNode[V], key: int) -> int:
        node.key = key
        cuts = 0
        parent = node.parent
        if parent is not None and node.key < parent.key:
            self._cut(node, parent)
            cuts += 1
            while parent.parent is not None and parent.lost >= self._cut_threshold:
                grand = parent.parent
                self._cut(parent, grand)
                cuts += 1
                parent = grand
            if cuts > 1:
                logging.debug("cascading cut stopped after %d cuts", cuts)
        assert self._min is not None
        if node.key < self._min.key:
            self._min = node
        return cuts

    def decrease_key(self, node: HeapNode[V], diff: int) -> int:
        """Decrease the key of ``node`` by ``diff`` and restore heap order.

        Time Complexity: O(log n) amortized

        Args:
            node: A node of this heap.
            diff: Amount to subtract, with ``0 < diff < node.key``.

        Returns:
            The number of cuts performed, including cascading ones.

        Raises:
            InvalidArgument: If ``node`` is None or ``diff`` is out of range.
                The heap is not modified in that case.
        """
        if node is None:
            raise InvalidArgument("node must not be None")
        if not 0 < diff < node.key:
            raise InvalidArgument(f"require 0 < diff < {node.key} (got {diff})")
        return self._lower_key(node, node.key - diff)

    # ===== Extraction =====

    def delete_min(self) -> int:
        """Remove the node with the smallest key.

        Time Complexity: O(log n) amortized

        Returns:
            The number of links performed while consolidating, or 0 if the
            heap was empty.
        """
        top = self._min
        if top is None:
            return 0
        if top.child is not None:
            for child in ring_nodes(top.child):
                unlink(child)
                child.parent = None
                child.lost = 0
                self._splice_into_roots(child, top)
                self._trees += 1
            top.child = None
            top.rank = 0
        self._remove_from_roots(top)
        self._size -= 1
        self._trees -= 1
        return self._consolidate()

    def delete(self, node: Optional[HeapNode[V]]) -> int:
        """Remove an arbitrary node from the heap.

        Time Complexity: O(log n) amortized

        The node is first forced below the current minimum and then extracted.
        Cuts caused by that step are added to ``total_cuts`` but are not part
        of the result.

        Args:
            node: A node of this heap. Nothing happens if it is None.

        Returns:
            The number of links performed by the extraction.
        """
        if node is None:
            return 0
        assert self._min is not None
        self._lower_key(node, self._min.key - 1)
        return self.delete_min()

    def drain(self) -> Iterator[Tuple[int, V]]:
        """Extract every element in ascending key order.

        Yields:
            (key, payload) pairs. The heap is empty once the generator finishes.
        """
        while self._min is not None:
            top = self._min
            self.delete_min()
            yield (top.key, top.payload)

    # ===== Traversal =====

    @override
    def iter(self) -> Iterator[HeapNode[V]]:
        """Iterate over all live nodes in structural (not key) order.

        The heap must not be modified while iterating.
        """
        if self._min is None:
            return
        stack = [self._min]
        while stack:
            start = stack.pop()
            for node in ring_nodes(start):
                yield node
                if node.child is not None:
                    stack.append(node.child)

    def validate(self) -> None:
        """Check every structural invariant of the heap.

        Raises:
            Impossible: If any ring, parent pointer, rank, counter or the
                heap order is inconsistent.
        """
        if self._min is None:
            if self._size != 0 or self._trees != 0:
                raise Impossible(
                    f"empty heap with size {self._size} and {self._trees} trees"
                )
            return
        roots = _checked_ring(self._min)
        if len(roots) != self._trees:
            raise Impossible(f"root ring has {len(roots)} nodes, expected {self._trees}")
        count = 0
        stack: List[HeapNode[V]] = []
        for root in roots:
            if root.parent is not None:
                raise Impossible(f"root {root.key} has a parent")
            if root.key < self._min.key:
                raise Impossible(f"root {root.key} is below min {self._min.key}")
            stack.append(root)
        while stack:
            node = stack.pop()
            count += 1
            if node.child is None:
                if node.rank != 0:
                    raise Impossible(f"node {node.key} has rank {node.rank} but no children")
                continue
            children = _checked_ring(node.child)
            if len(children) != node.rank:
                raise Impossible(
                    f"node {node.key} has rank {node.rank} but {len(children)} children"
                )
            for child in children:
                if child.parent is not node:
                    raise Impossible(f"child {child.key} does not point to its parent")
                if child.key < node.key:
                    raise Impossible(f"child {child.key} is below parent {node.key}")
                stack.append(child)
        if count != self._size:
            raise Impossible(f"found {count} nodes, expected {self._size}")


def _checked_ring[V](start: HeapNode[V]) -> List[HeapNode[V]]:
    nodes = ring_nodes(start)
    for node in nodes:
        if node.next.prev is not node or node.prev.next is not node:
            raise Impossible(f"ring links around {node.key} are not symmetric")
    return nodes
