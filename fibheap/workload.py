"""Randomized workloads for measuring link and cut totals.

A workload drives a single heap through a seeded mix of operations so that the
structural counters of different cut thresholds can be compared on identical
operation sequences.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto, unique
from random import Random
from typing import List

from fibheap import constants
from fibheap.heap import FibHeap, HeapStats
from fibheap.node import HeapNode


@unique
class Op(Enum):
    Insert = auto()
    DecreaseKey = auto()
    DeleteMin = auto()
    Delete = auto()
    Meld = auto()


@dataclass(frozen=True)
class WorkloadConfig:
    """Parameters of a randomized workload.

    The weights are relative; an operation that cannot run (for example
    ``DeleteMin`` on an empty heap) falls back to an insert.
    """

    ops: int = constants.DEFAULT_WORKLOAD_OPS
    seed: int = constants.DEFAULT_WORKLOAD_SEED
    cut_threshold: int = constants.DEFAULT_CUT_THRESHOLD
    max_key: int = constants.DEFAULT_MAX_KEY
    insert_weight: int = 4
    decrease_weight: int = 4
    delete_min_weight: int = 2
    delete_weight: int = 1
    meld_weight: int = 1

    def weights(self) -> List[int]:
        return [
            self.insert_weight,
            self.decrease_weight,
            self.delete_min_weight,
            self.delete_weight,
            self.meld_weight,
        ]


def _pick_live(rand: Random, live: List[HeapNode[int]]) -> HeapNode[int]:
    # Swap-remove keeps picking O(1)
    index = rand.randrange(len(live))
    node = live[index]
    live[index] = live[-1]
    live.pop()
    return node


def run_workload(config: WorkloadConfig) -> HeapStats:
    """Run a seeded random operation mix and return the final heap counters.

    Args:
        config: The workload parameters.

    Returns:
        The stats of the heap after all operations.
    """
    rand = Random(config.seed)
    heap: FibHeap[int] = FibHeap(config.cut_threshold)
    live: List[HeapNode[int]] = []
    ops = list(Op)
    for step in range(config.ops):
        op = rand.choices(ops, weights=config.weights())[0]
        if op == Op.DecreaseKey and live:
            node = rand.choice(live)
            if node.key > 1:
                heap.decrease_key(node, rand.randint(1, node.key - 1))
        elif op == Op.DeleteMin and live:
            top = heap.find_min()
            assert top is not None
            live.remove(top)
            heap.delete_min()
        elif op == Op.Delete and live:
            heap.delete(_pick_live(rand, live))
        elif op == Op.Meld:
            other: FibHeap[int] = FibHeap(config.cut_threshold)
            for _ in range(rand.randint(1, 8)):
                live.append(other.insert(rand.randint(1, config.max_key), step))
            heap.meld(other)
        else:
            live.append(heap.insert(rand.randint(1, config.max_key), step))
    stats = heap.stats()
    logging.info(
        "c=%d ops=%d size=%d trees=%d links=%d cuts=%d",
        stats.cut_threshold,
        config.ops,
        stats.size,
        stats.trees,
        stats.total_links,
        stats.total_cuts,
    )
    return stats
