from fibheap.common import Impossible, InvalidArgument
from fibheap.heap import FibHeap, HeapStats
from fibheap.node import HeapNode

__all__ = [
    "FibHeap",
    "HeapNode",
    "HeapStats",
    "Impossible",
    "InvalidArgument",
]
