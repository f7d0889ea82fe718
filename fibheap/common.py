"""Common types shared by the fibheap modules.

This module provides the exception types raised by the heap and the small
collection mixins that give it the usual Python container protocol.
"""

from __future__ import annotations

from abc import ABCMeta, abstractmethod
from typing import Iterator, List

__all__ = [
    "Impossible",
    "InvalidArgument",
    "Iterating",
    "Sized",
]


class InvalidArgument(ValueError):
    """Exception raised when an operation is called outside its precondition.

    Raised before any structural mutation, so the heap is left unchanged.
    """

    pass


class Impossible(Exception):
    """Exception raised when encountering theoretically impossible states.

    Used to indicate internal consistency violations in the heap structure.
    """

    pass


class Sized(metaclass=ABCMeta):
    @abstractmethod
    def size(self) -> int: ...

    def null(self) -> bool:
        return self.size() == 0

    def __bool__(self) -> bool:
        return not self.null()

    def __len__(self) -> int:
        return self.size()


class Iterating[U](metaclass=ABCMeta):
    @abstractmethod
    def iter(self) -> Iterator[U]: ...

    def list(self) -> List[U]:
        return list(self.iter())

    def __iter__(self) -> Iterator[U]:
        return self.iter()
