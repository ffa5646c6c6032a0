"""Tree traversal shared by stored threads and embedded legacy comments."""

from collections.abc import Callable, Iterable, Iterator
from typing import TypeVar

T = TypeVar("T")


def depth_first(
    root: T, children: Callable[[T], Iterable[T]]
) -> Iterator[tuple[T, T | None]]:
    """Walk a tree in depth-first pre-order without recursion.

    Each node is yielded once together with its parent (None for the root);
    siblings keep their original order. Depth is bounded by memory only.

    Args:
        root: Root node
        children: Returns the ordered children of a node

    Yields:
        ``(node, parent)`` pairs
    """
    stack: list[tuple[T, T | None]] = [(root, None)]
    while stack:
        node, parent = stack.pop()
        yield node, parent
        stack.extend((child, node) for child in reversed(list(children(node))))
