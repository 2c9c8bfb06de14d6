"""
Binary min-heap priority queue.

Items are arbitrary objects carrying a numeric ``priority`` attribute;
the item with the smallest priority sits at the root. The queue is not
indexed by item, so ``remove`` is a linear scan.

Equal priorities come out in no particular order.
"""

from typing import Any, List, Optional

from .errors import MissingPriorityError


class PriorityQueue:
    """Stores items sorted by their ``priority`` using a binary heap."""

    def __init__(self):
        self.items: List[Any] = []

    def push(self, item):
        """Add an item to the queue.

        ``None`` is ignored. Items without a priority are rejected.
        """
        if item is None:
            return

        if getattr(item, "priority", None) is None:
            raise MissingPriorityError(
                "An item without a priority cannot be added to the queue."
            )

        self.items.append(item)
        self._bubble_up(len(self.items) - 1)

    def peek(self) -> Optional[Any]:
        """Return the highest-priority item without removing it."""
        return self.items[0] if self.items else None

    def pop(self) -> Optional[Any]:
        """Remove and return the highest-priority item."""
        if not self.items:
            return None

        result = self.items[0]
        end = self.items.pop()

        # Put the last element at the root and let it sink down
        if self.items:
            self.items[0] = end
            self._sink_down(0)

        return result

    def remove(self, item):
        """Remove a specific item (by identity) from the queue."""
        length = len(self.items)
        for i in range(length):
            if self.items[i] is not item:
                continue

            end = self.items.pop()
            if i == length - 1:
                break

            # Fill the hole with the popped element; only one of these moves it
            self.items[i] = end
            self._bubble_up(i)
            self._sink_down(i)
            break

    def size(self) -> int:
        return len(self.items)

    def clear(self):
        self.items = []

    def __len__(self):
        return len(self.items)

    def __bool__(self):
        return bool(self.items)

    def __contains__(self, item):
        return any(existing is item for existing in self.items)

    def _bubble_up(self, n: int):
        item = self.items[n]

        while n > 0:
            parent_n = (n - 1) >> 1
            parent = self.items[parent_n]
            if parent.priority <= item.priority:
                break

            self.items[parent_n] = item
            self.items[n] = parent
            n = parent_n

    def _sink_down(self, n: int):
        length = len(self.items)
        item = self.items[n]

        while True:
            child2_n = (n + 1) * 2
            child1_n = child2_n - 1
            swap = None
            child1 = None

            if child1_n < length:
                child1 = self.items[child1_n]
                if child1.priority < item.priority:
                    swap = child1_n

            if child2_n < length:
                child2 = self.items[child2_n]
                smallest = item if swap is None else child1
                if child2.priority < smallest.priority:
                    swap = child2_n

            if swap is None:
                break

            self.items[n] = self.items[swap]
            self.items[swap] = item
            n = swap
