import random
from dataclasses import dataclass

import pytest

from cadence import MissingPriorityError, PriorityQueue


@dataclass(eq=False)
class Item:
    priority: float
    name: str = ""


def drain(queue):
    out = []
    while queue.size() > 0:
        out.append(queue.pop())
    return out


def test_empty_queue():
    queue = PriorityQueue()
    assert queue.size() == 0
    assert queue.peek() is None
    assert queue.pop() is None


def test_push_none_is_ignored():
    queue = PriorityQueue()
    queue.push(None)
    assert queue.size() == 0


def test_push_without_priority_raises():
    queue = PriorityQueue()
    with pytest.raises(MissingPriorityError):
        queue.push(Item(priority=None))
    with pytest.raises(ValueError):
        queue.push(object())
    assert queue.size() == 0


def test_peek_does_not_remove():
    queue = PriorityQueue()
    low, high = Item(1), Item(5)
    queue.push(high)
    queue.push(low)
    assert queue.peek() is low
    assert queue.size() == 2


def test_pop_returns_items_in_priority_order():
    queue = PriorityQueue()
    for p in [5, 3, 8, 1, 9, 2, 7]:
        queue.push(Item(p))
    assert [item.priority for item in drain(queue)] == [1, 2, 3, 5, 7, 8, 9]
    assert queue.pop() is None


def test_heap_invariant_holds_for_random_pushes():
    rng = random.Random(1234)
    queue = PriorityQueue()
    for _ in range(200):
        queue.push(Item(rng.uniform(-100, 100)))
        top = queue.peek()
        assert all(top.priority <= item.priority for item in queue.items)


def test_remove_last_item():
    queue = PriorityQueue()
    a, b = Item(1), Item(2)
    queue.push(a)
    queue.push(b)
    queue.remove(b)
    assert queue.size() == 1
    assert queue.pop() is a


def test_remove_root():
    queue = PriorityQueue()
    items = [Item(p) for p in [4, 1, 3, 2]]
    for item in items:
        queue.push(item)
    queue.remove(items[1])
    assert [item.priority for item in drain(queue)] == [2, 3, 4]


def test_remove_unknown_item_is_noop():
    queue = PriorityQueue()
    queue.push(Item(1))
    queue.remove(Item(1))
    queue.remove(None)
    assert queue.size() == 1


def test_remove_uses_identity_not_priority():
    queue = PriorityQueue()
    first, twin = Item(3, "first"), Item(3, "twin")
    queue.push(first)
    queue.push(twin)
    queue.remove(twin)
    assert queue.size() == 1
    assert queue.pop() is first


@pytest.mark.parametrize("seed", [0, 1, 2, 3, 4])
def test_random_removals_keep_order(seed):
    rng = random.Random(seed)
    queue = PriorityQueue()
    items = [Item(rng.randint(0, 50)) for _ in range(60)]
    for item in items:
        queue.push(item)

    removed = rng.sample(items, 25)
    for item in removed:
        queue.remove(item)

    popped = drain(queue)
    priorities = [item.priority for item in popped]
    assert priorities == sorted(priorities)
    assert len(popped) == 35
    assert not any(item in removed for item in popped)


def test_clear():
    queue = PriorityQueue()
    for p in range(10):
        queue.push(Item(p))
    queue.clear()
    assert queue.size() == 0
    assert len(queue) == 0
    assert queue.peek() is None


def test_contains_and_len():
    queue = PriorityQueue()
    item = Item(1)
    assert item not in queue
    queue.push(item)
    assert item in queue
    assert len(queue) == 1
