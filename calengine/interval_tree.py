"""
AVL-balanced interval tree over closed intervals [start, end].

Used by CalendarStore to answer conflict, date and busy lookups without
scanning every event. Both interval ends are inclusive, matching the
calendar's overlap rule.
"""

from typing import Any, Generic, Iterator, Optional, TypeVar

# T is the totally ordered coordinate type (datetime for the calendar)
T = TypeVar('T')


class IntervalNode(Generic[T]):
    """Tree node holding one interval and its payload."""
    __slots__ = ['start', 'end', 'data', 'left', 'right', 'parent', 'max_end', 'height']

    def __init__(self, start: T, end: T, data: Any):
        self.start: T = start
        self.end: T = end
        self.data: Any = data
        self.left: Optional['IntervalNode[T]'] = None
        self.right: Optional['IntervalNode[T]'] = None
        self.parent: Optional['IntervalNode[T]'] = None
        self.max_end: T = end
        self.height: int = 1


class IntervalTree(Generic[T]):
    def __init__(self):
        self.root: Optional[IntervalNode[T]] = None
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def clear(self):
        self.root = None
        self._size = 0

    # --- Internal Utilities ---

    @staticmethod
    def _height(node: Optional[IntervalNode[T]]) -> int:
        return node.height if node else 0

    def _update(self, node: IntervalNode[T]):
        node.height = 1 + max(self._height(node.left), self._height(node.right))
        m = node.end
        if node.left and node.left.max_end > m:
            m = node.left.max_end
        if node.right and node.right.max_end > m:
            m = node.right.max_end
        node.max_end = m

    def _replace_child(self, parent: Optional[IntervalNode[T]], old: IntervalNode[T], new: IntervalNode[T]):
        if parent is None:
            self.root = new
        elif parent.left is old:
            parent.left = new
        else:
            parent.right = new

    def _rotate_left(self, x: IntervalNode[T]):
        y = x.right
        x.right = y.left
        if y.left:
            y.left.parent = x
        y.parent = x.parent
        self._replace_child(x.parent, x, y)
        y.left = x
        x.parent = y
        self._update(x)
        self._update(y)

    def _rotate_right(self, y: IntervalNode[T]):
        x = y.left
        y.left = x.right
        if x.right:
            x.right.parent = y
        x.parent = y.parent
        self._replace_child(y.parent, y, x)
        x.right = y
        y.parent = x
        self._update(y)
        self._update(x)

    def _rebalance(self, node: Optional[IntervalNode[T]]):
        # Walk up to the root fixing heights, max_end and AVL balance
        while node:
            self._update(node)
            balance = self._height(node.left) - self._height(node.right)
            if balance > 1:
                if self._height(node.left.left) < self._height(node.left.right):
                    self._rotate_left(node.left)
                self._rotate_right(node)
            elif balance < -1:
                if self._height(node.right.right) < self._height(node.right.left):
                    self._rotate_right(node.right)
                self._rotate_left(node)
            node = node.parent

    # --- Public API ---

    def insert(self, start: T, end: T, data: Any) -> IntervalNode[T]:
        """Insert [start, end] with an attached payload. Requires start <= end."""
        if end < start:
            raise ValueError(f"Interval end {end} precedes start {start}")

        new_node = IntervalNode(start, end, data)
        self._size += 1
        if not self.root:
            self.root = new_node
            return new_node

        curr = self.root
        parent = None
        while curr:
            parent = curr
            curr = curr.left if start < curr.start else curr.right

        new_node.parent = parent
        if start < parent.start:
            parent.left = new_node
        else:
            parent.right = new_node

        self._rebalance(new_node)
        return new_node

    # --- Search Methods ---

    def iter_intersecting(self, start: T, end: T) -> Iterator[IntervalNode[T]]:
        """Yield nodes whose interval shares at least one point with [start, end]."""
        def _search(node):
            if not node or start > node.max_end:
                return
            if node.left and node.left.max_end >= start:
                yield from _search(node.left)
            if node.start <= end and node.end >= start:
                yield node
            if node.start <= end:
                yield from _search(node.right)
        return _search(self.root)

    def iter_covering(self, point: T) -> Iterator[IntervalNode[T]]:
        """Yield nodes whose interval contains the point."""
        return self.iter_intersecting(point, point)

    def any_intersecting(self, start: T, end: T) -> bool:
        return next(self.iter_intersecting(start, end), None) is not None

    # --- Debug Tool ---

    def verify_integrity(self):
        """Raise RuntimeError if AVL height or max_end bookkeeping is violated."""
        def _walk(node):
            if not node:
                return 0, None

            left_h, left_max = _walk(node.left)
            right_h, right_max = _walk(node.right)

            if abs(left_h - right_h) > 1:
                raise RuntimeError(f"AVL violation at {node.start}")

            expected_max = node.end
            for m in (left_max, right_max):
                if m is not None and m > expected_max:
                    expected_max = m
            if node.max_end != expected_max:
                raise RuntimeError(f"max_end violation at {node.start}")

            return 1 + max(left_h, right_h), expected_max

        _walk(self.root)
