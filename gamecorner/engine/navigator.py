"""Precomputed traversal orders for moving between open mini cells."""

from __future__ import annotations

from typing import Callable, List, NamedTuple


class NavResult(NamedTuple):
    to: int
    wrapped: bool


class MiniNavigator:
    """Answers "next open cell" queries in row-major and column-major order.

    Both orders and their inverse position maps are built once, so each query
    only walks forward from the current position until it meets an open
    cell. Whether the caller switches direction after a wrap is up to the
    caller.
    """

    def __init__(self, size: int, is_block: Callable[[int], bool]) -> None:
        self.size = size
        self.cell_count = size * size
        self._is_block = is_block
        self._across_order: List[int] = list(range(self.cell_count))
        self._down_order: List[int] = [r * size + c for c in range(size) for r in range(size)]
        self._across_pos = self._positions(self._across_order)
        self._down_pos = self._positions(self._down_order)

    @staticmethod
    def _positions(order: List[int]) -> List[int]:
        positions = [0] * len(order)
        for position, index in enumerate(order):
            positions[index] = position
        return positions

    def next_right_open(self, origin: int) -> NavResult:
        return self._walk(origin, self._across_order, self._across_pos, forward=True)

    def next_left_open(self, origin: int) -> NavResult:
        return self._walk(origin, self._across_order, self._across_pos, forward=False)

    def next_down_open(self, origin: int) -> NavResult:
        return self._walk(origin, self._down_order, self._down_pos, forward=True)

    def next_up_open(self, origin: int) -> NavResult:
        return self._walk(origin, self._down_order, self._down_pos, forward=False)

    def next_after_input(self, down_mode: bool, origin: int) -> NavResult:
        return self.next_down_open(origin) if down_mode else self.next_right_open(origin)

    def prev_on_backspace(self, down_mode: bool, origin: int) -> NavResult:
        return self.next_up_open(origin) if down_mode else self.next_left_open(origin)

    def _walk(self, origin: int, order: List[int], positions: List[int], forward: bool) -> NavResult:
        start = positions[origin]
        count = len(order)
        step = 1 if forward else -1
        for offset in range(1, count + 1):
            position = (start + step * offset) % count
            target = order[position]
            if not self._is_block(target):
                wrapped = position < start if forward else position > start
                return NavResult(target, wrapped)
        return NavResult(origin, False)
