from typing import Callable

from stackvm.common.vmconf import wrap_int


BinaryOp = Callable[[int, int], int]


class Stack():
    ''' Operand stack of 32-bit signed integers

    Mutating operations never raise. They report failure by returning
    False (or None) and leave the contents unchanged in that case.
    '''

    items: list[int]

    def __init__(self):
        self.items = []

    # - Queries - #

    def peek_top(self) -> int | None:
        if self.items:
            return self.items[-1]

        return None

    def is_empty(self) -> bool:
        return not self.items

    def has_at_least(self, n: int) -> bool:
        return len(self.items) >= n

    def values(self) -> tuple[int, ...]:
        return tuple(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __str__(self) -> str:
        return ' '.join(['['] + [str(i) for i in self.items] + [']'])

    # - Operations - #

    def push(self, value: int):
        self.items.append(wrap_int(value))

    def pop_top(self) -> int | None:
        if self.items:
            return self.items.pop()

        return None

    def pop_n(self, n: int) -> bool:
        if n < 1 or not self.has_at_least(n):
            return False

        del self.items[-n:]
        return True

    def duplicate(self) -> bool:
        if not self.items:
            return False

        self.items.append(self.items[-1])
        return True

    def binary_op(self, op: BinaryOp) -> bool:
        if not self.has_at_least(2):
            return False

        top = self.items.pop()
        second = self.items.pop()
        self.items.append(wrap_int(op(top, second)))
        return True

    def mul(self) -> bool:
        return self.binary_op(lambda top, second: top * second)

    def add(self) -> bool:
        return self.binary_op(lambda top, second: top + second)

    def sub(self) -> bool:
        return self.binary_op(lambda top, second: top - second)

    def gt(self) -> bool:
        return self.binary_op(lambda top, second: int(top > second))

    def lt(self) -> bool:
        return self.binary_op(lambda top, second: int(top < second))

    def eq(self) -> bool:
        return self.binary_op(lambda top, second: int(top == second))

    def rotate_right(self, n: int) -> bool:
        if n < 1 or not self.has_at_least(n):
            return False

        # Old top goes to the bottom of the window
        window = self.items[-n:]
        self.items[-n:] = window[-1:] + window[:-1]
        return True

    def clear(self):
        self.items.clear()
