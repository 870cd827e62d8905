from dataclasses import dataclass
from enum import Enum


class Op(Enum):
    # I/O
    READ = 'READ'     # input -> push
    WRITE = 'WRITE'   # pop -> output
    DUP = 'DUP'       # T -> T T

    # Arithmetic, called as op(TOP, SECOND)
    MUL = 'MUL'
    ADD = 'ADD'
    SUB = 'SUB'
    GT = 'GT'
    LT = 'LT'
    EQ = 'EQ'

    # Control
    JMPZ = 'JMPZ'     # pop T; pop S; if S .eq 0 jmp T

    # With argument
    PUSH = 'PUSH'     # A -> push
    POP = 'POP'       # drop A values
    ROT = 'ROT'       # rotate top A values right

    @classmethod
    def by_name(cls, name: str) -> 'Op | None':
        return cls.__members__.get(name)


ARG_REQUIRED = frozenset({Op.PUSH, Op.POP, Op.ROT})


@dataclass(frozen=True)
class Instruction:
    op: Op
    arg: int | None = None

    def __str__(self) -> str:
        arg = '' if self.arg is None else str(self.arg)
        return f'{self.op.value:<5} {arg:>5}'


Program = tuple[Instruction, ...]
