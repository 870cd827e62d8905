import sys
import logging as lg
from dataclasses import dataclass
from enum import Enum
from typing import Callable, TextIO, cast

from stackvm.common.ops import Instruction, Op, Program
from stackvm.runtime.stack import Stack
from stackvm.runtime.channels import InputChannel, OutputChannel
import stackvm.sasm.loader as loader


class State(Enum):
    RUNNING = 'Running'
    ERROR = 'Error'
    DONE = 'Done'


@dataclass(frozen=True)
class ExecutionResult:
    top: int | None
    state: State


Observer = Callable[[ExecutionResult], None]

# Handlers return the jump target, or None to fall through
Handler = Callable[['Engine', Instruction], int | None]


class Engine():
    program: Program
    pc: int             # Program counter, len(program) is past the end
    stack: Stack
    state: State
    trace: bool         # Log every dispatched instruction

    def __init__(
        self,
        input_stream: TextIO | None = None,
        output_stream: TextIO | None = None,
        trace: bool = False
    ):
        self.input = InputChannel(sys.stdin if input_stream is None else input_stream)
        self.output = OutputChannel(sys.stdout if output_stream is None else output_stream)
        self.trace = trace

        self.program = ()
        self.pc = 0
        self.stack = Stack()
        self.state = State.RUNNING

    # - Loading - #

    def load(self, program: Program):
        ''' Replace the program and reset the run '''
        self.program = tuple(program)
        self.pc = 0
        self.stack.clear()
        self.state = State.RUNNING

    def prepare(self, text: str) -> bool:
        # No runnable program is left behind on failure
        self.load(())

        try:
            self.load(loader.parse_program(text))
            return True

        except loader.LoadError as e:
            lg.error(f'prepare: {e}')
            return False

    def is_loaded(self) -> bool:
        return len(self.program) > 0

    # - Helpers - #

    def top(self) -> int | None:
        return self.stack.peek_top()

    def fail(self, message: str) -> None:
        lg.error(message)
        self.state = State.ERROR

    def no_arg_expected(self, instr: Instruction):
        if instr.arg is not None:
            lg.warning(f'{instr.op.value}: arguments are not expected')

    def debug_dump(self):
        lg.debug(f'PC:{self.pc} STATE:{self.state.value} STACK:{self.stack}')

    def listing(self) -> str:
        lines = [
            f'{"->" if addr == self.pc else "  "} {addr:>3} {instr}'
            for addr, instr in enumerate(self.program)
        ]

        if self.pc == len(self.program):
            lines.append('->')

        lines.append(str(self.stack))
        return '\n'.join(lines)

    def binary(self, instr: Instruction, op: Callable[[Stack], bool]) -> None:
        self.no_arg_expected(instr)

        if not op(self.stack):
            self.fail(f'{instr.op.value}: failed, stack does not have 2 ints')

    # - Operations - #

    def read(self, instr: Instruction) -> None:
        self.no_arg_expected(instr)
        value = self.input.read_int()

        if value is None:
            self.fail('READ: could not read integer from input')
        else:
            self.stack.push(value)

    def write(self, instr: Instruction) -> None:
        self.no_arg_expected(instr)
        self.output.write(self.stack.pop_top())

    def dup(self, instr: Instruction) -> None:
        self.no_arg_expected(instr)

        if not self.stack.duplicate():
            self.fail('DUP: failed, stack is empty')

    def mul(self, instr: Instruction) -> None:
        self.binary(instr, Stack.mul)

    def add(self, instr: Instruction) -> None:
        self.binary(instr, Stack.add)

    def sub(self, instr: Instruction) -> None:
        self.binary(instr, Stack.sub)

    def gt(self, instr: Instruction) -> None:
        self.binary(instr, Stack.gt)

    def lt(self, instr: Instruction) -> None:
        self.binary(instr, Stack.lt)

    def eq(self, instr: Instruction) -> None:
        self.binary(instr, Stack.eq)

    def jmpz(self, instr: Instruction) -> int | None:
        self.no_arg_expected(instr)

        if not self.stack.has_at_least(2):
            self.fail('JMPZ: stack does not have at least 2 ints')
            return None

        # Target on top, condition under it
        top = cast(int, self.stack.pop_top())
        second = cast(int, self.stack.pop_top())

        if second != 0:
            return None

        if not 0 <= top < len(self.program):
            self.fail(
                f'JMPZ: requested jump to {top} is past end of program '
                f'{len(self.program) - 1}'
            )
            return None

        return top

    def push(self, instr: Instruction) -> None:
        if instr.arg is None:
            self.fail('PUSH: arguments expected')
        else:
            self.stack.push(instr.arg)

    def pop(self, instr: Instruction) -> None:
        if instr.arg is None:
            self.fail('POP: arguments expected')
        elif not self.stack.pop_n(instr.arg):
            self.fail(f'POP: stack does not have at least {instr.arg} ints')

    def rot(self, instr: Instruction) -> None:
        if instr.arg is None:
            self.fail('ROT: arguments expected')
        elif not self.stack.rotate_right(instr.arg):
            self.fail(f'ROT: stack does not have at least {instr.arg} ints')

    HANDLERS: dict[Op, Handler] = {
        Op.READ: read,
        Op.WRITE: write,
        Op.DUP: dup,

        Op.MUL: mul,
        Op.ADD: add,
        Op.SUB: sub,
        Op.GT: gt,
        Op.LT: lt,
        Op.EQ: eq,

        Op.JMPZ: jmpz,

        Op.PUSH: push,
        Op.POP: pop,
        Op.ROT: rot,
    }

    # -- Implementation -- #

    def execute(self) -> ExecutionResult:
        if self.state != State.RUNNING:
            return ExecutionResult(self.top(), self.state)

        if self.pc >= len(self.program):
            self.state = State.DONE
            return ExecutionResult(None, self.state)

        instr = self.program[self.pc]

        if self.trace:
            lg.debug(f'Executing: {self.pc:>3} {instr}\t{self.stack}')

        handler = self.HANDLERS[instr.op]
        target = handler(self, instr)
        self.pc = self.pc + 1 if target is None else target

        return ExecutionResult(self.top(), self.state)

    def run(self, observer: Observer) -> bool:
        if not self.is_loaded():
            lg.error('run: No program has been prepared')
            return False

        if self.state != State.RUNNING:
            lg.error(f'run: Program already finished ({self.state.value}), load it again')
            return False

        while self.state == State.RUNNING:
            observer(self.execute())

        return True
