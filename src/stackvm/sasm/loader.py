import logging as lg
from pathlib import Path

import pyparsing as pp

from stackvm.common.ops import ARG_REQUIRED, Instruction, Op, Program
from stackvm.common.vmconf import COMMENT_CHAR, in_range
import stackvm.sasm.grammar as grammar


class LoadError(Exception):
    def __init__(self, message: str, lineno: int | None = None):
        self.message = message
        self.lineno = lineno

        if lineno is not None:
            message = f'line {lineno}: {message}'

        super().__init__(message)


def strip_line(line: str) -> str:
    return line.split(COMMENT_CHAR, 1)[0].strip()


def parse_instruction(line: str, lineno: int, expected_index: int) -> Instruction:
    try:
        parsed = grammar.instruction.parse_string(line, parse_all=True)

    except pp.ParseException as e:
        raise LoadError(f'malformed instruction {line!r} ({e.msg})', lineno) from e

    if parsed['index'] != expected_index:
        raise LoadError(
            f'expected instruction index {expected_index}, got {parsed["index"]}',
            lineno
        )

    name = parsed['name']
    op = Op.by_name(name)

    if op is None:
        raise LoadError(f'unknown opcode {name}', lineno)

    arg = parsed.get('arg')

    if arg is not None and not in_range(arg):
        raise LoadError(f'{name}: argument {arg} is out of range', lineno)

    if arg is None and op in ARG_REQUIRED:
        # Not a load error, the engine stops with an error when it gets here
        lg.debug(f'line {lineno}: {name} has no argument')

    return Instruction(op, arg)


def parse_program(text: str) -> Program:
    instructions: list[Instruction] = []

    for lineno, line in enumerate(text.splitlines(), start=1):
        line = strip_line(line)

        if not line:
            continue

        instructions.append(parse_instruction(line, lineno, len(instructions)))

    if not instructions:
        raise LoadError('failed to read any instructions')

    lg.debug(f'Loaded {len(instructions)} instructions')
    return tuple(instructions)


def collect_file(filepath: str | Path) -> str:
    if isinstance(filepath, str):
        filepath = Path(filepath)

    lg.debug(f'Collecting file {filepath}')
    return filepath.read_text()


def load_file(filepath: str | Path) -> Program:
    return parse_program(collect_file(filepath))
