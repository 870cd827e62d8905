import logging as lg
import re
from typing import Iterator, TextIO

from stackvm.common.vmconf import NULL_TOKEN, OUTPUT_SEPARATOR, in_range


DEC_INT = re.compile(r'[+-]?[0-9]+')


class InputChannel():
    ''' Whitespace separated integers read lazily from a text stream '''

    def __init__(self, stream: TextIO):
        self.stream = stream
        self.tokens = self.tokenize()
        self.failed = False

    def tokenize(self) -> Iterator[str]:
        for line in self.stream:
            yield from line.split()

    def read_int(self) -> int | None:
        # Like a stream in fail state, nothing is read after a failure
        if self.failed:
            return None

        token = next(self.tokens, None)

        if token is None:
            lg.debug('Input exhausted')
            self.failed = True
            return None

        if not DEC_INT.fullmatch(token):
            lg.debug(f'Input token {token!r} is not an integer')
            self.failed = True
            return None

        value = int(token)

        if not in_range(value):
            lg.debug(f'Input value {value} is out of range')
            self.failed = True
            return None

        return value


class OutputChannel():
    def __init__(self, stream: TextIO):
        self.stream = stream

    def write(self, value: int | None):
        token = NULL_TOKEN if value is None else str(value)
        self.stream.write(token + OUTPUT_SEPARATOR)
