INT_BITS = 32
INT_MIN = -(1 << (INT_BITS - 1))
INT_MAX = (1 << (INT_BITS - 1)) - 1

COMMENT_CHAR = '#'

NULL_TOKEN = 'null'         # Written when WRITE pops an empty stack
OUTPUT_SEPARATOR = ' '


def wrap_int(value: int) -> int:
    ''' Native two's complement wraparound '''
    mask = (1 << INT_BITS) - 1
    value &= mask
    return value - (1 << INT_BITS) if value > INT_MAX else value


def in_range(value: int) -> bool:
    return INT_MIN <= value <= INT_MAX
