import pytest

from stackvm.common.ops import Instruction, Op
import stackvm.sasm.loader as loader

from unit_utils import find_file, load_program
from fixtures import engine  # noqa: F401


def test_parse_program():
    program = loader.parse_program('''
        # header comment
        0 READ
        1 PUSH -3     # trailing comment

        2 POP +2
        3 JMPZ#glued comment
    ''')

    assert program == (
        Instruction(Op.READ),
        Instruction(Op.PUSH, -3),
        Instruction(Op.POP, 2),
        Instruction(Op.JMPZ),
    )


def test_all_opcodes_recognized():
    source = '\n'.join(f'{i} {op.value}' for i, op in enumerate(Op))
    program = loader.parse_program(source)
    assert [i.op for i in program] == list(Op)


def test_missing_required_argument_loads():
    # Reported by the engine at execution time
    assert loader.parse_program('0 PUSH') == (Instruction(Op.PUSH),)


@pytest.mark.parametrize('source,message', [
    ('', 'failed to read any instructions'),
    ('# only\n   \n# comments', 'failed to read any instructions'),
    ('1 READ', 'expected instruction index 0, got 1'),
    ('0 READ\n0 WRITE', 'expected instruction index 1, got 0'),
    ('0 READ\n2 WRITE', 'expected instruction index 1, got 2'),
    ('0 NOPE', 'unknown opcode NOPE'),
    ('0 read', 'unknown opcode read'),
    ('0 PUSH 2147483648', 'argument 2147483648 is out of range'),
    ('0 PUSH 1 2', 'malformed instruction'),
    ('0 PUSH x', 'malformed instruction'),
    ('READ', 'malformed instruction'),
    ('0READ', 'malformed instruction'),
])
def test_load_errors(source, message):
    with pytest.raises(loader.LoadError) as e:
        loader.parse_program(source)

    assert message in str(e.value)


def test_load_error_line_number():
    with pytest.raises(loader.LoadError) as e:
        loader.parse_program('# comment\n0 READ\n\n5 WRITE\n')

    assert e.value.lineno == 4
    assert str(e.value).startswith('line 4:')


def test_argument_limits():
    program = loader.parse_program('0 PUSH 2147483647\n1 PUSH -2147483648')
    assert [i.arg for i in program] == [2147483647, -2147483648]


def test_load_file():
    program = loader.load_file(find_file('testdata/programs/square.svm'))
    assert len(program) == 11
    assert program[5] == Instruction(Op.JMPZ)
    assert program[4] == Instruction(Op.PUSH, 8)


def test_load_file_errors():
    with pytest.raises(loader.LoadError):
        loader.load_file(find_file('testdata/programs/broken_order.svm'))

    with pytest.raises(loader.LoadError):
        loader.load_file(str(find_file('testdata/programs/comments_only.svm')))


def test_engine_prepare(engine):  # noqa: F811
    assert engine.prepare(load_program('factorial'))
    assert len(engine.program) == 29
    assert not engine.prepare(load_program('broken_order'))
    assert not engine.is_loaded()
