import sys
from pathlib import Path
import logging as lg
from typing import TextIO

import click

import stackvm.sasm.loader as loader
from stackvm.runtime.engine import Engine, ExecutionResult, State


EXIT_DONE = 0
EXIT_LOAD_ERROR = 2
EXIT_KEYBOARD = 3
EXIT_EXEC_ERROR = 100


def execute(
    source: str,
    input_stream: TextIO | None = None,
    output_stream: TextIO | None = None,
    trace: bool = False
) -> State:
    program = loader.parse_program(source)
    engine = Engine(input_stream, output_stream, trace=trace)
    engine.load(program)

    steps = 0

    def observe(result: ExecutionResult):
        nonlocal steps
        steps += 1

        if result.state == State.ERROR:
            engine.debug_dump()

    engine.run(observe)
    lg.debug(f'{steps} steps, finished with {engine.state.value}')
    return engine.state


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('-t', '--trace', is_flag=True, help='Logs every executed instruction')
@click.option('-i', '--input', 'input_file', type=click.File('r'), default='-')
@click.option('-o', '--output', 'output_file', type=click.File('w'), default='-')
@click.argument('program_filename', type=Path)
def run(
    verbose: bool,
    trace: bool,
    input_file: TextIO,
    output_file: TextIO,
    program_filename: Path
):
    lg.basicConfig(level=lg.DEBUG if verbose or trace else lg.INFO)
    lg.info("STACKVM")

    try:
        source = loader.collect_file(program_filename)
        state = execute(source, input_file, output_file, trace=trace)

    except (loader.LoadError, OSError) as e:
        lg.error(f'Failed to load {program_filename}: {e}')
        sys.exit(EXIT_LOAD_ERROR)

    except KeyboardInterrupt:
        lg.info('Execution halted by the user')
        sys.exit(EXIT_KEYBOARD)

    if state == State.ERROR:
        lg.info('Execution halted on error')
        sys.exit(EXIT_EXEC_ERROR)

    lg.info('Execution finished')
    sys.exit(EXIT_DONE)


if __name__ == '__main__':
    run()
