import sys
from pathlib import Path
import logging as lg

import click

import stackvm.sasm.loader as loader
from stackvm.common.ops import Program
from stackvm.runtime.emulator import EXIT_LOAD_ERROR


def format_program(program: Program) -> str:
    return '\n'.join(f'{addr} {instr}'.rstrip() for addr, instr in enumerate(program))


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.argument('program_filename', type=Path)
def listing(verbose: bool, program_filename: Path):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.WARNING)

    try:
        program = loader.load_file(program_filename)

    except (loader.LoadError, OSError) as e:
        lg.error(f'Failed to load {program_filename}: {e}')
        sys.exit(EXIT_LOAD_ERROR)

    click.echo(format_program(program))


if __name__ == "__main__":
    listing()
