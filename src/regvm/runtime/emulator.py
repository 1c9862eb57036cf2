import sys
from pathlib import Path
import logging as lg
import traceback
from typing import List, TextIO

import click

from regvm.common.conf import (
    Settings, EXIT_HALT, EXIT_PARSE_ERROR, EXIT_KEYBOARD, EXIT_LOAD_ERROR, EXIT_EXEC_ERROR
)
from regvm.asm.parser import ParseError, parse_instructions
import regvm.runtime.vm as vm


def split_lines(contents: str) -> List[str]:
    lines = [line.strip() for line in contents.split('\n')]

    # A final newline terminates the last line, it does not open a new one
    if len(lines) > 1 and lines[-1] == '':
        lines.pop()

    return lines


def load_lines(filename: Path) -> List[str]:
    lg.debug(f'Loading {filename}')
    return split_lines(filename.read_text(encoding='utf-8'))


def execute(lines: List[str], out: TextIO | None = None, trace: bool = False) -> vm.VM:
    instructions = parse_instructions(lines)
    lg.debug(f'Parsed {len(instructions)} instructions')

    proc = vm.VM(out, trace=trace)
    proc.interpret(instructions, 0)
    return proc


@click.command()
@click.pass_context
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('--trace', is_flag=True, help='Dump registers after every instruction')
@click.argument('program', type=click.Path(exists=True, dir_okay=False, path_type=Path))
def run(ctx: click.Context, program: Path, **params):
    ctx.ensure_object(Settings)
    ctx.obj.update(**params)

    lg.basicConfig(level=lg.DEBUG if ctx.obj.verbose else lg.INFO)
    lg.info('REGVM')

    try:
        lines = load_lines(program)
    except (OSError, UnicodeDecodeError) as e:
        lg.error(f'Failed to load {program}: {e}')
        sys.exit(EXIT_LOAD_ERROR)

    try:
        execute(lines, trace=ctx.obj.trace)
        sys.stdout.flush()
        lg.info('Execution halted gracefully')
        sys.exit(EXIT_HALT)

    except ParseError as e:
        lg.error(f'Parsing failed: {e}')
        sys.exit(EXIT_PARSE_ERROR)

    except vm.ExecutionError as e:
        sys.stdout.flush()
        lg.error(f'Execution halted on error: {e}')
        sys.exit(EXIT_EXEC_ERROR)

    except KeyboardInterrupt:
        lg.info('Execution halted by the user')
        sys.exit(EXIT_KEYBOARD)

    except Exception as e:
        lg.info(f'Execution halted on general error {e}')
        traceback.print_exc()
        sys.exit(EXIT_EXEC_ERROR)


if __name__ == '__main__':
    run()
