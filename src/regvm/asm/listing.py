import sys
import json
from pathlib import Path
import logging as lg
from typing import Any, List

import click

from regvm.common.conf import Settings, EXIT_PARSE_ERROR, EXIT_LOAD_ERROR
from regvm.common.types import Instructions
from regvm.asm.parser import ParseError, parse_instructions
from regvm.runtime.emulator import load_lines


def listing(instructions: Instructions) -> List[str]:
    return [f'{addr:04} {instruction}' for addr, instruction in enumerate(instructions)]


def emit(settings: Settings, instructions: Instructions) -> str:
    if settings.json:
        data: List[Any] = [instruction.json() for instruction in instructions]
        return json.dumps(data, indent=2)

    return '\n'.join(listing(instructions))


@click.command()
@click.pass_context
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('--json', is_flag=True, help='Produce JSON output')
@click.argument('program', type=click.Path(exists=True, dir_okay=False, path_type=Path))
def check(ctx: click.Context, program: Path, **params):
    ctx.ensure_object(Settings)
    ctx.obj.update(**params)

    lg.basicConfig(level=lg.DEBUG if ctx.obj.verbose else lg.INFO)
    lg.info(f'Checking {program.name}')

    try:
        lines = load_lines(program)
    except (OSError, UnicodeDecodeError) as e:
        lg.error(f'Failed to load {program}: {e}')
        sys.exit(EXIT_LOAD_ERROR)

    try:
        instructions = parse_instructions(lines)
    except ParseError as e:
        lg.error(f'Parsing failed: {e}')
        sys.exit(EXIT_PARSE_ERROR)

    click.echo(emit(ctx.obj, instructions))


if __name__ == '__main__':
    check()
