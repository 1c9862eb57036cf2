import json

from click.testing import CliRunner

from regvm.common.conf import EXIT_HALT, EXIT_PARSE_ERROR, EXIT_LOAD_ERROR, EXIT_EXEC_ERROR
import regvm.runtime.emulator as emulator
from regvm.runtime.emulator import run
from regvm.asm.listing import check

from unit_utils import find_file, load_file


def program(name: str) -> str:
    return str(find_file(f'testdata/programs/{name}.rvm'))


def test_run():
    result = CliRunner().invoke(run, [program('countdown')])

    assert result.exit_code == EXIT_HALT
    assert result.stdout == load_file('testdata/programs/countdown.log')


def test_run_parse_error():
    result = CliRunner().invoke(run, [program('blank')])
    assert result.exit_code == EXIT_PARSE_ERROR


def test_run_execution_error():
    result = CliRunner().invoke(run, [program('badadd')])
    assert result.exit_code == EXIT_EXEC_ERROR


def test_run_missing_file():
    result = CliRunner().invoke(run, ['does-not-exist.rvm'])
    assert result.exit_code == 2


def test_check_listing():
    result = CliRunner().invoke(check, [program('countdown')])

    assert result.exit_code == 0
    assert result.stdout.splitlines() == [
        '0000 mov c 51',
        '0001 mov n 3',
        '0002 mov m -1',
        '0003 print c',
        '0004 add c m',
        '0005 add n m',
        '0006 jnz n -3',
    ]


def test_check_json():
    result = CliRunner().invoke(check, ['--json', program('hello')])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert len(data) == 6
    assert data[0] == {
        'Class': 'Mov',
        'Operands': [
            {'Class': 'Register', 'Name': 'h'},
            {'Class': 'Constant', 'Value': 72}
        ]
    }


def test_check_parse_error():
    result = CliRunner().invoke(check, [program('blank')])
    assert result.exit_code == EXIT_PARSE_ERROR


def test_run_undecodable_file(tmp_path):
    bad = tmp_path / 'bad.rvm'
    bad.write_bytes(b'print \xff')

    result = CliRunner().invoke(run, [str(bad)])
    assert result.exit_code == EXIT_LOAD_ERROR


def test_check_undecodable_file(tmp_path):
    bad = tmp_path / 'bad.rvm'
    bad.write_bytes(b'mov a 1\nprint \xff\n')

    result = CliRunner().invoke(check, [str(bad)])
    assert result.exit_code == EXIT_LOAD_ERROR


def test_run_general_error(monkeypatch):
    def broken(*args, **kwargs):
        raise RuntimeError('boom')

    monkeypatch.setattr(emulator, 'execute', broken)
    result = CliRunner().invoke(run, [program('hello')])
    assert result.exit_code == EXIT_EXEC_ERROR
