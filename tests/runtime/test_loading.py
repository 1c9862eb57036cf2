import regvm.runtime.emulator as emulator


def test_split_trims_lines():
    assert emulator.split_lines('  mov a 1 \n\tprint a\n') == ['mov a 1', 'print a']


def test_split_keeps_inner_blank_lines():
    assert emulator.split_lines('mov a 1\n\nprint a') == ['mov a 1', '', 'print a']


def test_split_crlf():
    assert emulator.split_lines('mov a 1\r\nprint a\r\n') == ['mov a 1', 'print a']


def test_split_empty_text():
    assert emulator.split_lines('') == ['']
