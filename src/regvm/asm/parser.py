import logging as lg
from typing import Callable, Dict, List, Sequence

import pyparsing as pp

import regvm.common.ops as ops
import regvm.asm.grammar as g
from regvm.common.types import Instruction, Mov, Add, Jnz, Print


class ParseError(Exception):
    ''' Base of all parse-time failures '''
    pass


class EmptyInput(ParseError):
    def __init__(self):
        super().__init__('No lines to parse')


class EmptyLine(ParseError):
    line: int
    text: str

    def __init__(self, line: int, text: str):
        super().__init__(f'Empty instruction on line {line + 1}')
        self.line = line
        self.text = text


class IncorrectArgument(ParseError):
    line: int
    token: str
    reason: str

    def __init__(self, line: int, token: str, reason: str):
        super().__init__(
            f'Failed to parse {token} on line {line + 1}, with error: {reason}'
        )

        self.line = line
        self.token = token
        self.reason = reason


class InstructionNotFoundOrWrongArgs(ParseError):
    line: int
    text: str

    def __init__(self, line: int, text: str):
        super().__init__(
            f'Not found instruction or wrong args on line {line + 1}: {text}'
        )

        self.line = line
        self.text = text


class Operands:
    ''' Operand tokens of one line with the line index for diagnostics '''
    line: int
    tokens: List[str]

    def __init__(self, line: int, tokens: List[str]):
        self.line = line
        self.tokens = tokens

    def parse(self, index: int, element: pp.ParserElement):
        token = self.tokens[index]

        try:
            return g.parse_token(element, token)
        except pp.ParseBaseException as e:
            raise IncorrectArgument(self.line, token, e.msg) from e


def build_mov(operands: Operands) -> Instruction:
    return Mov(operands.parse(0, g.register), operands.parse(1, g.const_or_reg))


def build_add(operands: Operands) -> Instruction:
    return Add(operands.parse(0, g.register), operands.parse(1, g.register))


def build_jnz(operands: Operands) -> Instruction:
    return Jnz(operands.parse(0, g.const_or_reg), operands.parse(1, g.const_or_reg))


def build_print(operands: Operands) -> Instruction:
    return Print(operands.parse(0, g.register))


BUILDERS: Dict[str, Callable[[Operands], Instruction]] = {
    ops.MOV: build_mov,
    ops.ADD: build_add,
    ops.JNZ: build_jnz,
    ops.PRINT: build_print
}


def parse_line(index: int, line: str) -> Instruction:
    parts = line.split()

    if not parts:
        raise EmptyLine(index, line)

    opcode, tokens = parts[0], parts[1:]

    if opcode not in BUILDERS or len(tokens) != ops.ARITY[opcode]:
        raise InstructionNotFoundOrWrongArgs(index, line)

    instruction = BUILDERS[opcode](Operands(index, tokens))
    lg.debug(f'{index:04}: {instruction}')
    return instruction


def parse_instructions(lines: Sequence[str]) -> List[Instruction]:
    if len(lines) == 0:
        raise EmptyInput()

    return [parse_line(index, line) for index, line in enumerate(lines)]
