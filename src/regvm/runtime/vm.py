import sys
import logging as lg
from typing import Dict, TextIO, Type, Callable, Any

from regvm.common.conf import MAX_CODE_POINT, SURROGATE_FIRST, SURROGATE_LAST
from regvm.common.types import (
    Register, Constant, ConstOrReg, Instruction, Instructions, Mov, Add, Jnz, Print
)


class ExecutionError(Exception):
    ''' Fatal condition raised while running a program '''
    pass


class UninitializedRegister(ExecutionError):
    registers: tuple[Register, ...]
    line: int | None

    def __init__(self, *registers: Register, line: int | None = None):
        names = ' and '.join(str(r) for r in registers)

        if len(registers) > 1:
            message = f'Both registers {names} must be initialized'
        else:
            message = f'Register {names} must be initialized'

        if line is not None:
            message += f' on line: {line}'

        super().__init__(message)
        self.registers = registers
        self.line = line


class JumpOutOfRange(ExecutionError):
    pc: int
    offset: Constant

    def __init__(self, message: str, pc: int, offset: Constant):
        super().__init__(message)
        self.pc = pc
        self.offset = offset


class InvalidCodePoint(ExecutionError):
    register: Register
    value: Constant

    def __init__(self, message: str, register: Register, value: Constant):
        super().__init__(message)
        self.register = register
        self.value = value


class VM():
    pc: int                                 # Program counter
    registers: Dict[Register, Constant]     # Register file
    max_len: int                            # Length of the running program

    def __init__(self, out: TextIO | None = None, trace: bool = False):
        self.out = out if out is not None else sys.stdout
        self.trace = trace

        self.pc = 0
        self.registers = dict()
        self.max_len = 0

    # - Helpers - #

    def debug_dump(self):
        state = [f'PC:{self.pc}']
        state.extend([f'{r}:{v}' for r, v in self.registers.items()])
        lg.debug(' '.join(state))

    def get(self, name: str) -> Constant | None:
        return self.registers.get(Register(name))

    def line(self) -> int:
        return self.pc + 1

    def load(self, x: Register) -> Constant:
        if x not in self.registers:
            raise UninitializedRegister(x, line=self.line())

        return self.registers[x]

    def get_const_or_load(self, x: ConstOrReg) -> Constant:
        if isinstance(x, Constant):
            return x

        return self.load(x)

    # - Operations - #

    def mov(self, instruction: Mov):
        self.registers[instruction.dest] = self.get_const_or_load(instruction.src)
        self.pc += 1

    def add(self, instruction: Add):
        x, y = instruction.dest, instruction.src
        unbound = [r for r in dict.fromkeys((x, y)) if r not in self.registers]

        if unbound:
            raise UninitializedRegister(*unbound, line=self.line())

        self.registers[x] = self.registers[x] + self.registers[y]
        self.pc += 1

    def print(self, instruction: Print):
        x = instruction.reg
        value = self.registers.get(x)

        if value is not None:
            if value < Constant.ZERO:
                raise InvalidCodePoint(
                    f'Value in register {x} is negative, failed to print it'
                    f' on line: {self.line()}', x, value
                )

            if int(value) > MAX_CODE_POINT or SURROGATE_FIRST <= int(value) <= SURROGATE_LAST:
                raise InvalidCodePoint(
                    f'Failed to convert value: {value} to a character'
                    f' on line: {self.line()}', x, value
                )

            self.out.write(chr(int(value)))

        self.pc += 1

    def jnz(self, instruction: Jnz):
        value = self.get_const_or_load(instruction.test)

        if value == Constant.ZERO:
            self.pc += 1
            return

        jump = self.get_const_or_load(instruction.offset)

        if jump < Constant.ZERO:
            new_pc = self.pc - abs(jump)
        else:
            new_pc = self.pc + abs(jump)

        if new_pc < 0:
            raise JumpOutOfRange(f'Could not jump {jump} on line: {self.line()}', self.pc, jump)

        if new_pc > self.max_len:
            raise JumpOutOfRange(f'Trying to jump too far on line: {self.line()}', self.pc, jump)

        lg.debug(f'Jump {self.pc} -> {new_pc}')
        self.pc = new_pc

    HANDLERS: Dict[Type[Instruction], Callable[[Any, Any], None]] = {
        Mov: mov,
        Add: add,
        Jnz: jnz,
        Print: print
    }

    # -- Implementation -- #

    def exec_next(self, instruction: Instruction):
        handler = self.HANDLERS[type(instruction)]
        handler(self, instruction)

    def interpret(self, instructions: Instructions, start_pc: int = 0):
        self.pc = start_pc
        self.registers = dict()
        self.max_len = len(instructions)

        while self.pc < self.max_len:
            self.exec_next(instructions[self.pc])

            if self.trace:
                self.debug_dump()

        lg.debug(f'Halted at {self.pc}')
