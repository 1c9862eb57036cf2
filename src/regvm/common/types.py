from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Sequence

import regvm.common.ops as ops
from regvm.common.conf import INT32_MIN, INT32_MAX, WORD_MASK


JSON = Dict[str, Any]


@dataclass(frozen=True)
class Register:
    name: str

    def __str__(self) -> str:
        return self.name

    def json(self) -> JSON:
        return {'Class': 'Register', 'Name': self.name}


@dataclass(frozen=True, order=True)
class Constant:
    ZERO: ClassVar['Constant']

    value: int

    def __post_init__(self):
        if not INT32_MIN <= self.value <= INT32_MAX:
            raise ValueError(f'{self.value} does not fit in a signed 32-bit integer')

    def __add__(self, other: 'Constant') -> 'Constant':
        # Two's complement wrap
        raw = (self.value + other.value) & WORD_MASK

        if raw > INT32_MAX:
            raw -= WORD_MASK + 1

        return Constant(raw)

    def __abs__(self) -> int:
        return abs(self.value)

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)

    def json(self) -> JSON:
        return {'Class': 'Constant', 'Value': self.value}


Constant.ZERO = Constant(0)


ConstOrReg = Constant | Register


class Instruction:
    mnemonic: ClassVar[str]

    def operands(self) -> Sequence[ConstOrReg]:
        raise NotImplementedError()

    def json(self) -> JSON:
        return {
            'Class': type(self).__name__,
            'Operands': [operand.json() for operand in self.operands()]
        }

    def __str__(self) -> str:
        return ' '.join([self.mnemonic] + [str(operand) for operand in self.operands()])


@dataclass(frozen=True)
class Mov(Instruction):
    mnemonic = ops.MOV

    dest: Register
    src: ConstOrReg

    def operands(self):
        return (self.dest, self.src)


@dataclass(frozen=True)
class Add(Instruction):
    mnemonic = ops.ADD

    dest: Register
    src: Register

    def operands(self):
        return (self.dest, self.src)


@dataclass(frozen=True)
class Jnz(Instruction):
    mnemonic = ops.JNZ

    test: ConstOrReg
    offset: ConstOrReg

    def operands(self):
        return (self.test, self.offset)


@dataclass(frozen=True)
class Print(Instruction):
    mnemonic = ops.PRINT

    reg: Register

    def operands(self):
        return (self.reg,)


Instructions = Sequence[Instruction]
