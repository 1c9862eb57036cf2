''' Operand grammar '''

import pyparsing as pp

from regvm.common.conf import INT32_MIN, INT32_MAX
from regvm.common.types import Register, Constant


def on_register(tokens: pp.ParseResults):
    return Register(tokens[0])


def on_constant(s: str, loc: int, tokens: pp.ParseResults):
    value = int(tokens[0])

    if not INT32_MIN <= value <= INT32_MAX:
        raise pp.ParseException(s, loc, f'{value} does not fit in a signed 32-bit integer')

    return Constant(value)


# Letters only, no digits or underscores
register = pp.Regex(r'[^\W\d_]+').set_name('register').set_parse_action(on_register)

constant = pp.Regex(r'-?[0-9]+').set_name('int32 constant').set_parse_action(on_constant)

# Constant first: numeric tokens never name a register
const_or_reg = (constant | register).set_name('int32 constant or register')


def parse_token(element: pp.ParserElement, token: str):
    ''' Matches the whole token against an operand element '''
    return element.parse_string(token, parse_all=True)[0]
