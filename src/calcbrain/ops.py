'''
Entries of the calculator stack, and the built-in operations table.

An entry is one of four immutable variants. Behaviour that depends on the
variant (display symbol, precedence) is a plain function matching on the
entry type, rather than a method on each variant.
'''

from collections import namedtuple
from types import MappingProxyType
import math
import operator

from .util import format_number


Operand = namedtuple('Operand', 'value')
UnaryOperation = namedtuple('UnaryOperation', 'symbol function')
BinaryOperation = namedtuple('BinaryOperation', 'symbol function')
# value is None for variables, which are looked up at evaluation time.
ConstantOrVariable = namedtuple('ConstantOrVariable', 'symbol value')

# Precedence classes, only used when formatting.
UNARY = 0
ADDITIVE = 1
MULTIPLICATIVE = 2
OPERAND = 3
LOWEST = UNARY

_BINARY_PRECEDENCE = {
    '+': ADDITIVE,
    '-': ADDITIVE,
    '×': MULTIPLICATIVE,
    '÷': MULTIPLICATIVE,
}


def describe(op):
    '''
    Return display symbol of entry, also used for program serialization.
    '''
    if isinstance(op, Operand):
        return format_number(op.value)
    elif isinstance(op, (UnaryOperation, BinaryOperation, ConstantOrVariable)):
        return op.symbol
    raise TypeError('Not a stack entry: {!r}'.format(op))


def precedence(op):
    '''
    Return precedence class of entry.

    Operands never need parentheses, unary operators always bring their own.
    '''
    if isinstance(op, (Operand, ConstantOrVariable)):
        return OPERAND
    elif isinstance(op, UnaryOperation):
        return UNARY
    elif isinstance(op, BinaryOperation):
        return _BINARY_PRECEDENCE.get(op.symbol, MULTIPLICATIVE)
    raise TypeError('Not a stack entry: {!r}'.format(op))


def _unary(f):
    '''
    Wrap 1-arg math function so domain errors give nan instead of raising.
    '''
    def wrapped(only):
        try:
            return f(only)
        except ValueError:
            return math.nan
    try:
        wrapped.__doc__ = f.__doc__
        wrapped.__name__ = f.__name__
    except AttributeError:
        pass
    return wrapped


def _flipped(f):
    '''
    Wrap 2-arg function to take operands in pop order, topmost first.

    The stack hands over (first popped, second popped), but 10 2 ÷ means
    10 / 2, so the second popped is the left-hand side.
    '''
    def wrapped(first, second):
        return f(second, first)
    try:
        wrapped.__doc__ = f.__doc__
        wrapped.__name__ = f.__name__
    except AttributeError:
        pass
    return wrapped


def _truediv(left, right):
    '''
    Float division with IEEE semantics: x / 0 is ±inf, or nan for 0 / 0.
    '''
    if right == 0:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


# Shared between tables, so entries from different engines compare equal.
_divide = _flipped(_truediv)
_subtract = _flipped(operator.sub)
_sqrt = _unary(math.sqrt)
_sin = _unary(math.sin)
_cos = _unary(math.cos)


def known_operations():
    '''
    Build the table of operators and constants, keyed by symbol.

    The returned mapping is read-only; every engine gets its own.
    '''
    table = {}

    def learn(op):
        table[op.symbol] = op

    learn(BinaryOperation('×', operator.mul))
    learn(BinaryOperation('÷', _divide))
    learn(BinaryOperation('+', operator.add))
    learn(BinaryOperation('-', _subtract))
    learn(UnaryOperation('√', _sqrt))
    learn(UnaryOperation('sin', _sin))
    learn(UnaryOperation('cos', _cos))
    learn(ConstantOrVariable('π', math.pi))
    return MappingProxyType(table)
