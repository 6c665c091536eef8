'''
Stack calculator brain.

Keeps everything entered (numbers, operators, constants, variables) on one
stack, evaluates the expression on top of it, and describes the whole
history back as infix text with only the parentheses it needs:

    >>> brain = Brain()
    >>> brain.push_operand(3)
    3.0
    >>> brain.push_operand(4)
    4.0
    >>> brain.perform_operation('+')
    7.0
    >>> brain.push_operand(5)
    5.0
    >>> brain.perform_operation('×')
    35.0
    >>> brain.description()
    '(3 + 4) × 5'

Comes with a small terminal front end standing in for the calculator's
keypad and display.
'''

from .cli import CLI
from .lexer import Lexer
from .brain import Brain
from .util import BrainError


__all__ = 'Brain', 'BrainError', 'Lexer', 'CLI'
