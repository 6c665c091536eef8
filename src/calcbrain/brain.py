from types import MappingProxyType
import locale
import logging

from .ops import (Operand, UnaryOperation, BinaryOperation,
                  ConstantOrVariable, LOWEST, describe, precedence,
                  known_operations)


logger = logging.getLogger(__name__)


class Brain:
    '''
    Stack-based calculator engine.

    Holds every operand and operation entered so far, most recent on top.
    Each change re-evaluates the whole stack. Nothing here raises for bad
    input: anything that can't be computed comes back as None.
    '''

    # Placeholder for a missing operand when formatting
    MISSING = '?'
    SEPARATOR = ', '

    def __init__(self, operations=None):
        '''
        Create empty engine.

        :param operations: Symbol to entry mapping. A fresh table from
                           known_operations() if not given.
        '''
        if operations is None:
            operations = known_operations()
        self.operations = operations
        self.stack = []
        self._variables = dict()

    def __len__(self):
        return len(self.stack)

    @property
    def variables(self):
        '''
        Read-only view of variable name to value (None if unset).
        '''
        return MappingProxyType(self._variables)

    def push_operand(self, value):
        '''
        Push number onto stack and evaluate.
        '''
        logger.debug('push operand %r', value)
        self.stack.append(Operand(float(value)))
        return self.evaluate()

    def push_symbol(self, name):
        '''
        Push known constant/operation, or a variable reference, and evaluate.
        '''
        op = self.operations.get(name)
        if op is None:
            logger.debug('push variable %r', name)
            op = ConstantOrVariable(name, None)
        else:
            logger.debug('push known %r', name)
        self.stack.append(op)
        return self.evaluate()

    def perform_operation(self, symbol):
        '''
        Push known operation onto stack and evaluate.

        Unknown symbols give None and leave the stack alone.
        '''
        op = self.operations.get(symbol)
        if op is None:
            logger.debug('unknown operation %r', symbol)
            return None
        logger.debug('perform %r', symbol)
        self.stack.append(op)
        return self.evaluate()

    def set_variable(self, name, value):
        '''
        Assign (or unset, with None) variable and evaluate.
        '''
        logger.debug('set %r to %r', name, value)
        self._variables[name] = None if value is None else float(value)
        return self.evaluate()

    def clear(self):
        '''
        Clear stack and all variables.
        '''
        self.stack, self._variables = [], dict()

    def evaluate(self):
        '''
        Return value of the expression at the top of the stack, or None.
        '''
        result, _ = self._evaluate(len(self.stack))
        return result

    def _evaluate(self, end):
        '''
        Evaluate expression ending just before index end of the stack.

        Returns (result, remainder end). On failure, the remainder is end
        itself, unconsumed, except for a known variable holding no value.

        Operators still waiting on operands are kept on a list rather than
        the call stack, so long programs don't hit the recursion limit.
        '''
        # [operation, its end, first operand or None]
        waiting = []
        remainder = end
        while True:
            op = self.stack[remainder - 1] if remainder else None
            if isinstance(op, (UnaryOperation, BinaryOperation)):
                waiting.append([op, remainder, None])
                remainder -= 1
                continue
            result, remainder = self._resolve(op, remainder)
            while waiting:
                op, op_end, first = waiting[-1]
                if result is None:
                    remainder = op_end
                elif isinstance(op, UnaryOperation):
                    result = op.function(result)
                elif first is None:
                    # Go get the second operand
                    waiting[-1][2] = result
                    break
                else:
                    result = op.function(first, result)
                waiting.pop()
            else:
                return result, remainder

    def _resolve(self, op, end):
        '''
        Value of operand, constant or variable op ending at end, or None.
        '''
        if op is None:
            return None, end
        elif isinstance(op, Operand):
            return op.value, end - 1
        elif isinstance(op, ConstantOrVariable):
            if op.value is not None:
                return op.value, end - 1
            elif op.symbol in self._variables:
                return self._variables[op.symbol], end - 1
            return None, end
        raise TypeError('Not a stack entry: {!r}'.format(op))

    def description(self):
        '''
        Describe every expression on the stack, oldest first.

        e.g. "3 × 4 + 5, √(2)"
        '''
        descriptions = []
        end = len(self.stack)
        while end > 0:
            text, end = self._describe(end, LOWEST)
            descriptions.append(text)
        return self.SEPARATOR.join(reversed(descriptions))

    def _describe(self, end, caller):
        '''
        Describe expression ending just before index end of the stack.

        Parenthesizes binary operations binding looser than the caller.
        Returns (text, remainder end). Walks the same way as _evaluate.
        '''
        # [operation, caller precedence, right-hand text or None]
        waiting = []
        remainder = end
        while True:
            if not remainder:
                text = self.MISSING
            else:
                op = self.stack[remainder - 1]
                remainder -= 1
                if isinstance(op, (UnaryOperation, BinaryOperation)):
                    waiting.append([op, caller, None])
                    caller = precedence(op)
                    continue
                text = describe(op)
            while waiting:
                op, outer, right = waiting[-1]
                if isinstance(op, UnaryOperation):
                    text = '{}({})'.format(op.symbol, text)
                elif right is None:
                    # Right-hand side done, now the left
                    waiting[-1][2] = text
                    caller = precedence(op)
                    break
                else:
                    text = '{} {} {}'.format(text, op.symbol, right)
                    if precedence(op) < outer:
                        text = '({})'.format(text)
                waiting.pop()
            else:
                return text, remainder

    @property
    def program(self):
        '''
        Stack as a list of display symbols, oldest first.
        '''
        return [describe(op) for op in self.stack]

    @program.setter
    def program(self, symbols):
        '''
        Replace stack with one loaded from display symbols.

        Known symbols and numbers are kept; anything else (e.g. variable
        names) is dropped.
        '''
        stack = []
        if isinstance(symbols, (list, tuple)):
            for symbol in symbols:
                if not isinstance(symbol, str):
                    continue
                op = self.operations.get(symbol)
                if op is None:
                    op = self._parse_operand(symbol)
                if op is None:
                    logger.debug('dropping %r from program', symbol)
                    continue
                stack.append(op)
        self.stack = stack

    def _parse_operand(self, symbol):
        '''
        Parse number per the current locale, or None.
        '''
        try:
            return Operand(locale.atof(symbol))
        except ValueError:
            return None
