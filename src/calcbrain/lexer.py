import regex

from .util import BrainError
from .ops import known_operations


class Lexer:
    '''
    Lexer splitting a typed line into operands, operators and commands.

    Holds no state; the grammar is compiled once, on the class.
    '''
    # Digits, optionally grouped in thousands with underscores: 1_000
    DIGITS = r'\d+(?:_\d{3})*'
    NUMBER = r'''
              (?:
                  ''' + DIGITS + r''' (?: \. (?:''' + DIGITS + r''')? )?
                  |
                  \. ''' + DIGITS + r'''
              )
              (?: [eE] [+-]? \d+ )?
              # 2x is neither a number nor a name
              (?!\w)
              '''
    NAME = r'(?:[^\W\d]\w*)'

    # Spellings for symbols that are awkward to type.
    ALIASES = {
        '*': '×',
        '/': '÷',
        'sqrt': '√',
        'pi': 'π',
    }
    # Longest first, so a symbol never loses to its own prefix.
    OPERATORS = sorted(set(known_operations()) | set(ALIASES),
                       key=len, reverse=True)
    # Word operators (sin, pi) only count when not part of a longer name.
    OPERATOR = r'(?:' + r'|'.join(regex.escape(symbol) +
                                  (r'(?!\w)' if symbol.isalnum() else '')
                                  for symbol in OPERATORS) + r')'

    # →x (or >x) stores the displayed value in x; <x unsets x.
    STORE = r'(?:[→>](?<__name__>' + NAME + r'))'
    UNSET = r'(?:<(?<__name__>' + NAME + r'))'
    # = shows history; ! clears everything.
    COMMAND = r'[=!]'
    SPACE = r'\s+'

    # Tried in order. Operators before names, so sin isn't a variable.
    KINDS = 'number', 'store', 'unset', 'command', 'operator', 'name', 'space'
    LEXEME = r'|'.join(r'(?<{}>{})'.format(kind, pattern)
                       for kind, pattern in zip(KINDS, [NUMBER, STORE, UNSET,
                                                        COMMAND, OPERATOR,
                                                        NAME, SPACE]))
    PATTERN = regex.compile(LEXEME, regex.VERSION1 | regex.VERBOSE)

    def lex(self, line):
        '''
        Yield lexeme matches of line, left to right.

        Raises BrainError at the first text that isn't a lexeme, once every
        lexeme before it has been yielded.
        '''
        position = 0
        while position < len(line):
            match = self.PATTERN.match(line, position)
            if match is None:
                raise BrainError("Couldn't lex {0}".format(
                    line[position:].strip()))
            yield match
            position = match.end()

    def isfeedable(self, match):
        '''
        Return True unless the lexeme is whitespace.
        '''
        return not match.group('space')

    def kind(self, match):
        '''
        Return which kind of lexeme matched, e.g. 'number'.
        '''
        return next(kind for kind in self.KINDS if match.group(kind))

    def matchedgroups(self, match):
        '''
        Return the groups that took part in the match, name to text.
        '''
        return dict((name, text)
                    for name, text in match.groupdict().items()
                    if text)

    def canonical(self, symbol):
        '''
        Return canonical symbol for an operator, resolving aliases.
        '''
        return self.ALIASES.get(symbol, symbol)
