from os import isatty
from sys import stdin, stdout, stderr, exit
from argparse import ArgumentParser, REMAINDER, OPTIONAL
import logging

from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory

from .util import BrainError, format_number, wrap_user_errors
from .brain import Brain
from .lexer import Lexer
from .ops import ConstantOrVariable


class InteractiveInput:
    '''
    Lines typed at a prompt, until end of file.

    The bottom toolbar shows the calculator display and stack depth.
    '''

    def __init__(self, prompt, session):
        self.prompt = prompt
        self.session = session

    def toolbar(self):
        return ' {}   ({} on stack)'.format(self.session.display,
                                          len(self.session.brain))

    def __iter__(self):
        prompt = PromptSession(message=self.prompt,
                               history=InMemoryHistory(),
                               bottom_toolbar=self.toolbar)
        while True:
            try:
                line = prompt.prompt()
            except KeyboardInterrupt:
                # Ctrl-C only drops the line being typed
                continue
            except EOFError:
                return
            yield line


class Session:
    '''
    Feeds lexemes to a calculator brain, keeping track of the display.

    Plays the part of a calculator's keypad and display: the brain only
    sees separated numbers and symbols.
    '''

    ERROR = 'ERR'

    def __init__(self, brain=None, lexer=None):
        self.brain = Brain() if brain is None else brain
        self.lexer = Lexer() if lexer is None else lexer
        self.value = 0.0
        # Number typed in but not yet entered onto the stack
        self.pending = None

    @property
    def display(self):
        '''
        Display text for the current value, ERR if there is none.
        '''
        if self.value is None:
            return self.ERROR
        return format_number(self.value)

    def enter(self):
        '''
        Push pending number, if any.
        '''
        if self.pending is not None:
            number, self.pending = self.pending, None
            self.value = self.brain.push_operand(number)

    def feed(self, groups):
        '''
        Run one lexeme on the brain.

        Numbers wait until the next lexeme (or end of line) to be entered,
        so that storing one into a variable doesn't push it.

        :param groups: Matched groups of the lexeme, by name.
        '''
        if 'number' in groups:
            self.enter()
            self.pending = self.value = self._convert(groups['number'])
            return
        if 'store' in groups:
            value = self.value if self.pending is None else self.pending
            if value is None:
                raise BrainError('Nothing to store in {}'.format(
                    groups['__name__']))
            self.pending = None
            self.value = self.brain.set_variable(groups['__name__'], value)
            return
        self.enter()
        if 'operator' in groups:
            symbol = self.lexer.canonical(groups['operator'])
            op = self.brain.operations.get(symbol)
            if isinstance(op, ConstantOrVariable):
                # Constants are pushed like operands.
                self.value = self.brain.push_symbol(symbol)
            else:
                self.value = self.brain.perform_operation(symbol)
        elif 'name' in groups:
            self.value = self.brain.push_symbol(groups['name'])
        elif 'unset' in groups:
            self.value = self.brain.set_variable(groups['__name__'], None)
        elif 'command' in groups:
            self.command(groups['command'])

    def command(self, command):
        '''
        Run a non-stack command: = for history, ! to clear everything.
        '''
        if command == '=':
            print(self.brain.description())
        elif command == '!':
            self.brain.clear()
            self.value = 0.0

    def run(self, line):
        '''
        Lex and run a whole line.

        A number typed before a bad lexeme is still entered.
        '''
        try:
            for match in self.lexer.lex(line):
                if self.lexer.isfeedable(match):
                    self.feed(self.lexer.matchedgroups(match))
        finally:
            self.enter()

    @wrap_user_errors('Cannot convert {1}')
    def _convert(self, number):
        '''
        Convert lexed number to float.
        '''
        return float(number.replace('_', ''))


class CLI:
    '''
    Command line front end: reads lines and runs them on a Session.
    '''

    DEFAULT_PROMPT = '> '

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        parser = ArgumentParser(description='Stack calculator')
        parser.add_argument('-v', '--verbose', action='store_true',
                            help='log every push and show the history '
                                 'after each line')
        source = parser.add_mutually_exclusive_group()
        source.add_argument('-e', '--expression', dest='expressions',
                            nargs=REMAINDER,
                            help='lines to run instead of reading stdin')
        source.add_argument('-p', '--prompt', nargs=OPTIONAL,
                            const=self.DEFAULT_PROMPT,
                            help='prompt even when not on a terminal')
        mode = parser.add_mutually_exclusive_group()
        mode.add_argument('-D', '--dump', dest='action',
                          action='store_const', const=self.dumper,
                          help='print lexemes instead of running them')
        mode.add_argument('-G', '--raw-grammar', dest='action',
                          action='store_const', const=self.raw_grammar,
                          help='print the lexeme regex')
        parser.set_defaults(action=self.executor)
        self.argument_parser = parser
        self.session = Session()

    def executor(self):
        '''
        Run every line, printing the display after each.
        '''
        for line in self.args.expressions:
            if not line.strip():
                continue
            try:
                self.session.run(line)
            # The rest of the line is dropped
            except BrainError as e:
                print(e.args[0], file=stderr)
            print(self.session.display)
            if self.args.verbose:
                print(self.session.brain.description(), file=stderr)

    def dumper(self):
        '''
        Print the kind and text of every lexeme, one per line.
        '''
        lexer = self.session.lexer
        for line in self.args.expressions:
            for match in lexer.lex(line):
                print(lexer.kind(match), repr(match.group(0)), sep='\t')

    def raw_grammar(self):
        print(Lexer.LEXEME)

    def _lines(self):
        '''
        Prompt for lines if asked to or on a terminal, else read stdin.
        '''
        if self.args.prompt or \
           isatty(stdin.fileno()) and isatty(stdout.fileno()):
            return InteractiveInput(self.args.prompt or self.DEFAULT_PROMPT,
                                    self.session)
        return stdin

    def run(self, *, args=None):
        '''
        Parse args (sys.argv if None) and run the chosen action.
        '''
        self.args = self.argument_parser.parse_args(args)
        if self.args.verbose:
            logging.basicConfig(level=logging.DEBUG)
        if self.args.expressions is None:
            self.args.expressions = self._lines()
        try:
            self.args.action()
        except KeyboardInterrupt:
            exit(1)
