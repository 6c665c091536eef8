'''
Terminal front end tests.
'''

import math

from calcbrain.brain import Brain
from calcbrain.cli import CLI, Session
from calcbrain.ops import known_operations
from calcbrain.util import BrainError

from pytest import raises


def run(*lines):
    cli = CLI()
    cli.run(args=['-e', *lines])


def test_executor(capsys):
    run('3 4 +', '5 ×')
    assert capsys.readouterr().out == '7\n35\n'


def test_error_display(capsys):
    run('3 +', '√')
    assert capsys.readouterr().out == 'ERR\nERR\n'


def test_division(capsys):
    run('10 4 /')
    assert capsys.readouterr().out == '2.5\n'


def test_history(capsys):
    run('3 4 * 5 +', '2 sqrt', '=')
    out = capsys.readouterr().out.splitlines()
    assert out[-2:] == ['3 × 4 + 5, √(2)', '1.4142135623730951']


def test_variables(capsys):
    run('x 5 +', '3 →x', '<x')
    assert capsys.readouterr().out == 'ERR\n8\nERR\n'


def test_clear(capsys):
    run('1 2 +', '!', '=')
    assert capsys.readouterr().out == '3\n0\n\n0\n'


def test_lex_error(capsys):
    run('3 ^ 4', '5')
    captured = capsys.readouterr()
    assert captured.out == '3\n5\n'
    assert "Couldn't lex ^ 4" in captured.err


def test_blank_lines_skipped(capsys):
    run('', '2', '   ')
    assert capsys.readouterr().out == '2\n'


def test_verbose(capsys):
    cli = CLI()
    cli.run(args=['-v', '-e', '2 3 +'])
    captured = capsys.readouterr()
    assert captured.out == '5\n'
    assert '2 + 3' in captured.err


def test_dump(capsys):
    cli = CLI()
    cli.run(args=['-D', '-e', '3 →x'])
    out = capsys.readouterr().out.splitlines()
    assert out == ["number\t'3'",
                   "space\t' '",
                   "store\t'→x'"]


def test_raw_grammar(capsys):
    cli = CLI()
    cli.run(args=['-G', '-e'])
    assert '(?<number>' in capsys.readouterr().out


def test_session_display(session):
    assert session.display == '0'
    session.run('1 3 ÷')
    assert session.display == '0.3333333333333333'
    session.run('0 ÷')
    assert session.display == 'inf'


def test_session_constant(session):
    session.run('pi')
    assert session.value == math.pi
    assert session.brain.program == ['π']


def test_session_unknown_name_is_variable(session):
    session.run('M')
    assert session.display == 'ERR'
    session.run('2 →M')
    # Stored, not pushed: M is still on top
    assert session.brain.program == ['M']
    assert session.value == 2
    assert session.brain.variables['M'] == 2


def test_session_store_nothing(session):
    session.run('+')
    with raises(BrainError, match='Nothing to store in x'):
        session.run('→x')
    assert 'x' not in session.brain.variables


def test_long_line(capsys):
    run('1 ' + '1 + ' * 1200)
    assert capsys.readouterr().out == '1201\n'


def test_typed_number_entered_despite_lex_error(session):
    with raises(BrainError):
        session.run('3 ^ 4')
    assert session.pending is None
    assert session.brain.program == ['3']

    session.run('→x')
    # Stores the 3 already on the stack, nothing new pushed
    assert session.brain.program == ['3']
    assert session.brain.variables['x'] == 3


def test_operator_missing_from_table():
    operations = dict(known_operations())
    del operations['√']
    session = Session(brain=Brain(operations))
    session.run('4 sqrt')
    assert session.display == 'ERR'
    assert session.brain.program == ['4']
