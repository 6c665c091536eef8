import sys

from pytest import Item, fixture

from calcbrain.brain import Brain
from calcbrain.cli import Session


class _LiveStderr:
    '''Forward to whatever sys.stderr is at write time (e.g. capsys).'''

    def __getattr__(self, name):
        return getattr(sys.stderr, name)


@fixture(autouse=True)
def _live_cli_stderr(monkeypatch):
    # calcbrain.cli binds stderr at import, before capsys swaps sys.stderr.
    monkeypatch.setattr('calcbrain.cli.stderr', _LiveStderr())


@fixture
def brain() -> Brain:
    return Brain()


@fixture
def session(brain: Brain) -> Session:
    return Session(brain=brain)


def pytest_assertion_pass(item: Item,
                          lineno: int,
                          orig: str,
                          expl: str) -> None:
    '''
    Log every assertion, in case we later need to audit a run.

    Use with pytest -rP and enable_assertion_pass_hook.
    '''
    print('given', item.name + ':' + str(lineno), str(orig))  # no repr()!
    print('actual', item.name + ':' + str(lineno),
          '\n'.join(str(expl).splitlines()[:-2]))
