import io

import pytest

import lib
from interpreter import Interpreter


class Session:
    """One interpreter whose printed output is captured for inspection."""

    def __init__(self, **kwargs):
        self.output = io.StringIO()
        self.interpreter = Interpreter(output=self.output, **kwargs)

    def run(self, source, fn='<test>'):
        _, error = lib.run(fn, source, self.interpreter)
        return error

    @property
    def lines(self):
        return self.output.getvalue().splitlines()


@pytest.fixture
def session():
    return Session()


@pytest.fixture
def run_lox():
    def _run(source, **kwargs):
        session = Session(**kwargs)
        error = session.run(source)
        return session.lines, error
    return _run


@pytest.fixture
def parse():
    def _parse(source):
        statements, error = lib.parse('<test>', source)
        assert error is None, error
        return statements
    return _parse
