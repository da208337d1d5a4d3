"""
Test infrastructure for the miniforth interpreter.

Provides:
- env: a fresh, empty ForthEnv
- interp: an Interpreter without stack echo
- run(): evaluate a program and return (stdout, halting error)
"""

import pytest

from miniforth import ForthEnv, Interpreter


@pytest.fixture
def env():
    return ForthEnv()


@pytest.fixture
def interp():
    return Interpreter()


@pytest.fixture
def run(env, interp, capsys):
    """Evaluate program text against the shared env, capturing output"""
    def _run(text):
        error = interp.eval(env, text)
        out = capsys.readouterr().out
        return out, error
    return _run
