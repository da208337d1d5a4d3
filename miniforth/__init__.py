"""
miniforth - a small Forth-derived stack language interpreter

Usage:
    from miniforth import Interpreter, ForthEnv
    env = ForthEnv()
    Interpreter().eval(env, "1 2 + .")

Sessions bundle both and add an interactive loop:
    from miniforth import ForthSession
    ForthSession().execute(": sq dup * ; 7 sq .")
"""

from .core import (ForthError, StackUnderflow, UnboundName, MalformedForm,
                   StorageError, MissingReference, tokenize)
from .memory import Scalar, Array, VarRef
from .repl import ForthEnv, Interpreter, ForthSession

__all__ = ['Interpreter', 'ForthEnv', 'ForthSession', 'ForthError',
           'StackUnderflow', 'UnboundName', 'MalformedForm', 'StorageError',
           'MissingReference', 'Scalar', 'Array', 'VarRef', 'tokenize']
__version__ = '1.0.0'
