"""
miniforth REPL - Environment, evaluation loop, sessions and the interactive loop
"""

import sys

from .core import ForthBase, ForthError, UnboundName, parse_number, tokenize
from .memory import ForthMemory, ForthMemoryWords
from .arithmetic import ForthArithmetic
from .stack_ops import ForthStack
from .control_flow import ForthControlFlow
from .compiler import ForthCompiler
from .io_words import ForthIO


class ForthEnv(ForthBase, ForthMemory):
    """Runtime environment: stack, words, variables, constants, registers"""

    def __repr__(self):
        return f"<ForthEnv stack={self.format_stack()}>"


class Interpreter(ForthMemoryWords, ForthArithmetic, ForthStack,
                  ForthControlFlow, ForthCompiler, ForthIO):
    """Token-cursor evaluator over a ForthEnv

    The builtin and special-form tables are fixed here, at construction
    time. Only user words can be added afterwards, through `:`.
    """

    def __init__(self, echo_stack=False):
        self.echo_stack = echo_stack
        self.builtins = {}
        self.special_forms = {}
        self._register_all_words()

    def _register_all_words(self):
        """Register all words from all mixins"""
        self._register_memory_forms()
        self._register_arithmetic_words()
        self._register_stack_words()
        self._register_control_flow_words()
        self._register_compiler_words()
        self._register_io_words()

    def eval(self, env, text):
        """Evaluate a complete program; returns the halting error or None"""
        error = self.eval_tokens(env, tokenize(text))
        if self.echo_stack:
            print("=> ", end='')
            env.print_stack()
        return error

    def eval_tokens(self, env, tokens):
        """Evaluate a token list, halting this call (only) on the first error"""
        toks = iter(tokens)
        for tok in toks:
            if not tok.strip():
                continue
            try:
                self._eval_token(env, tok, toks)
            except ForthError as e:
                print(f"Error: {e}")
                sys.stdout.flush()
                return e
        return None

    def _eval_token(self, env, tok, toks):
        special = self.special_forms.get(tok)
        if special is not None and special(env, toks):
            return

        register = env.get_special(tok)
        if register is not None:
            env.push(register)
            return

        builtin = self.builtins.get(tok)
        if builtin is not None:
            builtin(env)
            return

        if self._eval_word(env, tok):
            return

        num = parse_number(tok)
        if num is not None:
            env.push(num)
            return

        const = env.lookup_constant(tok)
        if const is not None:
            env.push(const)
            return

        if tok in env.variables:
            env.push_ref(env.reference_to(tok))
            return

        raise UnboundName(f"Invalid token: {tok}")


class ForthSession:
    """One interpreter bound to one environment, plus the interactive loop"""

    def __init__(self, echo_stack=True, env=None):
        self.interpreter = Interpreter(echo_stack=echo_stack)
        self.env = env if env is not None else ForthEnv()
        self.last_error = None

    def __repr__(self):
        return f"<ForthSession stack={self.env.format_stack()}>"

    def __call__(self, *values):
        return self.push(*values)

    def execute(self, text):
        """Evaluate Forth code against this session's environment"""
        self.last_error = self.interpreter.eval(self.env, text)
        return self

    def push(self, *values):
        for v in values:
            self.env.push(v)
        return self

    def pop(self):
        return self.env.stack.pop() if self.env.stack else None

    def peek(self):
        return self.env.stack[-1] if self.env.stack else None

    def repl(self, get_input=input):
        """Start interactive REPL; `bye` or end of input leaves it"""
        print("miniforth - type 'bye' to exit, 'words' to list words")

        while True:
            try:
                try:
                    line = get_input("ok> ")
                except EOFError:
                    break

                if line.strip().lower() == 'bye':
                    break
                if not line.strip():
                    continue

                self.execute(line)

            except KeyboardInterrupt:
                print("\n(Ctrl+C) stack and definitions preserved, 'bye' to exit")

        return self
