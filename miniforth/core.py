"""
miniforth Core - Base infrastructure
- Exception classes
- Tokenizer and number parsing
- Stack, dictionary, constants and special registers
"""

import re
import sys


INT_MIN = -2 ** 31
INT_MAX = 2 ** 31 - 1

LOOP_REGISTER = 'i'

# Python frames available to the CLI; each nested word call uses a handful
RECURSION_LIMIT = 8000

_NUMBER_RE = re.compile(r'[+-]?[0-9]+\Z')


class ForthError(Exception):
    """Recoverable evaluation failure; halts the current evaluation only"""


class StackUnderflow(ForthError):
    """An operation needed more operands than the stack holds"""


class UnboundName(ForthError):
    """A token did not resolve through any lookup tier"""


class MalformedForm(ForthError):
    """Unterminated special form, empty branch/body or bad name"""


class StorageError(ForthError):
    """Scalar/array mismatch, bad index or unknown variable"""


class MissingReference(ForthError):
    """@, ! or allot with no pending variable reference"""


def wrap_int(value):
    """Wrap an integer to the signed 32-bit range"""
    return (value - INT_MIN) % 2 ** 32 + INT_MIN


def tokenize(text):
    """Split program text on ASCII space, dropping empty pieces"""
    tokens = []
    for piece in text.split(' '):
        token = piece.strip()
        if token:
            tokens.append(token)
    return tokens


def parse_number(token):
    """Parse a signed 32-bit decimal literal, or return None"""
    if not _NUMBER_RE.match(token):
        return None
    value = int(token)
    if value < INT_MIN or value > INT_MAX:
        return None
    return value


def is_valid_name(name):
    """Names that parse as numbers could never be looked up"""
    return parse_number(name) is None


class ForthBase:
    """Base mixin holding the stack, the dictionary and named scalars"""

    def __init__(self):
        self.stack = []
        self.words = {}
        self.constants = {}
        self.specials = {}
        super().__init__()

    def push(self, value):
        self.stack.append(wrap_int(value))

    def pop(self, msg):
        if not self.stack:
            raise StackUnderflow(msg)
        return self.stack.pop()

    def top(self, msg):
        if not self.stack:
            raise StackUnderflow(msg)
        return self.stack[-1]

    def require(self, count, msg):
        """Fail unless at least `count` operands are present"""
        if len(self.stack) < count:
            raise StackUnderflow(msg)

    def define_word(self, name, body):
        self.words[name] = list(body)

    def lookup_word(self, name):
        return self.words.get(name)

    def define_constant(self, name, value):
        self.constants[name] = value

    def lookup_constant(self, name):
        return self.constants.get(name)

    def get_special(self, name):
        return self.specials.get(name)

    def set_special(self, name, value):
        """Bind a register, returning its previous value (or None)"""
        previous = self.specials.get(name)
        self.specials[name] = value
        return previous

    def clear_special(self, name):
        return self.specials.pop(name, None)

    def format_stack(self):
        return '[' + ', '.join(str(v) for v in self.stack) + ']'

    def format_words(self):
        entries = [f"{name!r}: {' '.join(body)!r}" for name, body in self.words.items()]
        return '{' + ', '.join(entries) + '}'

    def print_stack(self):
        print(self.format_stack())
        sys.stdout.flush()
