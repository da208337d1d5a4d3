"""
miniforth I/O - Output words, diagnostics and string literals
"""

import sys

from .core import MalformedForm


class ForthIO:
    """Mixin providing I/O operations"""

    def _register_io_words(self):
        """Register I/O words"""
        self.builtins['.'] = self._dot
        self.builtins['emit'] = self._emit
        self.builtins['cr'] = self._cr

        self.builtins['p'] = self._print_stack
        self.builtins['.s'] = self._print_stack
        self.builtins['d'] = self._print_dictionary
        self.builtins['v'] = self._print_variables
        self.builtins['words'] = self._list_words

        self.special_forms['."'] = self._dot_quote

    def _dot(self, env):
        value = env.pop("Empty stack for .")
        print(value, end=' ')
        sys.stdout.flush()

    def _emit(self, env):
        code = env.pop("Empty stack for emit")
        print(chr(code & 0xFF), end='')
        sys.stdout.flush()

    def _cr(self, env):
        print()

    def _print_stack(self, env):
        print(f"Stack: {env.format_stack()}")

    def _print_dictionary(self, env):
        print(f"Dictionary: {env.format_words()}")

    def _print_variables(self, env):
        print(f"Variables: {env.format_vars()}")

    def _list_words(self, env):
        user_words = list(env.words)
        if user_words:
            print("Words:", " ".join(user_words))
        print("Builtins:", " ".join(sorted(self.builtins)))

    def _parse_string(self, toks):
        """Collect tokens up to one ending in a double quote"""
        parts = []
        for tok in toks:
            if tok.endswith('"'):
                parts.append(tok[:-1])
                return ' '.join(parts)
            parts.append(tok)
        raise MalformedForm("Nonterminated string")

    def _dot_quote(self, env, toks):
        text = self._parse_string(toks)
        print(text, end='')
        sys.stdout.flush()
        return True
