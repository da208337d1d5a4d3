"""
miniforth Compiler - Word definitions and user word execution

Definitions are not compiled: the body is kept as raw tokens and
re-evaluated on every call, so redefining a word used inside another
word changes the caller's behaviour too.
"""

from .core import ForthError, MalformedForm, is_valid_name


class ForthCompiler:
    """Mixin providing word definition"""

    def _register_compiler_words(self):
        """Register definition special forms"""
        self.special_forms[':'] = self._define

    def _parse_definition(self, toks):
        """Read `name body... ;` from the cursor"""
        name = next(toks, None)
        if name is None:
            raise MalformedForm("Invalid function: missing name")
        if not is_valid_name(name):
            raise MalformedForm(f"Invalid function name: {name}")

        body = []
        for tok in toks:
            if tok == ';':
                return name, body
            body.append(tok)

        raise MalformedForm(f"Invalid function: {name} is missing ;")

    def _define(self, env, toks):
        name, body = self._parse_definition(toks)
        env.define_word(name, body)
        return True

    def _eval_word(self, env, name):
        """Run a user word; returns False when no such word exists"""
        body = env.lookup_word(name)
        if body is None:
            return False
        try:
            self.eval_tokens(env, body)
        except RecursionError:
            raise ForthError(f"Recursion too deep in {name}") from None
        return True
