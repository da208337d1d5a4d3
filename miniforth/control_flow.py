"""
miniforth Control Flow - IF/ELSE/THEN and DO/LOOP
"""

from .core import LOOP_REGISTER, MalformedForm


class ForthControlFlow:
    """Mixin providing control flow structures"""

    def _register_control_flow_words(self):
        """Register control flow special forms"""
        self.special_forms['if'] = self._eval_conditional
        self.special_forms['do'] = self._eval_do_loop

    def _extract_if_block(self, toks):
        """Collect IF...ELSE...THEN up to the matching THEN

        Returns (if_tokens, else_tokens); else_tokens is None when the
        block has no ELSE at its own nesting level. Repeated ELSE tokens
        at that level are dropped; the else branch keeps accumulating.
        """
        if_tokens = []
        else_tokens = None
        depth = 1

        for tok in toks:
            if tok == 'if':
                depth += 1
            elif tok == 'then':
                depth -= 1
                if depth == 0:
                    return if_tokens, else_tokens
            elif tok == 'else' and depth == 1:
                if else_tokens is None:
                    else_tokens = []
                continue

            if else_tokens is None:
                if_tokens.append(tok)
            else:
                else_tokens.append(tok)

        raise MalformedForm("Nonterminated if: missing then")

    def _extract_do_block(self, toks):
        """Collect DO...LOOP up to the matching LOOP"""
        loop_tokens = []
        depth = 1

        for tok in toks:
            if tok == 'do':
                depth += 1
            elif tok == 'loop':
                depth -= 1
                if depth == 0:
                    return loop_tokens
            loop_tokens.append(tok)

        raise MalformedForm("Nonterminated do: missing loop")

    def _eval_conditional(self, env, toks):
        condition = env.pop("Empty stack for condition in if")
        if_tokens, else_tokens = self._extract_if_block(toks)

        if not if_tokens:
            raise MalformedForm("Empty statement for then clause")
        if else_tokens is not None and not else_tokens:
            raise MalformedForm("Empty statement for then clause after else")

        if condition != 0:
            self.eval_tokens(env, if_tokens)
        elif else_tokens:
            self.eval_tokens(env, else_tokens)
        return True

    def _eval_do_loop(self, env, toks):
        loop_tokens = self._extract_do_block(toks)
        if not loop_tokens:
            raise MalformedForm("Empty loop body")

        end = env.pop("Empty stack for end of do loop")
        start = env.pop("Empty stack for start of do loop")

        outer = env.get_special(LOOP_REGISTER)
        try:
            for i in range(start, end):
                env.set_special(LOOP_REGISTER, i)
                self.eval_tokens(env, loop_tokens)
        finally:
            if outer is None:
                env.clear_special(LOOP_REGISTER)
            else:
                env.set_special(LOOP_REGISTER, outer)
        return True
