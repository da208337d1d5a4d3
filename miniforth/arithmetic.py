"""
miniforth Arithmetic - Arithmetic, bitwise and comparison builtins
"""

import operator

from .core import ForthError


def _trunc_div(y, x):
    q = abs(y) // abs(x)
    return q if (y < 0) == (x < 0) else -q


def _trunc_mod(y, x):
    return y - x * _trunc_div(y, x)


class ForthArithmetic:
    """Mixin providing arithmetic operations"""

    def _register_arithmetic_words(self):
        """Register arithmetic words"""
        self.builtins['+'] = self._plus
        self.builtins['-'] = self._minus
        self.builtins['*'] = self._mult
        self.builtins['/'] = self._div
        self.builtins['mod'] = self._mod

        self.builtins['and'] = self._and
        self.builtins['or'] = self._or
        self.builtins['invert'] = self._invert

        self.builtins['='] = self._equal
        self.builtins['!='] = self._not_equal
        self.builtins['<>'] = self._not_equal
        self.builtins['<'] = self._less
        self.builtins['>'] = self._greater
        self.builtins['<='] = self._less_equal
        self.builtins['>='] = self._greater_equal

    def _binary_op(self, env, name, op):
        x = env.pop(f"Empty stack: for first argument for {name}")
        y = env.pop(f"Empty stack: for second argument for {name}")
        env.push(op(y, x))

    def _compare(self, env, name, op):
        x = env.pop(f"Empty stack: for first argument for {name}")
        y = env.pop(f"Empty stack: for second argument for {name}")
        env.push(-1 if op(y, x) else 0)

    def _plus(self, env):
        self._binary_op(env, '+', operator.add)

    def _minus(self, env):
        self._binary_op(env, '-', operator.sub)

    def _mult(self, env):
        self._binary_op(env, '*', operator.mul)

    def _div(self, env):
        env.require(2, "Empty stack: for arguments for /")
        if env.stack[-1] == 0:
            raise ForthError("Division by zero")
        self._binary_op(env, '/', _trunc_div)

    def _mod(self, env):
        env.require(2, "Empty stack: for arguments for mod")
        if env.stack[-1] == 0:
            raise ForthError("Division by zero")
        self._binary_op(env, 'mod', _trunc_mod)

    def _and(self, env):
        self._binary_op(env, 'and', operator.and_)

    def _or(self, env):
        self._binary_op(env, 'or', operator.or_)

    def _invert(self, env):
        env.push(~env.pop("Empty stack for invert"))

    def _equal(self, env):
        self._compare(env, '=', operator.eq)

    def _not_equal(self, env):
        self._compare(env, '!=', operator.ne)

    def _less(self, env):
        self._compare(env, '<', operator.lt)

    def _greater(self, env):
        self._compare(env, '>', operator.gt)

    def _less_equal(self, env):
        self._compare(env, '<=', operator.le)

    def _greater_equal(self, env):
        self._compare(env, '>=', operator.ge)
