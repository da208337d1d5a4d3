"""
miniforth Stack Operations - Stack manipulation words
"""


class ForthStack:
    """Mixin providing stack manipulation operations"""

    def _register_stack_words(self):
        """Register stack words"""
        self.builtins['dup'] = self._dup
        self.builtins['drop'] = self._drop
        self.builtins['swap'] = self._swap
        self.builtins['over'] = self._over
        self.builtins['rot'] = self._rot

    def _dup(self, env):
        env.push(env.top("Empty stack for dup"))

    def _drop(self, env):
        env.pop("Empty stack for drop")

    def _swap(self, env):
        env.require(2, "Not enough values on stack for swap")
        a, b = env.stack.pop(), env.stack.pop()
        env.stack.extend([a, b])

    def _over(self, env):
        env.require(2, "Not enough values on stack for over")
        env.stack.append(env.stack[-2])

    def _rot(self, env):
        env.require(3, "Not enough values on stack for rot")
        c = env.stack.pop()
        b = env.stack.pop()
        a = env.stack.pop()
        env.stack.extend([b, c, a])
