"""
miniforth Memory - Variables, arrays, constants and variable references
"""

from collections import namedtuple

from .core import (MalformedForm, MissingReference, StorageError,
                   is_valid_name)


class Scalar:
    """A single-cell variable"""

    __slots__ = ['value']

    def __init__(self, value=0):
        self.value = value

    def __repr__(self):
        return f"Var({self.value})"

    def __eq__(self, other):
        return isinstance(other, Scalar) and other.value == self.value


class Array:
    """A fixed-length integer array, converted in place from a scalar"""

    __slots__ = ['values']

    def __init__(self, length):
        self.values = [0] * length

    def __len__(self):
        return len(self.values)

    def __repr__(self):
        return f"Array({self.values})"

    def __eq__(self, other):
        return isinstance(other, Array) and other.values == self.values


class VarRef(namedtuple('VarRef', ['name', 'slot'])):
    """Pending reference; slot is None for scalars, the pending index for arrays"""

    __slots__ = ()

    @classmethod
    def scalar(cls, name):
        return cls(name, None)

    @classmethod
    def array(cls, name, slot=0):
        return cls(name, slot)

    @property
    def is_array(self):
        return self.slot is not None


class ForthMemory:
    """Environment mixin: variable storage and the reference stack"""

    def __init__(self):
        self.variables = {}
        self.var_refs = []
        super().__init__()

    def create_variable(self, name):
        """Declare (or reset) a scalar; arrays cannot be redeclared"""
        if isinstance(self.variables.get(name), Array):
            raise StorageError(f"{name} is already an array")
        self.variables[name] = Scalar()

    def _variable(self, name):
        if name not in self.variables:
            raise StorageError(f"No such variable: {name}")
        return self.variables[name]

    def allot_array(self, name, length):
        var = self._variable(name)
        if isinstance(var, Array):
            raise StorageError(f"{name} is already an array")
        if length < 0:
            raise StorageError(f"Cannot allot negative length {length} for {name}")
        self.variables[name] = Array(length)

    def get_scalar(self, name):
        var = self._variable(name)
        if isinstance(var, Array):
            raise StorageError(
                f"Unexpected array found when variable expected with name {name}")
        return var.value

    def set_scalar(self, name, value):
        var = self._variable(name)
        if isinstance(var, Array):
            raise StorageError(f"Variable {name} is an array, not a scalar")
        var.value = value

    def check_slot(self, name, pos):
        """Return the array behind `name` once `pos` is known to be in range"""
        var = self._variable(name)
        if isinstance(var, Scalar):
            raise StorageError(f"Variable {name} is not an array!")
        if not 0 <= pos < len(var):
            raise StorageError(
                f"Cannot access position: {pos} when array length is: {len(var)}")
        return var

    def get_array(self, name, pos):
        return self.check_slot(name, pos).values[pos]

    def set_array(self, name, pos, value):
        self.check_slot(name, pos).values[pos] = value

    def push_ref(self, ref):
        self.var_refs.append(ref)

    def pop_ref(self, msg):
        if not self.var_refs:
            raise MissingReference(msg)
        return self.var_refs.pop()

    def top_ref(self):
        return self.var_refs[-1] if self.var_refs else None

    def replace_top_ref(self, ref):
        self.var_refs[-1] = ref

    def reference_to(self, name):
        """Build the reference a bare variable name pushes"""
        if isinstance(self.variables[name], Array):
            return VarRef.array(name)
        return VarRef.scalar(name)

    def format_vars(self):
        entries = [f"{name!r}: {var!r}" for name, var in self.variables.items()]
        return '{' + ', '.join(entries) + '}'


class ForthMemoryWords:
    """Interpreter mixin: variable, constant, @, !, cells, allot and slot +"""

    def _register_memory_forms(self):
        """Register storage special forms"""
        self.special_forms['variable'] = self._intro_variable
        self.special_forms['constant'] = self._intro_constant
        self.special_forms['@'] = self._fetch
        self.special_forms['!'] = self._store
        self.special_forms['cells'] = self._cells
        self.special_forms['allot'] = self._allot
        self.special_forms['+'] = self._set_array_slot

    def _read_name(self, toks, what):
        name = next(toks, None)
        if name is None:
            raise MalformedForm(f"{what} name not found")
        if not is_valid_name(name):
            raise MalformedForm(f"Invalid {what} name: {name}")
        return name

    def _intro_variable(self, env, toks):
        name = self._read_name(toks, 'Variable')
        env.create_variable(name)
        env.push_ref(VarRef.scalar(name))
        return True

    def _intro_constant(self, env, toks):
        name = self._read_name(toks, 'Constant')
        value = env.pop(f"Stack empty to set constant {name}")
        env.define_constant(name, value)
        return True

    def _fetch(self, env, toks):
        ref = env.pop_ref("No variable reference found to get value")
        if ref.is_array:
            env.push(env.get_array(ref.name, ref.slot))
        else:
            env.push(env.get_scalar(ref.name))
        return True

    def _store(self, env, toks):
        ref = env.pop_ref("No variable reference found to set value")
        if ref.is_array:
            try:
                env.check_slot(ref.name, ref.slot)
            except StorageError as e:
                raise StorageError(
                    f"Setting array {ref.name} value failed because: {e}") from e
            value = env.pop("Stack empty to set array value")
            env.set_array(ref.name, ref.slot, value)
        else:
            env.get_scalar(ref.name)
            value = env.pop("Stack empty to set variable value")
            env.set_scalar(ref.name, value)
        return True

    def _cells(self, env, toks):
        env.top("Empty stack to evaluate cells")
        return True

    def _allot(self, env, toks):
        ref = env.top_ref()
        if ref is None:
            raise MissingReference("No variable found to allocate as an array!")
        if ref.is_array:
            raise StorageError(f"{ref.name} is already an array")
        length = env.pop("Stack empty to allocate array")
        env.pop_ref("No variable found to allocate as an array!")
        env.allot_array(ref.name, length)
        return True

    def _set_array_slot(self, env, toks):
        ref = env.top_ref()
        if ref is None or not ref.is_array:
            return False
        pos = env.pop("Stack empty to set slot value for array")
        env.replace_top_ref(VarRef.array(ref.name, pos))
        return True
