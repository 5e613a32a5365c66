#######################################
# IMPORTS
#######################################

import time

from environment import Environment
from errors import RTError
from runtime import Context, RTResult

#######################################
# VALUES
#######################################

class Value:
    __slots__ = []

    def added_to(self, other):
        return None, self.illegal_operation('Operands must be two numbers or two strings.')

    def subbed_by(self, other):
        return None, self.illegal_operation()

    def multed_by(self, other):
        return None, self.illegal_operation()

    def dived_by(self, other):
        return None, self.illegal_operation()

    def get_comparison_lt(self, other):
        return None, self.illegal_operation()

    def get_comparison_gt(self, other):
        return None, self.illegal_operation()

    def get_comparison_lte(self, other):
        return None, self.illegal_operation()

    def get_comparison_gte(self, other):
        return None, self.illegal_operation()

    def get_comparison_eq(self, other):
        return Boolean.of(self.equals(other)), None

    def get_comparison_ne(self, other):
        return Boolean.of(not self.equals(other)), None

    def negated(self):
        return None, self.illegal_operation('Operand must be a number.')

    def notted(self):
        return Boolean.of(not self.is_true()), None

    def get_dot(self, verb):
        return None, RTError(None, None, 'Only instances have properties.')

    def equals(self, other):
        return self is other

    def is_true(self):
        return True

    def illegal_operation(self, details='Operands must be numbers.'):
        # Positioned at the operator by the interpreter
        return RTError(None, None, details)


class Nil(Value):
    __slots__ = []

    def equals(self, other):
        return isinstance(other, Nil)

    def is_true(self):
        return False

    def __str__(self):
        return 'nil'

    def __repr__(self):
        return 'nil'


Nil.nil = Nil()


class Boolean(Value):
    __slots__ = ['value']

    def __init__(self, value):
        self.value = value

    @staticmethod
    def of(value):
        return Boolean.true if value else Boolean.false

    def equals(self, other):
        return isinstance(other, Boolean) and self.value == other.value

    def is_true(self):
        return self.value

    def __str__(self):
        return 'true' if self.value else 'false'

    def __repr__(self):
        return str(self)


Boolean.true = Boolean(True)
Boolean.false = Boolean(False)


class Number(Value):
    __slots__ = ['value']

    def __init__(self, value):
        self.value = float(value)

    def added_to(self, other):
        if isinstance(other, Number):
            return Number(self.value + other.value), None
        else:
            return Value.added_to(self, other)

    def subbed_by(self, other):
        if isinstance(other, Number):
            return Number(self.value - other.value), None
        else:
            return None, Value.illegal_operation(self)

    def multed_by(self, other):
        if isinstance(other, Number):
            return Number(self.value * other.value), None
        else:
            return None, Value.illegal_operation(self)

    def dived_by(self, other):
        if isinstance(other, Number):
            if other.value == 0:
                return None, RTError(None, None, 'Division by zero.')

            return Number(self.value / other.value), None
        else:
            return None, Value.illegal_operation(self)

    def get_comparison_lt(self, other):
        if isinstance(other, Number):
            return Boolean.of(self.value < other.value), None
        else:
            return None, Value.illegal_operation(self)

    def get_comparison_gt(self, other):
        if isinstance(other, Number):
            return Boolean.of(self.value > other.value), None
        else:
            return None, Value.illegal_operation(self)

    def get_comparison_lte(self, other):
        if isinstance(other, Number):
            return Boolean.of(self.value <= other.value), None
        else:
            return None, Value.illegal_operation(self)

    def get_comparison_gte(self, other):
        if isinstance(other, Number):
            return Boolean.of(self.value >= other.value), None
        else:
            return None, Value.illegal_operation(self)

    def negated(self):
        return Number(-self.value), None

    def equals(self, other):
        return isinstance(other, Number) and self.value == other.value

    def __str__(self):
        text = str(self.value)
        if text.endswith('.0'):
            text = text[:-2]
        return text

    def __repr__(self):
        return str(self)


class String(Value):
    __slots__ = ['value']

    def __init__(self, value):
        self.value = value

    def added_to(self, other):
        if isinstance(other, String):
            return String(self.value + other.value), None
        else:
            return Value.added_to(self, other)

    def equals(self, other):
        return isinstance(other, String) and self.value == other.value

    def __str__(self):
        return self.value

    def __repr__(self):
        return f'"{self.value}"'

#######################################
# CALLABLES
#######################################

class BaseFunction(Value):
    __slots__ = ['name']

    def __init__(self, name):
        self.name = name

    def arity(self):
        raise NotImplementedError

    def execute(self, interpreter, args, context, entry_pos):
        raise NotImplementedError

    def generate_new_context(self, context, entry_pos, environment):
        return Context(self.name or '<anonymous>', context, entry_pos, environment)


class Function(BaseFunction):
    """A user function or method closed over the environment it was
    declared in."""
    __slots__ = ['declaration', 'closure', 'is_initializer']

    def __init__(self, declaration, closure, is_initializer=False):
        super().__init__(declaration.name)
        self.declaration = declaration
        self.closure = closure
        self.is_initializer = is_initializer

    def arity(self):
        return len(self.declaration.param_toks)

    def bind(self, instance):
        environment = Environment(self.closure)
        environment.define('this', instance)
        return Function(self.declaration, environment, self.is_initializer)

    def execute(self, interpreter, args, context, entry_pos):
        res = RTResult()

        # Parameters live in a fresh scope chained to the closure, never to
        # the caller's environment
        environment = Environment(self.closure)
        for param_tok, arg in zip(self.declaration.param_toks, args):
            environment.define(param_tok.value, arg)
        exec_ctx = self.generate_new_context(context, entry_pos, environment)

        res.register(interpreter.execute_statements(self.declaration.body, exec_ctx))
        if res.error:
            return res

        if self.is_initializer:
            return res.success(self.closure.get_at(0, 'this'))
        if res.returning:
            return res.success(res.func_return_value)
        return res.success(Nil.nil)

    def __str__(self):
        if self.name is None:
            return '<fn>'
        return f'<fn {self.name}>'

    def __repr__(self):
        return str(self)


class BuiltInFunction(BaseFunction):
    __slots__ = []

    def __init__(self, name):
        super().__init__(name)

    def arity(self):
        return len(self.get_method().arg_names)

    def get_method(self):
        return getattr(self, f'execute_{self.name}', self.no_execute_method)

    def execute(self, interpreter, args, context, entry_pos):
        res = RTResult()
        method = self.get_method()
        exec_ctx = self.generate_new_context(context, entry_pos, Environment())

        for arg_name, arg in zip(method.arg_names, args):
            exec_ctx.environment.define(arg_name, arg)

        return_value = res.register(method(exec_ctx))
        if res.should_return():
            return res
        return res.success(return_value)

    def no_execute_method(self, exec_ctx):
        raise Exception(f'No execute_{self.name} method defined')

    no_execute_method.arg_names = []

    def __str__(self):
        return '<native fn>'

    def __repr__(self):
        return f'<built-in function {self.name}>'

    #####################################

    # Decorator for built-in functions
    @staticmethod
    def args(arg_names):
        def _args(f):
            f.arg_names = arg_names
            return f
        return _args

    #####################################

    @args([])
    def execute_clock(self, exec_ctx):
        return RTResult().success(Number(time.monotonic()))


BuiltInFunction.clock = BuiltInFunction('clock')

#######################################
# CLASSES AND INSTANCES
#######################################

class Class(BaseFunction):
    __slots__ = ['superclass', 'methods']

    def __init__(self, name, superclass, methods):
        super().__init__(name)
        self.superclass = superclass
        self.methods = methods

    def find_method(self, name):
        if name in self.methods:
            return self.methods[name]
        if self.superclass is not None:
            return self.superclass.find_method(name)
        return None

    def arity(self):
        initializer = self.find_method('init')
        if initializer is None:
            return 0
        return initializer.arity()

    def execute(self, interpreter, args, context, entry_pos):
        res = RTResult()
        instance = Instance(self)

        initializer = self.find_method('init')
        if initializer is not None:
            res.register(initializer.bind(instance).execute(interpreter, args, context, entry_pos))
            if res.should_return():
                return res

        return res.success(instance)

    def __str__(self):
        return self.name

    def __repr__(self):
        return f'<class {self.name}>'


class Instance(Value):
    __slots__ = ['klass', 'fields']

    def __init__(self, klass):
        self.klass = klass
        self.fields = {}

    def get_dot(self, verb):
        # Fields shadow methods of the same name
        if verb in self.fields:
            return self.fields[verb], None

        method = self.klass.find_method(verb)
        if method is not None:
            return method.bind(self), None

        return None, RTError(None, None, f"Undefined property '{verb}'.")

    def set_dot(self, verb, value):
        self.fields[verb] = value
        return value, None

    def __str__(self):
        return f'{self.klass.name} instance'

    def __repr__(self):
        return str(self)
