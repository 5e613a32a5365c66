#######################################
# RUNTIME RESULT
#######################################

class RTResult:
    """Outcome of executing a statement or evaluating an expression.

    A result is exactly one of: completed with `value`, returning from the
    enclosing function with `func_return_value`, or failed with `error`.
    Callers register child results and stop as soon as `should_return()`
    reports that the child did not complete normally.
    """
    __slots__ = ['value', 'error', 'func_return_value', 'returning']

    def __init__(self):
        self.reset()

    def reset(self):
        self.value = None
        self.error = None
        self.func_return_value = None
        self.returning = False

    def register(self, res):
        self.error = res.error
        self.func_return_value = res.func_return_value
        self.returning = res.returning
        return res.value

    def success(self, value):
        self.reset()
        self.value = value
        return self

    def success_return(self, value):
        self.reset()
        self.func_return_value = value
        self.returning = True
        return self

    def failure(self, error):
        self.reset()
        self.error = error
        return self

    def should_return(self):
        return self.error is not None or self.returning

#######################################
# CONTEXT
#######################################

class Context:
    """A call frame: where execution is, who called it, and the environment
    statements currently run against."""
    __slots__ = ['display_name', 'parent', 'parent_entry_pos', 'environment', 'depth']

    def __init__(self, display_name, parent=None, parent_entry_pos=None, environment=None):
        self.display_name = display_name
        self.parent = parent
        self.parent_entry_pos = parent_entry_pos
        self.environment = environment
        self.depth = parent.depth + 1 if parent else 0

    def nested(self, environment):
        # Same frame, inner scope: tracebacks do not list blocks
        return Context(self.display_name, self.parent, self.parent_entry_pos, environment)
