#######################################
# ENVIRONMENT
#######################################

class Environment:
    """One lexical scope: a table of bindings plus a link to the enclosing
    scope.

    Environments are shared, never copied. The interpreter's current context
    and every closure created inside the scope hold the same object, so a
    binding mutated through one alias is seen through all of them.
    """
    __slots__ = ['symbols', 'parent']

    def __init__(self, parent=None):
        self.symbols = {}
        self.parent = parent

    def define(self, name, value):
        self.symbols[name] = value

    def get(self, name):
        """Look a name up in this environment only; None when unbound."""
        return self.symbols.get(name, None)

    def assign(self, name, value):
        if name not in self.symbols:
            return False
        self.symbols[name] = value
        return True

    def ancestor(self, distance):
        environment = self
        for _ in range(distance):
            environment = environment.parent
        return environment

    def get_at(self, distance, name):
        symbols = self.ancestor(distance).symbols
        if name not in symbols:
            raise Exception(f"Resolved variable '{name}' is missing at distance {distance}")
        return symbols[name]

    def assign_at(self, distance, name, value):
        symbols = self.ancestor(distance).symbols
        if name not in symbols:
            raise Exception(f"Resolved variable '{name}' is missing at distance {distance}")
        symbols[name] = value

    def __repr__(self):
        names = ', '.join(self.symbols)
        if self.parent is None:
            return f'<global environment: {names}>'
        return f'<environment: {names}>'
