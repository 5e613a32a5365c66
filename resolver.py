#######################################
# IMPORTS
#######################################

from enum import Enum, auto

from errors import StaticError

#######################################
# SCOPE KINDS
#######################################

class FunctionType(Enum):
    NONE = auto()
    FUNCTION = auto()
    INITIALIZER = auto()
    METHOD = auto()

class ClassType(Enum):
    NONE = auto()
    CLASS = auto()
    SUBCLASS = auto()

#######################################
# RESOLVER
#######################################

class Resolver:
    """Static pass computing, for every variable, `this` and `super`
    reference, how many scopes out its binding lives.

    References that are found in no enclosing scope get no entry in the
    table and are looked up in the global environment at run time. All
    static errors are collected; resolution never stops at the first one.
    """

    def __init__(self):
        # Each scope maps a name to whether its initializer has finished
        self.scopes = []
        self.locals = {}
        self.errors = []
        self.current_function = FunctionType.NONE
        self.current_class = ClassType.NONE

    def resolve(self, statements):
        self.resolve_statements(statements)
        return self.locals, self.errors

    def resolve_statements(self, statements):
        for statement in statements:
            self.visit(statement)

    def visit(self, node):
        method_name = f'visit_{type(node).__name__}'
        method = getattr(self, method_name, self.no_visit_method)
        return method(node)

    def no_visit_method(self, node):
        raise Exception(f'No visit_{type(node).__name__} method defined')

    ###################################

    def begin_scope(self):
        self.scopes.append({})

    def end_scope(self):
        self.scopes.pop()

    def declare(self, name_tok):
        if not self.scopes:
            return

        scope = self.scopes[-1]
        if name_tok.value in scope:
            self.error(name_tok, 'Already a variable with this name in this scope.')
        scope[name_tok.value] = False

    def define(self, name_tok):
        if not self.scopes:
            return
        self.scopes[-1][name_tok.value] = True

    def resolve_local(self, node, name):
        for i in range(len(self.scopes) - 1, -1, -1):
            if name in self.scopes[i]:
                self.locals[node] = len(self.scopes) - 1 - i
                return

    def resolve_function(self, node, function_type):
        enclosing_function = self.current_function
        self.current_function = function_type

        self.begin_scope()
        for param_tok in node.param_toks:
            self.declare(param_tok)
            self.define(param_tok)
        self.resolve_statements(node.body)
        self.end_scope()

        self.current_function = enclosing_function

    def error(self, node, details):
        self.errors.append(StaticError(node.pos_start, node.pos_end, details))

    ###################################

    def visit_BlockNode(self, node):
        self.begin_scope()
        self.resolve_statements(node.statements)
        self.end_scope()

    def visit_ClassNode(self, node):
        enclosing_class = self.current_class
        self.current_class = ClassType.CLASS

        self.declare(node.name_tok)
        self.define(node.name_tok)

        if node.superclass is not None:
            if node.superclass.var_name_tok.value == node.name_tok.value:
                self.error(node.superclass, "A class can't inherit from itself.")

            self.current_class = ClassType.SUBCLASS
            self.visit(node.superclass)

            self.begin_scope()
            self.scopes[-1]['super'] = True

        self.begin_scope()
        self.scopes[-1]['this'] = True

        for method in node.methods:
            function_type = FunctionType.METHOD
            if method.name == 'init':
                function_type = FunctionType.INITIALIZER
            self.resolve_function(method, function_type)

        self.end_scope()

        if node.superclass is not None:
            self.end_scope()

        self.current_class = enclosing_class

    def visit_ExpressionNode(self, node):
        self.visit(node.expression)

    def visit_FuncDefNode(self, node):
        # Anonymous functions have no name to bind
        if node.var_name_tok is not None:
            self.declare(node.var_name_tok)
            self.define(node.var_name_tok)

        self.resolve_function(node, FunctionType.FUNCTION)

    def visit_IfNode(self, node):
        self.visit(node.condition)
        self.visit(node.then_branch)
        if node.else_branch is not None:
            self.visit(node.else_branch)

    def visit_PrintNode(self, node):
        self.visit(node.expression)

    def visit_ReturnNode(self, node):
        if self.current_function == FunctionType.NONE:
            self.error(node.keyword_tok, "Can't return from top-level code.")

        if node.node_to_return is not None:
            if self.current_function == FunctionType.INITIALIZER:
                self.error(node.keyword_tok, "Can't return a value from an initializer.")

            self.visit(node.node_to_return)

    def visit_VarDeclNode(self, node):
        self.declare(node.var_name_tok)
        if node.initializer is not None:
            self.visit(node.initializer)
        self.define(node.var_name_tok)

    def visit_WhileNode(self, node):
        self.visit(node.condition)
        self.visit(node.body)

    ###################################

    def visit_VarAssignNode(self, node):
        self.visit(node.value_node)
        self.resolve_local(node, node.var_name_tok.value)

    def visit_BinOpNode(self, node):
        self.visit(node.left_node)
        self.visit(node.right_node)

    def visit_CallNode(self, node):
        self.visit(node.node_to_call)
        for arg_node in node.arg_nodes:
            self.visit(arg_node)

    def visit_DotGetNode(self, node):
        self.visit(node.noun)

    def visit_GroupingNode(self, node):
        self.visit(node.expression)

    def visit_NumberNode(self, node):
        pass

    def visit_StringNode(self, node):
        pass

    def visit_BooleanNode(self, node):
        pass

    def visit_NilNode(self, node):
        pass

    def visit_LogicalNode(self, node):
        self.visit(node.left_node)
        self.visit(node.right_node)

    def visit_DotSetNode(self, node):
        self.visit(node.noun)
        self.visit(node.value)

    def visit_SuperNode(self, node):
        if self.current_class == ClassType.NONE:
            self.error(node.keyword_tok, "Can't use 'super' outside of a class.")
        elif self.current_class != ClassType.SUBCLASS:
            self.error(node.keyword_tok, "Can't use 'super' in a class with no superclass.")

        self.resolve_local(node, 'super')

    def visit_ThisNode(self, node):
        if self.current_class == ClassType.NONE:
            self.error(node.keyword_tok, "Can't use 'this' outside of a class.")
            return

        self.resolve_local(node, 'this')

    def visit_UnaryOpNode(self, node):
        self.visit(node.node)

    def visit_VarAccessNode(self, node):
        name = node.var_name_tok.value
        if self.scopes and self.scopes[-1].get(name) is False:
            self.error(node.var_name_tok, "Can't read local variable in its own initializer.")

        self.resolve_local(node, name)
