#######################################
# IMPORTS
#######################################

import logging
import sys

import config
from environment import Environment
from errors import RTError
from lexer import TokenType
from runtime import Context, RTResult
from values import (
    BaseFunction, Boolean, BuiltInFunction, Class, Function, Instance, Nil,
    Number, String,
)

logger = logging.getLogger(__name__)

# Host frames consumed by one interpreted call, generously counted
FRAMES_PER_CALL = 20

# Highest Python recursion limit the interpreter will request; deeper
# limits risk overflowing the C stack
RECURSION_LIMIT_CAP = 20000

#######################################
# INTERPRETER
#######################################

class Interpreter:
    """Tree-walking evaluator.

    One interpreter owns one global environment; statements passed to
    successive `interpret` calls share it, so a runtime error in one call
    leaves bindings made by earlier calls intact.
    """

    def __init__(self, output=None, report=None, max_call_depth=None):
        self.globals = Environment()
        self.globals.define('clock', BuiltInFunction.clock)
        self.locals = {}
        self.output = output
        self.report = report
        self.max_call_depth = max_call_depth or config.MAX_CALL_DEPTH

        deepest = RECURSION_LIMIT_CAP // FRAMES_PER_CALL
        if self.max_call_depth > deepest:
            logger.warning('call depth %d exceeds host limit, using %d', self.max_call_depth, deepest)
            self.max_call_depth = deepest

        limit = self.max_call_depth * FRAMES_PER_CALL
        if sys.getrecursionlimit() < limit:
            sys.setrecursionlimit(limit)

    def interpret(self, statements, locals_=None):
        if locals_:
            self.locals.update(locals_)

        context = Context('<program>', environment=self.globals)
        res = self.execute_statements(statements, context)
        if res.error:
            if self.report is not None:
                self.report(res.error)
            return res.error
        return None

    def execute_statements(self, statements, context):
        res = RTResult()

        for statement in statements:
            res.register(self.visit(statement, context))
            if res.should_return():
                return res

        return res.success(Nil.nil)

    def visit(self, node, context):
        method_name = f'visit_{type(node).__name__}'
        method = getattr(self, method_name, self.no_visit_method)
        return method(node, context)

    def no_visit_method(self, node, context):
        raise Exception(f'No visit_{type(node).__name__} method defined')

    def stack_overflow(self, tok, context):
        return RTError(tok.pos_start, tok.pos_end, 'Stack overflow.', context)

    def write(self, text):
        print(text, file=self.output)

    def look_up_variable(self, name, node, context):
        res = RTResult()

        distance = self.locals.get(node)
        if distance is not None:
            return res.success(context.environment.get_at(distance, name))

        value = self.globals.get(name)
        if value is None:
            return res.failure(RTError(
                node.pos_start, node.pos_end,
                f"Undefined variable '{name}'.",
                context
            ))

        return res.success(value)

    ###################################

    def visit_NumberNode(self, node, context):
        return RTResult().success(Number(node.tok.value))

    def visit_StringNode(self, node, context):
        return RTResult().success(String(node.tok.value))

    def visit_BooleanNode(self, node, context):
        return RTResult().success(Boolean.of(node.value))

    def visit_NilNode(self, node, context):
        return RTResult().success(Nil.nil)

    def visit_GroupingNode(self, node, context):
        return self.visit(node.expression, context)

    def visit_VarAccessNode(self, node, context):
        return self.look_up_variable(node.var_name_tok.value, node, context)

    def visit_VarAssignNode(self, node, context):
        res = RTResult()
        var_name = node.var_name_tok.value
        value = res.register(self.visit(node.value_node, context))
        if res.should_return():
            return res

        distance = self.locals.get(node)
        if distance is not None:
            context.environment.assign_at(distance, var_name, value)
        elif not self.globals.assign(var_name, value):
            return res.failure(RTError(
                node.var_name_tok.pos_start, node.var_name_tok.pos_end,
                f"Undefined variable '{var_name}'.",
                context
            ))

        return res.success(value)

    def visit_BinOpNode(self, node, context):
        res = RTResult()
        left = res.register(self.visit(node.left_node, context))
        if res.should_return():
            return res
        right = res.register(self.visit(node.right_node, context))
        if res.should_return():
            return res

        op_type = node.op_tok.type
        if op_type == TokenType.PLUS:
            result, error = left.added_to(right)
        elif op_type == TokenType.MINUS:
            result, error = left.subbed_by(right)
        elif op_type == TokenType.STAR:
            result, error = left.multed_by(right)
        elif op_type == TokenType.SLASH:
            result, error = left.dived_by(right)
        elif op_type == TokenType.EE:
            result, error = left.get_comparison_eq(right)
        elif op_type == TokenType.NE:
            result, error = left.get_comparison_ne(right)
        elif op_type == TokenType.LT:
            result, error = left.get_comparison_lt(right)
        elif op_type == TokenType.GT:
            result, error = left.get_comparison_gt(right)
        elif op_type == TokenType.LTE:
            result, error = left.get_comparison_lte(right)
        elif op_type == TokenType.GTE:
            result, error = left.get_comparison_gte(right)
        else:
            raise Exception(f'Unknown binary operator {node.op_tok!r}')

        if error:
            return res.failure(error.set_pos(
                node.op_tok.pos_start, node.op_tok.pos_end).set_context(context))
        return res.success(result)

    def visit_LogicalNode(self, node, context):
        res = RTResult()
        left = res.register(self.visit(node.left_node, context))
        if res.should_return():
            return res

        if node.op_tok.matches(TokenType.KEYWORD, 'or'):
            if left.is_true():
                return res.success(left)
        elif not left.is_true():
            return res.success(left)

        return self.visit(node.right_node, context)

    def visit_UnaryOpNode(self, node, context):
        res = RTResult()
        operand = res.register(self.visit(node.node, context))
        if res.should_return():
            return res

        if node.op_tok.type == TokenType.MINUS:
            result, error = operand.negated()
        else:
            result, error = operand.notted()

        if error:
            return res.failure(error.set_pos(
                node.op_tok.pos_start, node.op_tok.pos_end).set_context(context))
        return res.success(result)

    def visit_CallNode(self, node, context):
        res = RTResult()
        args = []

        callee = res.register(self.visit(node.node_to_call, context))
        if res.should_return():
            return res

        for arg_node in node.arg_nodes:
            args.append(res.register(self.visit(arg_node, context)))
            if res.should_return():
                return res

        paren_tok = node.paren_tok
        if not isinstance(callee, BaseFunction):
            return res.failure(RTError(
                paren_tok.pos_start, paren_tok.pos_end,
                'Can only call functions and classes.',
                context
            ))

        arity = callee.arity()
        if len(args) != arity:
            return res.failure(RTError(
                paren_tok.pos_start, paren_tok.pos_end,
                f'Expected {arity} arguments but got {len(args)}.',
                context
            ))

        if context.depth >= self.max_call_depth:
            return res.failure(self.stack_overflow(paren_tok, context))

        try:
            return_value = res.register(callee.execute(self, args, context, node.pos_start))
        except RecursionError:
            # Deeply nested expressions can exhaust the host before the depth guard
            return res.failure(self.stack_overflow(paren_tok, context))
        if res.should_return():
            return res
        return res.success(return_value)

    def visit_DotGetNode(self, node, context):
        res = RTResult()
        noun = res.register(self.visit(node.noun, context))
        if res.should_return():
            return res

        result, error = noun.get_dot(node.verb.value)
        if error:
            return res.failure(error.set_pos(
                node.verb.pos_start, node.verb.pos_end).set_context(context))
        return res.success(result)

    def visit_DotSetNode(self, node, context):
        res = RTResult()
        noun = res.register(self.visit(node.noun, context))
        if res.should_return():
            return res

        if not isinstance(noun, Instance):
            return res.failure(RTError(
                node.verb.pos_start, node.verb.pos_end,
                'Only instances have fields.',
                context
            ))

        value = res.register(self.visit(node.value, context))
        if res.should_return():
            return res

        result, _ = noun.set_dot(node.verb.value, value)
        return res.success(result)

    def visit_ThisNode(self, node, context):
        return self.look_up_variable('this', node, context)

    def visit_SuperNode(self, node, context):
        res = RTResult()
        distance = self.locals[node]
        superclass = context.environment.get_at(distance, 'super')
        # 'this' is always bound one scope inside 'super'
        instance = context.environment.get_at(distance - 1, 'this')

        method = superclass.find_method(node.method_tok.value)
        if method is None:
            return res.failure(RTError(
                node.method_tok.pos_start, node.method_tok.pos_end,
                f"Undefined property '{node.method_tok.value}'.",
                context
            ))

        return res.success(method.bind(instance))

    def visit_FuncDefNode(self, node, context):
        function = Function(node, context.environment)

        if node.var_name_tok is not None:
            context.environment.define(node.name, function)

        return RTResult().success(function)

    ###################################

    def visit_ExpressionNode(self, node, context):
        res = RTResult()
        value = res.register(self.visit(node.expression, context))
        if res.should_return():
            return res
        return res.success(value)

    def visit_PrintNode(self, node, context):
        res = RTResult()
        value = res.register(self.visit(node.expression, context))
        if res.should_return():
            return res

        self.write(str(value))
        return res.success(Nil.nil)

    def visit_VarDeclNode(self, node, context):
        res = RTResult()
        value = Nil.nil

        if node.initializer is not None:
            value = res.register(self.visit(node.initializer, context))
            if res.should_return():
                return res

        context.environment.define(node.var_name_tok.value, value)
        return res.success(Nil.nil)

    def visit_BlockNode(self, node, context):
        block_context = context.nested(Environment(context.environment))
        return self.execute_statements(node.statements, block_context)

    def visit_IfNode(self, node, context):
        res = RTResult()
        condition = res.register(self.visit(node.condition, context))
        if res.should_return():
            return res

        if condition.is_true():
            return self.visit(node.then_branch, context)
        if node.else_branch is not None:
            return self.visit(node.else_branch, context)

        return res.success(Nil.nil)

    def visit_WhileNode(self, node, context):
        res = RTResult()

        while True:
            condition = res.register(self.visit(node.condition, context))
            if res.should_return():
                return res

            if not condition.is_true():
                break

            res.register(self.visit(node.body, context))
            if res.should_return():
                return res

        return res.success(Nil.nil)

    def visit_ReturnNode(self, node, context):
        res = RTResult()

        if node.node_to_return is not None:
            value = res.register(self.visit(node.node_to_return, context))
            if res.should_return():
                return res
        else:
            value = Nil.nil

        return res.success_return(value)

    def visit_ClassNode(self, node, context):
        res = RTResult()
        class_name = node.name_tok.value

        # Methods may name the class before the class object exists
        context.environment.define(class_name, Nil.nil)

        superclass = None
        if node.superclass is not None:
            superclass = res.register(self.visit(node.superclass, context))
            if res.should_return():
                return res

            if not isinstance(superclass, Class):
                return res.failure(RTError(
                    node.superclass.pos_start, node.superclass.pos_end,
                    'Superclass must be a class.',
                    context
                ))

        method_environment = context.environment
        if superclass is not None:
            method_environment = Environment(method_environment)
            method_environment.define('super', superclass)

        methods = {}
        for method in node.methods:
            methods[method.name] = Function(method, method_environment, method.name == 'init')

        klass = Class(class_name, superclass, methods)
        context.environment.assign(class_name, klass)
        return res.success(Nil.nil)
