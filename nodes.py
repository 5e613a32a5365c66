#######################################
# IMPORTS
#######################################

from dataclasses import dataclass
from typing import Any, List, Optional

from lexer import Position, Token

#######################################
# EXPRESSION NODES
#######################################

# Expression nodes key the resolver's side table, so they hash by identity.

class NumberNode:
    __slots__ = ['tok', 'pos_start', 'pos_end']
    def __init__(self, tok):
        self.tok = tok
        self.pos_start = self.tok.pos_start
        self.pos_end = self.tok.pos_end
    def __repr__(self):
        return f'{self.tok.value}'
    def rpn(self):
        return f'{self.tok.value}'

class StringNode:
    __slots__ = ['tok', 'pos_start', 'pos_end']
    def __init__(self, tok):
        self.tok = tok
        self.pos_start = self.tok.pos_start
        self.pos_end = self.tok.pos_end
    def __repr__(self):
        return f'"{self.tok.value}"'
    def rpn(self):
        return self.tok.value

class BooleanNode:
    __slots__ = ['tok', 'value', 'pos_start', 'pos_end']
    def __init__(self, tok):
        self.tok = tok
        self.value = tok.value == 'true'
        self.pos_start = self.tok.pos_start
        self.pos_end = self.tok.pos_end
    def __repr__(self):
        return f'{self.tok.value}'
    def rpn(self):
        return self.tok.value

class NilNode:
    __slots__ = ['tok', 'pos_start', 'pos_end']
    def __init__(self, tok):
        self.tok = tok
        self.pos_start = self.tok.pos_start
        self.pos_end = self.tok.pos_end
    def __repr__(self):
        return 'nil'
    def rpn(self):
        return 'nil'

class GroupingNode:
    __slots__ = ['expression', 'pos_start', 'pos_end']
    def __init__(self, expression, pos_start, pos_end):
        self.expression = expression
        self.pos_start = pos_start
        self.pos_end = pos_end
    def __repr__(self):
        return f'(group {self.expression!r})'
    def rpn(self):
        return self.expression.rpn()

class UnaryOpNode:
    __slots__ = ['op_tok', 'node', 'pos_start', 'pos_end']
    def __init__(self, op_tok, node):
        self.op_tok = op_tok
        self.node = node
        self.pos_start = self.op_tok.pos_start
        self.pos_end = node.pos_end
    def __repr__(self):
        return f'({self.op_tok.value} {self.node!r})'
    def rpn(self):
        return f'{self.node.rpn()} {self.op_tok.value}'

class BinOpNode:
    __slots__ = ['left_node', 'op_tok', 'right_node', 'pos_start', 'pos_end']
    def __init__(self, left_node, op_tok, right_node):
        self.left_node = left_node
        self.op_tok = op_tok
        self.right_node = right_node
        self.pos_start = self.left_node.pos_start
        self.pos_end = self.right_node.pos_end
    def __repr__(self):
        return f'({self.op_tok.value} {self.left_node!r} {self.right_node!r})'
    def rpn(self):
        # Both operands before the operator
        return f'{self.left_node.rpn()} {self.right_node.rpn()} {self.op_tok.value}'

class LogicalNode:
    __slots__ = ['left_node', 'op_tok', 'right_node', 'pos_start', 'pos_end']
    def __init__(self, left_node, op_tok, right_node):
        self.left_node = left_node
        self.op_tok = op_tok
        self.right_node = right_node
        self.pos_start = self.left_node.pos_start
        self.pos_end = self.right_node.pos_end
    def __repr__(self):
        return f'({self.op_tok.value} {self.left_node!r} {self.right_node!r})'
    def rpn(self):
        return f'{self.left_node.rpn()} {self.right_node.rpn()} {self.op_tok.value}'

class VarAccessNode:
    __slots__ = ['var_name_tok', 'pos_start', 'pos_end']
    def __init__(self, var_name_tok):
        self.var_name_tok = var_name_tok
        self.pos_start = self.var_name_tok.pos_start
        self.pos_end = self.var_name_tok.pos_end
    def __repr__(self):
        return f'{self.var_name_tok.value}'
    def rpn(self):
        return self.var_name_tok.value

class VarAssignNode:
    __slots__ = ['var_name_tok', 'value_node', 'pos_start', 'pos_end']
    def __init__(self, var_name_tok, value_node):
        self.var_name_tok = var_name_tok
        self.value_node = value_node
        self.pos_start = self.var_name_tok.pos_start
        self.pos_end = self.value_node.pos_end
    def __repr__(self):
        return f'(= {self.var_name_tok.value} {self.value_node!r})'

class CallNode:
    __slots__ = ['node_to_call', 'paren_tok', 'arg_nodes', 'pos_start', 'pos_end']
    def __init__(self, node_to_call, paren_tok, arg_nodes):
        self.node_to_call = node_to_call
        self.paren_tok = paren_tok
        self.arg_nodes = arg_nodes
        self.pos_start = self.node_to_call.pos_start
        self.pos_end = self.paren_tok.pos_end
    def __repr__(self):
        args = ''.join(f' {arg!r}' for arg in self.arg_nodes)
        return f'(call {self.node_to_call!r}{args})'

class DotGetNode:
    __slots__ = ['noun', 'verb', 'pos_start', 'pos_end']
    def __init__(self, noun, verb):
        self.noun = noun
        self.verb = verb
        self.pos_start = self.noun.pos_start
        self.pos_end = self.verb.pos_end
    def __repr__(self):
        return f'(. {self.noun!r} {self.verb.value})'

class DotSetNode:
    __slots__ = ['noun', 'verb', 'value', 'pos_start', 'pos_end']
    def __init__(self, noun, verb, value):
        self.noun = noun
        self.verb = verb
        self.value = value
        self.pos_start = self.noun.pos_start
        self.pos_end = self.value.pos_end
    def __repr__(self):
        return f'(= (. {self.noun!r} {self.verb.value}) {self.value!r})'

class ThisNode:
    __slots__ = ['keyword_tok', 'pos_start', 'pos_end']
    def __init__(self, keyword_tok):
        self.keyword_tok = keyword_tok
        self.pos_start = self.keyword_tok.pos_start
        self.pos_end = self.keyword_tok.pos_end
    def __repr__(self):
        return 'this'

class SuperNode:
    __slots__ = ['keyword_tok', 'method_tok', 'pos_start', 'pos_end']
    def __init__(self, keyword_tok, method_tok):
        self.keyword_tok = keyword_tok
        self.method_tok = method_tok
        self.pos_start = self.keyword_tok.pos_start
        self.pos_end = self.method_tok.pos_end
    def __repr__(self):
        return f'(super {self.method_tok.value})'

class FuncDefNode:
    """Named function declaration, method, or anonymous function expression
    when `var_name_tok` is None."""
    __slots__ = ['var_name_tok', 'param_toks', 'body', 'pos_start', 'pos_end']
    def __init__(self, var_name_tok, param_toks, body, pos_start, pos_end):
        self.var_name_tok = var_name_tok
        self.param_toks = param_toks
        self.body = body
        self.pos_start = pos_start
        self.pos_end = pos_end
    @property
    def name(self):
        return self.var_name_tok.value if self.var_name_tok else None
    def __repr__(self):
        params = ' '.join(tok.value for tok in self.param_toks)
        body = ''.join(f' {stmt!r}' for stmt in self.body)
        name = f' {self.name}' if self.var_name_tok else ''
        return f'(fun{name} ({params}){body})'

#######################################
# STATEMENT NODES
#######################################

@dataclass(eq=False)
class ExpressionNode:
    expression: Any
    pos_start: Position
    pos_end: Position
    def __repr__(self):
        return f'(; {self.expression!r})'

@dataclass(eq=False)
class PrintNode:
    expression: Any
    pos_start: Position
    pos_end: Position
    def __repr__(self):
        return f'(print {self.expression!r})'

@dataclass(eq=False)
class VarDeclNode:
    var_name_tok: Token
    initializer: Optional[Any]
    pos_start: Position
    pos_end: Position
    def __repr__(self):
        if self.initializer is None:
            return f'(var {self.var_name_tok.value})'
        return f'(var {self.var_name_tok.value} {self.initializer!r})'

@dataclass(eq=False)
class BlockNode:
    statements: List[Any]
    pos_start: Position
    pos_end: Position
    def __repr__(self):
        return '(block' + ''.join(f' {stmt!r}' for stmt in self.statements) + ')'

@dataclass(eq=False)
class IfNode:
    condition: Any
    then_branch: Any
    else_branch: Optional[Any]
    pos_start: Position
    pos_end: Position
    def __repr__(self):
        if self.else_branch is None:
            return f'(if {self.condition!r} {self.then_branch!r})'
        return f'(if {self.condition!r} {self.then_branch!r} {self.else_branch!r})'

@dataclass(eq=False)
class WhileNode:
    condition: Any
    body: Any
    pos_start: Position
    pos_end: Position
    def __repr__(self):
        return f'(while {self.condition!r} {self.body!r})'

@dataclass(eq=False)
class ReturnNode:
    keyword_tok: Token
    node_to_return: Optional[Any]
    pos_start: Position
    pos_end: Position
    def __repr__(self):
        if self.node_to_return is None:
            return '(return)'
        return f'(return {self.node_to_return!r})'

@dataclass(eq=False)
class ClassNode:
    name_tok: Token
    superclass: Optional[VarAccessNode]
    methods: List[FuncDefNode]
    pos_start: Position
    pos_end: Position
    def __repr__(self):
        superclass = f' < {self.superclass!r}' if self.superclass else ''
        methods = ''.join(f' {method!r}' for method in self.methods)
        return f'(class {self.name_tok.value}{superclass}{methods})'
