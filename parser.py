#######################################
# IMPORTS
#######################################

from typing import Optional

from errors import InvalidSyntaxError
from lexer import Token, TokenType
from nodes import *

#######################################
# CONSTANTS
#######################################

MAX_ARGS = 255

#######################################
# PARSE RESULT
#######################################

class ParseResult:
    __slots__ = ['error', 'node', 'last_registered_advance_count', 'advance_count']

    def __init__(self):
        self.error = None
        self.node = None
        self.last_registered_advance_count = 0
        self.advance_count = 0

    def register_advancement(self):
        self.last_registered_advance_count = 1
        self.advance_count += 1

    def register(self, res):
        self.last_registered_advance_count = res.advance_count
        self.advance_count += res.advance_count
        if res.error:
            self.error = res.error
        return res.node

    def success(self, node):
        self.node = node
        return self

    def failure(self, error):
        if not self.error or self.last_registered_advance_count == 0:
            self.error = error
        return self

#######################################
# PARSER
#######################################

class Parser:
    def __init__(self, tokens):
        self.tokens = tokens
        self.tok_idx = -1
        self.current_tok = None
        dummy = ParseResult()
        self.advance(dummy)

    def advance(self, res: ParseResult) -> Optional[Token]:
        self.tok_idx += 1
        self.update_current_tok()
        res.register_advancement()
        return self.current_tok

    def update_current_tok(self):
        if self.tok_idx >= 0 and self.tok_idx < len(self.tokens):
            self.current_tok = self.tokens[self.tok_idx]

    def peek_tok(self):
        idx = self.tok_idx + 1
        if idx < len(self.tokens):
            return self.tokens[idx]
        return self.tokens[-1]

    def previous_tok(self):
        return self.tokens[max(self.tok_idx - 1, 0)]

    def consume(self, res, type_, details):
        tok = self.current_tok
        if tok.type != type_:
            res.failure(InvalidSyntaxError(tok.pos_start, tok.pos_end, details))
            return None
        self.advance(res)
        return tok

    def keyword(self, value):
        return self.current_tok.matches(TokenType.KEYWORD, value)

    def parse(self):
        res = ParseResult()
        statements = []

        while self.current_tok.type != TokenType.EOF:
            statement = res.register(self.declaration())
            if res.error:
                return res
            statements.append(statement)

        return res.success(statements)

    ###################################

    def declaration(self):
        if self.keyword('class'):
            return self.class_decl()
        if self.keyword('fun') and self.peek_tok().type == TokenType.IDENTIFIER:
            pos_start = self.current_tok.pos_start.copy()
            self.advance(ParseResult())
            return self.func_def('function', pos_start)
        if self.keyword('var'):
            return self.var_decl()
        return self.statement()

    def class_decl(self):
        res = ParseResult()
        pos_start = self.current_tok.pos_start.copy()
        self.advance(res)

        name_tok = self.consume(res, TokenType.IDENTIFIER, "Expected class name.")
        if res.error:
            return res

        superclass = None
        if self.current_tok.type == TokenType.LT:
            self.advance(res)
            superclass_tok = self.consume(res, TokenType.IDENTIFIER, "Expected superclass name.")
            if res.error:
                return res
            superclass = VarAccessNode(superclass_tok)

        self.consume(res, TokenType.LCURLY, "Expected '{' before class body.")
        if res.error:
            return res

        methods = []
        while self.current_tok.type not in (TokenType.RCURLY, TokenType.EOF):
            method = res.register(self.func_def('method', self.current_tok.pos_start.copy()))
            if res.error:
                return res
            methods.append(method)

        self.consume(res, TokenType.RCURLY, "Expected '}' after class body.")
        if res.error:
            return res

        return res.success(ClassNode(name_tok, superclass, methods, pos_start, self.previous_tok().pos_end))

    def func_def(self, kind, pos_start, anonymous=False):
        res = ParseResult()

        var_name_tok = None
        if not anonymous:
            var_name_tok = self.consume(res, TokenType.IDENTIFIER, f"Expected {kind} name.")
            if res.error:
                return res

        self.consume(res, TokenType.LPAREN, f"Expected '(' after {kind} name.")
        if res.error:
            return res

        param_toks = []
        if self.current_tok.type != TokenType.RPAREN:
            while True:
                if len(param_toks) >= MAX_ARGS:
                    return res.failure(InvalidSyntaxError(
                        self.current_tok.pos_start, self.current_tok.pos_end,
                        f"Can't have more than {MAX_ARGS} parameters."
                    ))

                param_tok = self.consume(res, TokenType.IDENTIFIER, "Expected parameter name.")
                if res.error:
                    return res
                param_toks.append(param_tok)

                if self.current_tok.type != TokenType.COMMA:
                    break
                self.advance(res)

        self.consume(res, TokenType.RPAREN, "Expected ')' after parameters.")
        if res.error:
            return res

        self.consume(res, TokenType.LCURLY, f"Expected '{{' before {kind} body.")
        if res.error:
            return res

        body = res.register(self.block())
        if res.error:
            return res

        return res.success(FuncDefNode(var_name_tok, param_toks, body, pos_start, self.previous_tok().pos_end))

    def var_decl(self):
        res = ParseResult()
        pos_start = self.current_tok.pos_start.copy()
        self.advance(res)

        var_name_tok = self.consume(res, TokenType.IDENTIFIER, "Expected variable name.")
        if res.error:
            return res

        initializer = None
        if self.current_tok.type == TokenType.EQ:
            self.advance(res)
            initializer = res.register(self.expression())
            if res.error:
                return res

        self.consume(res, TokenType.SEMICOLON, "Expected ';' after variable declaration.")
        if res.error:
            return res

        return res.success(VarDeclNode(var_name_tok, initializer, pos_start, self.previous_tok().pos_end))

    ###################################

    def statement(self):
        if self.keyword('for'):
            return self.for_statement()
        if self.keyword('if'):
            return self.if_statement()
        if self.keyword('print'):
            return self.print_statement()
        if self.keyword('return'):
            return self.return_statement()
        if self.keyword('while'):
            return self.while_statement()
        if self.current_tok.type == TokenType.LCURLY:
            return self.block_statement()
        return self.expression_statement()

    def block_statement(self):
        res = ParseResult()
        pos_start = self.current_tok.pos_start.copy()
        self.advance(res)

        statements = res.register(self.block())
        if res.error:
            return res

        return res.success(BlockNode(statements, pos_start, self.previous_tok().pos_end))

    def block(self):
        # Opening '{' is consumed by the caller
        res = ParseResult()
        statements = []

        while self.current_tok.type not in (TokenType.RCURLY, TokenType.EOF):
            statement = res.register(self.declaration())
            if res.error:
                return res
            statements.append(statement)

        self.consume(res, TokenType.RCURLY, "Expected '}' after block.")
        if res.error:
            return res

        return res.success(statements)

    def for_statement(self):
        res = ParseResult()
        for_tok = self.current_tok
        pos_start = for_tok.pos_start.copy()
        self.advance(res)

        self.consume(res, TokenType.LPAREN, "Expected '(' after 'for'.")
        if res.error:
            return res

        if self.current_tok.type == TokenType.SEMICOLON:
            self.advance(res)
            initializer = None
        elif self.keyword('var'):
            initializer = res.register(self.var_decl())
        else:
            initializer = res.register(self.expression_statement())
        if res.error:
            return res

        condition = None
        if self.current_tok.type != TokenType.SEMICOLON:
            condition = res.register(self.expression())
            if res.error:
                return res
        self.consume(res, TokenType.SEMICOLON, "Expected ';' after loop condition.")
        if res.error:
            return res

        increment = None
        if self.current_tok.type != TokenType.RPAREN:
            increment = res.register(self.expression())
            if res.error:
                return res
        self.consume(res, TokenType.RPAREN, "Expected ')' after for clauses.")
        if res.error:
            return res

        body = res.register(self.statement())
        if res.error:
            return res

        # Desugar into a block holding the initializer and a while loop
        if increment is not None:
            body = BlockNode([
                body,
                ExpressionNode(increment, increment.pos_start, increment.pos_end),
            ], body.pos_start, body.pos_end)

        if condition is None:
            condition = BooleanNode(Token(TokenType.KEYWORD, 'true', for_tok.pos_start, for_tok.pos_end))
        body = WhileNode(condition, body, pos_start, body.pos_end)

        if initializer is not None:
            body = BlockNode([initializer, body], pos_start, body.pos_end)

        return res.success(body)

    def if_statement(self):
        res = ParseResult()
        pos_start = self.current_tok.pos_start.copy()
        self.advance(res)

        self.consume(res, TokenType.LPAREN, "Expected '(' after 'if'.")
        if res.error:
            return res
        condition = res.register(self.expression())
        if res.error:
            return res
        self.consume(res, TokenType.RPAREN, "Expected ')' after if condition.")
        if res.error:
            return res

        then_branch = res.register(self.statement())
        if res.error:
            return res

        else_branch = None
        if self.keyword('else'):
            self.advance(res)
            else_branch = res.register(self.statement())
            if res.error:
                return res

        pos_end = (else_branch or then_branch).pos_end
        return res.success(IfNode(condition, then_branch, else_branch, pos_start, pos_end))

    def print_statement(self):
        res = ParseResult()
        pos_start = self.current_tok.pos_start.copy()
        self.advance(res)

        value = res.register(self.expression())
        if res.error:
            return res

        self.consume(res, TokenType.SEMICOLON, "Expected ';' after value.")
        if res.error:
            return res

        return res.success(PrintNode(value, pos_start, self.previous_tok().pos_end))

    def return_statement(self):
        res = ParseResult()
        keyword_tok = self.current_tok
        self.advance(res)

        value = None
        if self.current_tok.type != TokenType.SEMICOLON:
            value = res.register(self.expression())
            if res.error:
                return res

        self.consume(res, TokenType.SEMICOLON, "Expected ';' after return value.")
        if res.error:
            return res

        return res.success(ReturnNode(keyword_tok, value, keyword_tok.pos_start, self.previous_tok().pos_end))

    def while_statement(self):
        res = ParseResult()
        pos_start = self.current_tok.pos_start.copy()
        self.advance(res)

        self.consume(res, TokenType.LPAREN, "Expected '(' after 'while'.")
        if res.error:
            return res
        condition = res.register(self.expression())
        if res.error:
            return res
        self.consume(res, TokenType.RPAREN, "Expected ')' after condition.")
        if res.error:
            return res

        body = res.register(self.statement())
        if res.error:
            return res

        return res.success(WhileNode(condition, body, pos_start, body.pos_end))

    def expression_statement(self):
        res = ParseResult()
        expr = res.register(self.expression())
        if res.error:
            return res

        self.consume(res, TokenType.SEMICOLON, "Expected ';' after expression.")
        if res.error:
            return res

        return res.success(ExpressionNode(expr, expr.pos_start, self.previous_tok().pos_end))

    ###################################

    def expression(self):
        return self.assignment()

    def assignment(self):
        res = ParseResult()
        expr = res.register(self.or_expr())
        if res.error:
            return res

        if self.current_tok.type == TokenType.EQ:
            equals_tok = self.current_tok
            self.advance(res)

            value = res.register(self.assignment())
            if res.error:
                return res

            if isinstance(expr, VarAccessNode):
                return res.success(VarAssignNode(expr.var_name_tok, value))
            if isinstance(expr, DotGetNode):
                return res.success(DotSetNode(expr.noun, expr.verb, value))

            return res.failure(InvalidSyntaxError(
                equals_tok.pos_start, equals_tok.pos_end,
                "Invalid assignment target."
            ))

        return res.success(expr)

    def or_expr(self):
        return self.bin_op(self.and_expr, ((TokenType.KEYWORD, 'or'), ), LogicalNode)

    def and_expr(self):
        return self.bin_op(self.equality, ((TokenType.KEYWORD, 'and'), ), LogicalNode)

    def equality(self):
        return self.bin_op(self.comparison, (TokenType.NE, TokenType.EE))

    def comparison(self):
        return self.bin_op(self.term, (TokenType.GT, TokenType.GTE, TokenType.LT, TokenType.LTE))

    def term(self):
        return self.bin_op(self.factor, (TokenType.MINUS, TokenType.PLUS))

    def factor(self):
        return self.bin_op(self.unary, (TokenType.SLASH, TokenType.STAR))

    def unary(self):
        res = ParseResult()
        tok = self.current_tok

        if tok.type in (TokenType.BANG, TokenType.MINUS):
            self.advance(res)
            operand = res.register(self.unary())
            if res.error:
                return res
            return res.success(UnaryOpNode(tok, operand))

        return self.call()

    def call(self):
        res = ParseResult()
        node = res.register(self.primary())
        if res.error:
            return res

        while True:
            if self.current_tok.type == TokenType.LPAREN:
                self.advance(res)
                node = res.register(self.finish_call(node))
                if res.error:
                    return res
            elif self.current_tok.type == TokenType.DOT:
                self.advance(res)
                verb = self.consume(res, TokenType.IDENTIFIER, "Expected property name after '.'.")
                if res.error:
                    return res
                node = DotGetNode(node, verb)
            else:
                break

        return res.success(node)

    def finish_call(self, node_to_call):
        res = ParseResult()
        arg_nodes = []

        if self.current_tok.type != TokenType.RPAREN:
            while True:
                if len(arg_nodes) >= MAX_ARGS:
                    return res.failure(InvalidSyntaxError(
                        self.current_tok.pos_start, self.current_tok.pos_end,
                        f"Can't have more than {MAX_ARGS} arguments."
                    ))

                arg_nodes.append(res.register(self.expression()))
                if res.error:
                    return res

                if self.current_tok.type != TokenType.COMMA:
                    break
                self.advance(res)

        paren_tok = self.consume(res, TokenType.RPAREN, "Expected ')' after arguments.")
        if res.error:
            return res

        return res.success(CallNode(node_to_call, paren_tok, arg_nodes))

    def primary(self):
        res = ParseResult()
        tok = self.current_tok

        if tok.matches(TokenType.KEYWORD, 'true') or tok.matches(TokenType.KEYWORD, 'false'):
            self.advance(res)
            return res.success(BooleanNode(tok))

        elif tok.matches(TokenType.KEYWORD, 'nil'):
            self.advance(res)
            return res.success(NilNode(tok))

        elif tok.matches(TokenType.KEYWORD, 'this'):
            self.advance(res)
            return res.success(ThisNode(tok))

        elif tok.matches(TokenType.KEYWORD, 'super'):
            self.advance(res)
            self.consume(res, TokenType.DOT, "Expected '.' after 'super'.")
            if res.error:
                return res
            method_tok = self.consume(res, TokenType.IDENTIFIER, "Expected superclass method name.")
            if res.error:
                return res
            return res.success(SuperNode(tok, method_tok))

        elif tok.matches(TokenType.KEYWORD, 'fun'):
            self.advance(res)
            func_def = res.register(self.func_def('function', tok.pos_start.copy(), anonymous=True))
            if res.error:
                return res
            return res.success(func_def)

        elif tok.type == TokenType.NUMBER:
            self.advance(res)
            return res.success(NumberNode(tok))

        elif tok.type == TokenType.STRING:
            self.advance(res)
            return res.success(StringNode(tok))

        elif tok.type == TokenType.IDENTIFIER:
            self.advance(res)
            return res.success(VarAccessNode(tok))

        elif tok.type == TokenType.LPAREN:
            self.advance(res)
            expr = res.register(self.expression())
            if res.error:
                return res
            self.consume(res, TokenType.RPAREN, "Expected ')' after expression.")
            if res.error:
                return res
            return res.success(GroupingNode(expr, tok.pos_start, self.previous_tok().pos_end))

        return res.failure(InvalidSyntaxError(
            tok.pos_start, tok.pos_end,
            "Expected expression."
        ))

    ###################################

    def bin_op(self, func, ops, node_class=BinOpNode):
        res = ParseResult()
        left = res.register(func())
        if res.error:
            return res

        while self.current_tok.type in ops or (self.current_tok.type, self.current_tok.value) in ops:
            op_tok = self.current_tok
            self.advance(res)
            right = res.register(func())
            if res.error:
                return res
            left = node_class(left, op_tok, right)

        return res.success(left)
