#######################################
# IMPORTS
#######################################

import logging

from errors import StaticErrorList
from interpreter import Interpreter
from lexer import Lexer
from parser import Parser
from resolver import Resolver

logger = logging.getLogger(__name__)

#######################################
# RUN
#######################################

def parse(fn, text):
    # Generate tokens
    lexer = Lexer(fn, text)
    tokens, error = lexer.make_tokens()
    if error:
        return None, error
    logger.debug('%s: %d tokens', fn, len(tokens))

    # Generate AST
    parser = Parser(tokens)
    ast = parser.parse()
    if ast.error:
        return None, ast.error
    logger.debug('%s: %d top-level statements', fn, len(ast.node))

    return ast.node, None


def resolve(statements):
    """Returns `(locals_, errors)`; `errors` lists every static error found."""
    locals_, errors = Resolver().resolve(statements)
    if errors:
        logger.debug('%d static errors', len(errors))
        return None, errors

    logger.debug('%d resolved references', len(locals_))
    return locals_, []


def compile_source(fn, text):
    """Lex, parse and resolve `text`, returning `(statements, locals_, error)`."""
    statements, error = parse(fn, text)
    if error:
        return None, None, error

    locals_, errors = resolve(statements)
    if errors:
        return None, None, StaticErrorList(errors)

    return statements, locals_, None


def run(fn, text, interpreter=None):
    """Run `text` to completion.

    Returns the interpreter the program ran in, so a later call can keep
    using its globals, and the error that stopped it: the syntax error,
    a `StaticErrorList` carrying every static error, or the runtime error.
    Nothing executes when a syntax or static error is found.
    """
    if interpreter is None:
        interpreter = Interpreter()

    statements, locals_, error = compile_source(fn, text)
    if error:
        return interpreter, error

    error = interpreter.interpret(statements, locals_)
    if error:
        logger.debug('%s: runtime error at line %d', fn, error.line)
    return interpreter, error
