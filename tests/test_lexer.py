from errors import IllegalCharError, UnterminatedStringError
from lexer import Lexer, TokenType


def lex(text):
    return Lexer('<test>', text).make_tokens()


def types(tokens):
    return [tok.type for tok in tokens]


def test_var_declaration():
    tokens, error = lex('var x = 1.5;')
    assert error is None
    assert types(tokens) == [
        TokenType.KEYWORD, TokenType.IDENTIFIER, TokenType.EQ,
        TokenType.NUMBER, TokenType.SEMICOLON, TokenType.EOF,
    ]
    assert tokens[0].value == 'var'
    assert tokens[1].value == 'x'
    assert tokens[3].value == 1.5


def test_one_and_two_character_operators():
    tokens, error = lex('!= == <= >= < > ! =')
    assert error is None
    assert types(tokens)[:-1] == [
        TokenType.NE, TokenType.EE, TokenType.LTE, TokenType.GTE,
        TokenType.LT, TokenType.GT, TokenType.BANG, TokenType.EQ,
    ]
    assert [tok.value for tok in tokens[:-1]] == ['!=', '==', '<=', '>=', '<', '>', '!', '=']


def test_comments_are_skipped_and_lines_counted():
    tokens, error = lex('// a comment\nprint 1 / 2;')
    assert error is None
    assert tokens[0].matches(TokenType.KEYWORD, 'print')
    assert tokens[0].line == 2
    assert tokens[2].type == TokenType.SLASH


def test_number_with_trailing_dot_leaves_dot_token():
    tokens, error = lex('123.')
    assert error is None
    assert types(tokens) == [TokenType.NUMBER, TokenType.DOT, TokenType.EOF]
    assert tokens[0].value == 123.0


def test_strings_can_span_lines():
    tokens, error = lex('"one\ntwo" x')
    assert error is None
    assert tokens[0].type == TokenType.STRING
    assert tokens[0].value == 'one\ntwo'
    assert tokens[1].line == 2


def test_keywords_and_identifiers():
    tokens, error = lex('class classy _under1 nil')
    assert error is None
    assert tokens[0].matches(TokenType.KEYWORD, 'class')
    assert tokens[1].matches(TokenType.IDENTIFIER, 'classy')
    assert tokens[2].matches(TokenType.IDENTIFIER, '_under1')
    assert tokens[3].matches(TokenType.KEYWORD, 'nil')


def test_unterminated_string():
    tokens, error = lex('print "oops;')
    assert tokens == []
    assert isinstance(error, UnterminatedStringError)
    assert error.details == 'Unterminated string.'


def test_illegal_character():
    tokens, error = lex('var a = 1;\n@')
    assert tokens == []
    assert isinstance(error, IllegalCharError)
    assert error.details == "'@'"
    assert error.line == 2
    assert 'Illegal Character' in error.as_string()
