#######################################
# IMPORTS
#######################################

import string
from enum import Enum, auto
from typing import Dict

from errors import IllegalCharError, UnterminatedStringError

#######################################
# CONSTANTS
#######################################

DIGITS = '0123456789'
LETTERS = string.ascii_letters
IDENTIFIER_START = LETTERS + '_'
VALID_IDENTIFIERS = LETTERS + DIGITS + '_'

#######################################
# POSITION
#######################################

class Position:
    __slots__ = ['idx', 'ln', 'col', 'fn', 'ftxt']

    def __init__(self, idx, ln, col, fn, ftxt):
        self.idx = idx
        self.ln = ln
        self.col = col
        self.fn = fn
        self.ftxt = ftxt

    def advance(self, current_char=None):
        self.idx += 1
        self.col += 1

        if current_char == '\n':
            self.ln += 1
            self.col = 0

        return self

    def copy(self):
        return Position(self.idx, self.ln, self.col, self.fn, self.ftxt)

    def __repr__(self):
        return f'{self.fn}:{self.ln + 1}:{self.col + 1}'

#######################################
# TOKENS
#######################################

class TokenType(Enum):
    # Single character tokens
    LPAREN = auto()
    RPAREN = auto()
    LCURLY = auto()
    RCURLY = auto()
    COMMA = auto()
    DOT = auto()
    MINUS = auto()
    PLUS = auto()
    SEMICOLON = auto()
    SLASH = auto()
    STAR = auto()

    # One or two character tokens
    BANG = auto()
    NE = auto()
    EQ = auto()
    EE = auto()
    GT = auto()
    GTE = auto()
    LT = auto()
    LTE = auto()

    # Literals
    IDENTIFIER = auto()
    STRING = auto()
    NUMBER = auto()

    KEYWORD = auto()
    EOF = auto()

KEYWORDS = [
    'and',
    'class',
    'else',
    'false',
    'for',
    'fun',
    'if',
    'nil',
    'or',
    'print',
    'return',
    'super',
    'this',
    'true',
    'var',
    'while',
]

class Token:
    __slots__ = ['type', 'value', 'pos_start', 'pos_end']

    def __init__(self, type_, value=None, pos_start=None, pos_end=None):
        self.type = type_
        self.value = value
        self.pos_start = None
        self.pos_end = None

        if pos_start:
            self.pos_start = pos_start.copy()
            self.pos_end = pos_start.copy()
            self.pos_end.advance()

        if pos_end:
            self.pos_end = pos_end.copy()

    @property
    def line(self):
        return self.pos_start.ln + 1

    def copy(self):
        return Token(self.type, self.value, self.pos_start.copy(), self.pos_end.copy())

    def matches(self, type_, value):
        return self.type == type_ and self.value == value

    def __repr__(self):
        if self.value is not None:
            return f'{self.type.name}:{self.value}'
        return f'{self.type.name}'

#######################################
# LEXER
#######################################

SINGLE_CHAR_TOKS: Dict[str, TokenType] = {
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LCURLY,
    "}": TokenType.RCURLY,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    "-": TokenType.MINUS,
    "+": TokenType.PLUS,
    ";": TokenType.SEMICOLON,
    "*": TokenType.STAR,
}

# char -> (token alone, token when followed by '=')
DOUBLE_CHAR_TOKS: Dict[str, tuple] = {
    "!": (TokenType.BANG, TokenType.NE),
    "=": (TokenType.EQ, TokenType.EE),
    "<": (TokenType.LT, TokenType.LTE),
    ">": (TokenType.GT, TokenType.GTE),
}

class Lexer:
    def __init__(self, fn, text):
        self.fn = fn
        self.text = text
        self.pos = Position(-1, 0, -1, fn, text)
        self.current_char = None
        self.advance()

    def advance(self):
        self.pos.advance(self.current_char)
        self.current_char = self.text[self.pos.idx] if self.pos.idx < len(
            self.text) else None

    def peek(self):
        idx = self.pos.idx + 1
        return self.text[idx] if idx < len(self.text) else None

    def make_tokens(self):
        tokens = []

        while self.current_char is not None:
            if self.current_char in SINGLE_CHAR_TOKS:
                tt = SINGLE_CHAR_TOKS[self.current_char]
                pos = self.pos.copy()
                self.advance()
                tokens.append(Token(tt, self.text[pos.idx], pos_start=pos))
            elif self.current_char in DOUBLE_CHAR_TOKS:
                tokens.append(self.make_double_char())
            elif self.current_char.isspace():
                self.advance()
            elif self.current_char == '/':
                if self.peek() == '/':
                    self.skip_comment()
                else:
                    pos = self.pos.copy()
                    self.advance()
                    tokens.append(Token(TokenType.SLASH, "/", pos_start=pos))
            elif self.current_char in DIGITS:
                tokens.append(self.make_number())
            elif self.current_char in IDENTIFIER_START:
                tokens.append(self.make_identifier())
            elif self.current_char == '"':
                token, error = self.make_string()
                if error:
                    return [], error
                tokens.append(token)
            else:
                pos_start = self.pos.copy()
                char = self.current_char
                self.advance()
                return [], IllegalCharError(pos_start, self.pos, "'" + char + "'")

        tokens.append(Token(TokenType.EOF, pos_start=self.pos))
        return tokens, None

    def make_double_char(self):
        single, double = DOUBLE_CHAR_TOKS[self.current_char]
        pos_start = self.pos.copy()
        self.advance()

        if self.current_char == '=':
            self.advance()
            return Token(double, self.text[pos_start.idx:self.pos.idx], pos_start, self.pos)

        return Token(single, self.text[pos_start.idx], pos_start, self.pos)

    def make_number(self):
        num_str = ''
        pos_start = self.pos.copy()

        while self.current_char is not None and self.current_char in DIGITS:
            num_str += self.current_char
            self.advance()

        # A trailing '.' without digits is left for the DOT token
        if self.current_char == '.' and self.peek() is not None and self.peek() in DIGITS:
            num_str += self.current_char
            self.advance()
            while self.current_char is not None and self.current_char in DIGITS:
                num_str += self.current_char
                self.advance()

        return Token(TokenType.NUMBER, float(num_str), pos_start, self.pos)

    def make_string(self):
        string_ = ''
        pos_start = self.pos.copy()
        self.advance()

        while self.current_char is not None and self.current_char != '"':
            string_ += self.current_char
            self.advance()

        if self.current_char is None:
            return None, UnterminatedStringError(pos_start, self.pos)

        self.advance()
        return Token(TokenType.STRING, string_, pos_start, self.pos), None

    def make_identifier(self):
        id_str = ''
        pos_start = self.pos.copy()

        while self.current_char is not None and self.current_char in VALID_IDENTIFIERS:
            id_str += self.current_char
            self.advance()

        tok_type = TokenType.KEYWORD if id_str in KEYWORDS else TokenType.IDENTIFIER
        return Token(tok_type, id_str, pos_start, self.pos)

    def skip_comment(self):
        while self.current_char is not None and self.current_char != '\n':
            self.advance()
