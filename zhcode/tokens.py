"""
ZhCode tokens - token kinds and the Token record shared by lexer and parser
"""

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    # Literals
    NUMBER = auto()
    STRING = auto()
    TEMPLATE_STRING = auto()
    TRUE = auto()
    FALSE = auto()
    NULL = auto()
    UNDEFINED = auto()

    IDENTIFIER = auto()

    # Keywords
    FUNCTION = auto()
    RETURN = auto()
    IF = auto()
    ELSE = auto()
    ELSE_IF = auto()
    FOR = auto()
    WHILE = auto()
    IN = auto()
    LET = auto()
    CONST = auto()
    IMPORT = auto()
    EXPORT = auto()
    DEFAULT = auto()
    FROM = auto()
    COMPONENT = auto()
    ASYNC = auto()
    AWAIT = auto()
    TRY = auto()
    CATCH = auto()
    FINALLY = auto()
    THROW = auto()
    CLASS = auto()
    EXTENDS = auto()
    NEW = auto()
    THIS = auto()
    SUPER = auto()
    STATIC = auto()
    BREAK = auto()
    CONTINUE = auto()

    # Operators
    PLUS = auto()
    MINUS = auto()
    MULTIPLY = auto()
    DIVIDE = auto()
    MODULO = auto()
    POWER = auto()
    EQUALS = auto()
    STRICT_EQUALS = auto()
    NOT_EQUALS = auto()
    STRICT_NOT_EQUALS = auto()
    GREATER_THAN = auto()
    LESS_THAN = auto()
    GREATER_EQUAL = auto()
    LESS_EQUAL = auto()
    LOGICAL_AND = auto()
    LOGICAL_OR = auto()
    LOGICAL_NOT = auto()
    BITWISE_AND = auto()
    BITWISE_OR = auto()
    BITWISE_XOR = auto()
    BITWISE_NOT = auto()
    ASSIGN = auto()
    PLUS_ASSIGN = auto()
    MINUS_ASSIGN = auto()
    MULTIPLY_ASSIGN = auto()
    DIVIDE_ASSIGN = auto()
    MODULO_ASSIGN = auto()
    ARROW = auto()
    QUESTION = auto()
    COLON = auto()
    OPTIONAL_CHAIN = auto()
    NULLISH_COALESCE = auto()

    # Punctuation
    LPAREN = auto()
    RPAREN = auto()
    LBRACE = auto()
    RBRACE = auto()
    LBRACKET = auto()
    RBRACKET = auto()
    SEMICOLON = auto()
    COMMA = auto()
    DOT = auto()
    SPREAD = auto()

    # JSX
    JSX_SLASH = auto()
    JSX_SELF_CLOSING = auto()

    # Other
    EOF = auto()
    UNRECOGNIZED = auto()


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: str
    line: int
    col: int
    start: int
    end: int

    def __str__(self) -> str:
        return f'Token({self.type.name}, "{self.value}", {self.line}:{self.col})'
