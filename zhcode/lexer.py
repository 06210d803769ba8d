"""
ZhCode Lexer - Tokenizes ZhCode source code
Uses shared language definition from data/zh.json
"""

import logging
from typing import List

from .config import ZH
from .keywords import keyword_kind
from .tokens import Token, TokenType

logger = logging.getLogger(__name__)

QUOTES = ZH['quotes']
TEMPLATE_QUOTE = ZH['templateQuote']
ESCAPES = ZH['escapes']
PUNCTUATION = ZH['punctuation']
LITERALS = {word: TokenType[kind] for word, kind in ZH['literals'].items()}

THREE_CHAR = {op: TokenType[kind] for op, kind in ZH['operators']['three'].items()}
TWO_CHAR = {op: TokenType[kind] for op, kind in ZH['operators']['two'].items()}
SINGLE_CHAR = {op: TokenType[kind] for op, kind in ZH['operators']['single'].items()}

JSX_CLOSE_SLASH = ZH['jsx']['closeSlash']
JSX_SELF_CLOSE = ZH['jsx']['selfClose']


def is_digit(ch: str) -> bool:
    return ch != '' and '0' <= ch <= '9'


def is_hex_digit(ch: str) -> bool:
    return ch != '' and ch in '0123456789abcdefABCDEF'


def is_cjk(ch: str) -> bool:
    """CJK Unified Ideographs block, the script keywords and identifiers use."""
    return ch != '' and '\u4e00' <= ch <= '\u9fff'


def is_identifier_start(ch: str) -> bool:
    return (ch.isascii() and ch.isalpha()) or ch == '_' or is_cjk(ch)


def is_identifier_part(ch: str) -> bool:
    return is_identifier_start(ch) or is_digit(ch)


def normalize_punctuation(ch: str) -> str:
    return PUNCTUATION.get(ch, ch)


RADIX_DIGITS = {
    'x': is_hex_digit,
    'b': lambda ch: ch in ('0', '1'),
    'o': lambda ch: ch != '' and '0' <= ch <= '7',
}


class Lexer:
    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.col = 1
        self.tokens: List[Token] = []
        # Position where the token being scanned began
        self.start = 0
        self.start_line = 1
        self.start_col = 1

    def peek(self, offset: int = 0) -> str:
        pos = self.pos + offset
        return self.source[pos] if pos < len(self.source) else ''

    def advance(self, count: int = 1) -> str:
        result = self.source[self.pos:self.pos + count]
        for ch in result:
            if ch == '\n':
                self.line += 1
                self.col = 1
            else:
                self.col += 1
        self.pos += len(result)
        return result

    def match(self, pattern: str) -> bool:
        return self.source.startswith(pattern, self.pos)

    def mark(self):
        self.start = self.pos
        self.start_line = self.line
        self.start_col = self.col

    def add_token(self, type: TokenType, value: str):
        self.tokens.append(Token(type, value, self.start_line, self.start_col, self.start, self.pos))

    def tokenize(self) -> List[Token]:
        while self.pos < len(self.source):
            self.scan_token()
        self.mark()
        self.add_token(TokenType.EOF, '')
        logger.debug("Tokenized %d characters into %d tokens", len(self.source), len(self.tokens))
        return self.tokens

    def scan_token(self):
        ch = self.peek()

        if ch.isspace():
            self.advance()
            return

        # Comments
        if self.match('//'):
            while self.peek() and self.peek() != '\n':
                self.advance()
            return
        if self.match('/*'):
            self.advance(2)
            while self.peek() and not self.match('*/'):
                self.advance()
            self.advance(2)
            return

        self.mark()

        if ch in QUOTES:
            self.scan_string()
            return
        if is_digit(ch):
            self.scan_number()
            return
        if is_identifier_start(ch):
            self.scan_identifier()
            return
        if self.scan_operator():
            return

        # Unknown - keep it so the parser can point at it
        logger.debug("Unrecognized character %r at line %d, column %d", ch, self.line, self.col)
        self.add_token(TokenType.UNRECOGNIZED, self.advance())

    def scan_string(self):
        opening = self.advance()
        closing = QUOTES[opening]
        value = ''
        while self.peek() and self.peek() != closing:
            if self.peek() == '\\':
                self.advance()
                escaped = self.advance()
                value += ESCAPES.get(escaped, escaped)
            else:
                value += self.advance()
        # An unterminated string simply ends at end of input
        if self.peek() == closing:
            self.advance()
        kind = TokenType.TEMPLATE_STRING if opening == TEMPLATE_QUOTE else TokenType.STRING
        self.add_token(kind, value)

    def scan_number(self):
        text = self.advance()

        # Hex, binary, octal
        if text == '0' and self.peek().lower() in RADIX_DIGITS:
            digit_ok = RADIX_DIGITS[self.peek().lower()]
            text += self.advance()
            while self.peek() and digit_ok(self.peek()):
                text += self.advance()
            self.add_token(TokenType.NUMBER, text)
            return

        while is_digit(self.peek()):
            text += self.advance()

        # Fraction only when a digit follows the dot, so 1.toString stays a member access
        if self.peek() == '.' and is_digit(self.peek(1)):
            text += self.advance()
            while is_digit(self.peek()):
                text += self.advance()

        if self.peek() in ('e', 'E'):
            text += self.advance()
            if self.peek() in ('+', '-'):
                text += self.advance()
            while is_digit(self.peek()):
                text += self.advance()

        self.add_token(TokenType.NUMBER, text)

    def scan_identifier(self):
        text = ''
        while is_identifier_part(self.peek()):
            text += self.advance()
        kind = keyword_kind(text)
        if kind is None:
            kind = LITERALS.get(text, TokenType.IDENTIFIER)
        self.add_token(kind, text)

    def scan_operator(self) -> bool:
        window = ''.join(normalize_punctuation(self.peek(i)) for i in range(3))

        three = window[:3]
        if three in THREE_CHAR:
            self.advance(3)
            self.add_token(THREE_CHAR[three], three)
            return True

        two = window[:2]
        # '</>' is left to the single-character rules: '<' then '/>'
        if two == JSX_CLOSE_SLASH and window[2:3] != '>':
            self.advance(2)
            self.add_token(TokenType.JSX_SLASH, two)
            return True
        if two == JSX_SELF_CLOSE:
            self.advance(2)
            self.add_token(TokenType.JSX_SELF_CLOSING, two)
            return True
        if two in TWO_CHAR:
            self.advance(2)
            self.add_token(TWO_CHAR[two], two)
            return True

        one = window[:1]
        if one in SINGLE_CHAR:
            self.advance()
            self.add_token(SINGLE_CHAR[one], one)
            return True

        return False


def tokenize(source: str) -> List[Token]:
    """Tokenize a source string. Never raises."""
    return Lexer(source).tokenize()
