"""
ZhCode Parser - Parses tokens into AST
Recursive descent, one method per precedence level, first error aborts
"""

import logging
from typing import List, Optional, Union

from .errors import ParseError
from .tokens import Token, TokenType
from .ast import (
    ASTNode, Program, Statement, Expression, Identifier, Literal,
    VariableDeclaration, VariableDeclarator, ArrayPattern, FunctionDeclaration,
    BlockStatement, IfStatement, WhileStatement, ForStatement, ReturnStatement,
    BreakStatement, ContinueStatement, ImportDeclaration, ImportSpecifier,
    ExportDeclaration, ExpressionStatement, BinaryExpression, UnaryExpression,
    AssignmentExpression, ConditionalExpression, CallExpression,
    MemberExpression, ArrayExpression, ObjectExpression, Property,
    JSXElement, JSXFragment, JSXIdentifier, JSXMemberExpression, JSXAttribute,
    JSXText, JSXExpressionContainer, JSXName, JSXChild,
)

logger = logging.getLogger(__name__)

ASSIGNMENT_OPERATORS = (
    TokenType.ASSIGN, TokenType.PLUS_ASSIGN, TokenType.MINUS_ASSIGN,
    TokenType.MULTIPLY_ASSIGN, TokenType.DIVIDE_ASSIGN, TokenType.MODULO_ASSIGN,
)
EQUALITY_OPERATORS = (
    TokenType.EQUALS, TokenType.NOT_EQUALS, TokenType.STRICT_EQUALS, TokenType.STRICT_NOT_EQUALS,
)
RELATIONAL_OPERATORS = (
    TokenType.GREATER_THAN, TokenType.LESS_THAN, TokenType.GREATER_EQUAL, TokenType.LESS_EQUAL,
)
ADDITIVE_OPERATORS = (TokenType.PLUS, TokenType.MINUS)
MULTIPLICATIVE_OPERATORS = (TokenType.MULTIPLY, TokenType.DIVIDE, TokenType.MODULO)
UNARY_OPERATORS = (TokenType.MINUS, TokenType.PLUS, TokenType.LOGICAL_NOT)

RADIX_PREFIXES = ('0x', '0b', '0o')


class Parser:
    def __init__(self, tokens: List[Token]):
        self.tokens = list(tokens)
        if not self.tokens or self.tokens[-1].type != TokenType.EOF:
            last = self.tokens[-1] if self.tokens else None
            end = last.end if last else 0
            line = last.line if last else 1
            col = last.col + (last.end - last.start) if last else 1
            self.tokens.append(Token(TokenType.EOF, '', line, col, end, end))
        self.pos = 0

    # Cursor

    def peek(self, offset: int = 0) -> Token:
        pos = self.pos + offset
        if pos < len(self.tokens):
            return self.tokens[pos]
        return self.tokens[-1]

    def previous(self) -> Token:
        return self.tokens[self.pos - 1] if self.pos > 0 else self.tokens[0]

    def advance(self) -> Token:
        token = self.peek()
        if token.type != TokenType.EOF:
            self.pos += 1
        return token

    def check(self, *types: TokenType) -> bool:
        return self.peek().type in types

    def match(self, *types: TokenType) -> Optional[Token]:
        if self.check(*types):
            return self.advance()
        return None

    def expect(self, type: TokenType) -> Token:
        if self.check(type):
            return self.advance()
        token = self.peek()
        raise ParseError(
            f"Parse Error at line {token.line}, column {token.col}: "
            f"Expected {type.name} but found {token.type.name}",
            token.line, token.col, expected=type.name, found=token.type.name,
        )

    def error(self, message: str, token: Optional[Token] = None) -> ParseError:
        token = token or self.peek()
        return ParseError(f"Parse Error at line {token.line}, column {token.col}: {message}",
                          token.line, token.col)

    def span(self, first: Union[Token, ASTNode]) -> dict:
        """Position fields for a node starting at `first` and ending at the last consumed token."""
        column = first.col if isinstance(first, Token) else first.column
        end = max(first.end, self.previous().end)
        return {'line': first.line, 'column': column, 'start': first.start, 'end': end}

    def consume_terminator(self):
        # ';' may only be left out before '}' or end of input
        if self.match(TokenType.SEMICOLON) or self.check(TokenType.RBRACE, TokenType.EOF):
            return
        self.expect(TokenType.SEMICOLON)

    # Statements

    def parse(self) -> Program:
        first = self.peek()
        body = []
        while not self.check(TokenType.EOF):
            body.append(self.parse_statement())
        logger.debug("Parsed %d top-level statements", len(body))
        return Program(tuple(body), **self.span(first))

    def parse_statement(self) -> Statement:
        token = self.peek()
        if token.type in (TokenType.LET, TokenType.CONST):
            declaration = self.parse_variable_declaration()
            self.consume_terminator()
            return declaration
        if token.type in (TokenType.FUNCTION, TokenType.COMPONENT):
            return self.parse_function_declaration()
        if token.type == TokenType.LBRACE:
            return self.parse_block()
        if token.type == TokenType.IF:
            return self.parse_if_statement()
        if token.type == TokenType.WHILE:
            return self.parse_while_statement()
        if token.type == TokenType.FOR:
            return self.parse_for_statement()
        if token.type == TokenType.RETURN:
            return self.parse_return_statement()
        if token.type == TokenType.BREAK:
            self.advance()
            self.consume_terminator()
            return BreakStatement(**self.span(token))
        if token.type == TokenType.CONTINUE:
            self.advance()
            self.consume_terminator()
            return ContinueStatement(**self.span(token))
        if token.type == TokenType.IMPORT:
            return self.parse_import_declaration()
        if token.type == TokenType.EXPORT:
            return self.parse_export_declaration()
        return self.parse_expression_statement()

    def parse_variable_declaration(self) -> VariableDeclaration:
        """let/const declarators without the terminator, so for-loop heads can share it."""
        keyword = self.advance()
        kind = 'const' if keyword.type == TokenType.CONST else 'let'
        declarations = [self.parse_variable_declarator()]
        while self.match(TokenType.COMMA):
            declarations.append(self.parse_variable_declarator())
        return VariableDeclaration(kind, tuple(declarations), **self.span(keyword))

    def parse_variable_declarator(self) -> VariableDeclarator:
        first = self.peek()
        if self.check(TokenType.LBRACKET):
            target = self.parse_array_pattern()
        else:
            target = self.parse_identifier()
        init = None
        if self.match(TokenType.ASSIGN):
            init = self.parse_assignment()
        return VariableDeclarator(target, init, **self.span(first))

    def parse_array_pattern(self) -> ArrayPattern:
        first = self.expect(TokenType.LBRACKET)
        elements: List[Optional[Identifier]] = []
        while not self.check(TokenType.RBRACKET):
            if self.match(TokenType.COMMA):
                elements.append(None)
                continue
            elements.append(self.parse_identifier())
            if not self.check(TokenType.RBRACKET):
                self.expect(TokenType.COMMA)
        self.expect(TokenType.RBRACKET)
        return ArrayPattern(tuple(elements), **self.span(first))

    def parse_function_declaration(self) -> FunctionDeclaration:
        keyword = self.advance()  # FUNCTION or COMPONENT
        name = self.parse_identifier()
        self.expect(TokenType.LPAREN)
        params = []
        if not self.check(TokenType.RPAREN):
            params.append(self.parse_identifier())
            while self.match(TokenType.COMMA):
                params.append(self.parse_identifier())
        self.expect(TokenType.RPAREN)
        body = self.parse_block()
        return FunctionDeclaration(name, tuple(params), body, **self.span(keyword))

    def parse_block(self) -> BlockStatement:
        first = self.expect(TokenType.LBRACE)
        body = []
        while not self.check(TokenType.RBRACE, TokenType.EOF):
            body.append(self.parse_statement())
        self.expect(TokenType.RBRACE)
        return BlockStatement(tuple(body), **self.span(first))

    def parse_if_statement(self) -> IfStatement:
        keyword = self.advance()  # IF, or ELSE_IF in a chain
        self.expect(TokenType.LPAREN)
        test = self.parse_expression()
        self.expect(TokenType.RPAREN)
        consequent = self.parse_statement()
        alternate = None
        if self.check(TokenType.ELSE_IF):
            alternate = self.parse_if_statement()
        elif self.match(TokenType.ELSE):
            alternate = self.parse_statement()
        return IfStatement(test, consequent, alternate, **self.span(keyword))

    def parse_while_statement(self) -> WhileStatement:
        keyword = self.advance()
        self.expect(TokenType.LPAREN)
        test = self.parse_expression()
        self.expect(TokenType.RPAREN)
        body = self.parse_statement()
        return WhileStatement(test, body, **self.span(keyword))

    def parse_for_statement(self) -> ForStatement:
        keyword = self.advance()
        self.expect(TokenType.LPAREN)
        init = None
        if self.check(TokenType.LET, TokenType.CONST):
            init = self.parse_variable_declaration()
        elif not self.check(TokenType.SEMICOLON):
            init = self.parse_expression()
        self.expect(TokenType.SEMICOLON)
        test = None if self.check(TokenType.SEMICOLON) else self.parse_expression()
        self.expect(TokenType.SEMICOLON)
        update = None if self.check(TokenType.RPAREN) else self.parse_expression()
        self.expect(TokenType.RPAREN)
        body = self.parse_statement()
        return ForStatement(init, test, update, body, **self.span(keyword))

    def parse_return_statement(self) -> ReturnStatement:
        keyword = self.advance()
        argument = None
        if not self.check(TokenType.SEMICOLON, TokenType.RBRACE, TokenType.EOF):
            argument = self.parse_expression()
        self.consume_terminator()
        return ReturnStatement(argument, **self.span(keyword))

    def parse_import_declaration(self) -> ImportDeclaration:
        keyword = self.advance()
        self.expect(TokenType.LBRACE)
        specifiers = []
        while not self.check(TokenType.RBRACE):
            name = self.parse_identifier()
            specifiers.append(ImportSpecifier(name, name, **self.span(name)))
            if not self.match(TokenType.COMMA):
                break
        self.expect(TokenType.RBRACE)
        self.expect(TokenType.FROM)
        source_token = self.expect(TokenType.STRING)
        source = Literal(source_token.value, source_token.value, **self.span(source_token))
        self.consume_terminator()
        return ImportDeclaration(tuple(specifiers), source, **self.span(keyword))

    def parse_export_declaration(self) -> ExportDeclaration:
        keyword = self.advance()
        is_default = self.match(TokenType.DEFAULT) is not None
        declaration = self.parse_statement()
        return ExportDeclaration(declaration, is_default, **self.span(keyword))

    def parse_expression_statement(self) -> ExpressionStatement:
        expression = self.parse_expression()
        self.consume_terminator()
        return ExpressionStatement(expression, **self.span(expression))

    # Expressions, lowest precedence first

    def parse_expression(self) -> Expression:
        return self.parse_assignment()

    def parse_assignment(self) -> Expression:
        left = self.parse_conditional()
        if self.check(*ASSIGNMENT_OPERATORS):
            operator = self.advance().value
            right = self.parse_assignment()
            return AssignmentExpression(operator, left, right, **self.span(left))
        return left

    def parse_conditional(self) -> Expression:
        test = self.parse_logical_or()
        if self.match(TokenType.QUESTION):
            consequent = self.parse_assignment()
            self.expect(TokenType.COLON)
            alternate = self.parse_assignment()
            return ConditionalExpression(test, consequent, alternate, **self.span(test))
        return test

    def parse_logical_or(self) -> Expression:
        left = self.parse_logical_and()
        while self.check(TokenType.LOGICAL_OR):
            operator = self.advance().value
            right = self.parse_logical_and()
            left = BinaryExpression(operator, left, right, **self.span(left))
        return left

    def parse_logical_and(self) -> Expression:
        left = self.parse_equality()
        while self.check(TokenType.LOGICAL_AND):
            operator = self.advance().value
            right = self.parse_equality()
            left = BinaryExpression(operator, left, right, **self.span(left))
        return left

    def parse_equality(self) -> Expression:
        left = self.parse_relational()
        while self.check(*EQUALITY_OPERATORS):
            operator = self.advance().value
            right = self.parse_relational()
            left = BinaryExpression(operator, left, right, **self.span(left))
        return left

    def parse_relational(self) -> Expression:
        left = self.parse_additive()
        while self.check(*RELATIONAL_OPERATORS):
            operator = self.advance().value
            right = self.parse_additive()
            left = BinaryExpression(operator, left, right, **self.span(left))
        return left

    def parse_additive(self) -> Expression:
        left = self.parse_multiplicative()
        while self.check(*ADDITIVE_OPERATORS):
            operator = self.advance().value
            right = self.parse_multiplicative()
            left = BinaryExpression(operator, left, right, **self.span(left))
        return left

    def parse_multiplicative(self) -> Expression:
        left = self.parse_power()
        while self.check(*MULTIPLICATIVE_OPERATORS):
            operator = self.advance().value
            right = self.parse_power()
            left = BinaryExpression(operator, left, right, **self.span(left))
        return left

    def parse_power(self) -> Expression:
        left = self.parse_unary()
        if self.check(TokenType.POWER):
            operator = self.advance().value
            right = self.parse_power()  # right-associative
            return BinaryExpression(operator, left, right, **self.span(left))
        return left

    def parse_unary(self) -> Expression:
        if self.check(*UNARY_OPERATORS):
            token = self.advance()
            argument = self.parse_unary()
            return UnaryExpression(token.value, argument, **self.span(token))
        return self.parse_call_member()

    def parse_call_member(self) -> Expression:
        expr = self.parse_primary()
        while True:
            if self.match(TokenType.LPAREN):
                arguments = self.parse_arguments()
                expr = CallExpression(expr, arguments, **self.span(expr))
            elif self.match(TokenType.DOT):
                prop = self.parse_identifier()
                expr = MemberExpression(expr, prop, False, **self.span(expr))
            elif self.match(TokenType.LBRACKET):
                prop = self.parse_expression()
                self.expect(TokenType.RBRACKET)
                expr = MemberExpression(expr, prop, True, **self.span(expr))
            else:
                break
        return expr

    def parse_arguments(self) -> tuple:
        arguments = []
        if not self.check(TokenType.RPAREN):
            arguments.append(self.parse_assignment())
            while self.match(TokenType.COMMA):
                arguments.append(self.parse_assignment())
        self.expect(TokenType.RPAREN)
        return tuple(arguments)

    def parse_primary(self) -> Expression:
        token = self.peek()

        if token.type == TokenType.NUMBER:
            self.advance()
            return Literal(self.number_value(token), token.value, **self.span(token))
        if token.type == TokenType.STRING:
            self.advance()
            return Literal(token.value, token.value, **self.span(token))
        if token.type == TokenType.TEMPLATE_STRING:
            self.advance()
            return Literal(token.value, token.value, template=True, **self.span(token))
        if token.type == TokenType.TRUE:
            self.advance()
            return Literal(True, token.value, **self.span(token))
        if token.type == TokenType.FALSE:
            self.advance()
            return Literal(False, token.value, **self.span(token))
        if token.type == TokenType.NULL:
            self.advance()
            return Literal(None, token.value, **self.span(token))
        if token.type == TokenType.UNDEFINED:
            self.advance()
            return Identifier('undefined', **self.span(token))
        if token.type == TokenType.IDENTIFIER:
            return self.parse_identifier()
        if token.type == TokenType.LBRACKET:
            return self.parse_array_expression()
        if token.type == TokenType.LBRACE:
            return self.parse_object_expression()
        if token.type == TokenType.LPAREN:
            self.advance()
            expr = self.parse_expression()
            self.expect(TokenType.RPAREN)
            return expr
        if self.is_jsx_start():
            return self.parse_jsx()

        raise self.error(f"Unexpected token: {token.value or token.type.name}")

    def parse_identifier(self) -> Identifier:
        token = self.expect(TokenType.IDENTIFIER)
        return Identifier(token.value, **self.span(token))

    def number_value(self, token: Token) -> Union[int, float]:
        text = token.value
        try:
            if text[:2].lower() in RADIX_PREFIXES:
                return int(text, 0)
            if any(c in text for c in '.eE'):
                return float(text)
            return int(text)
        except ValueError as e:
            raise self.error(f"Invalid number literal: {text}", token) from e

    def parse_array_expression(self) -> ArrayExpression:
        first = self.expect(TokenType.LBRACKET)
        elements: List[Optional[Expression]] = []
        while not self.check(TokenType.RBRACKET):
            if self.match(TokenType.COMMA):
                elements.append(None)
                continue
            elements.append(self.parse_assignment())
            if not self.check(TokenType.RBRACKET):
                self.expect(TokenType.COMMA)
        self.expect(TokenType.RBRACKET)
        return ArrayExpression(tuple(elements), **self.span(first))

    def parse_object_expression(self) -> ObjectExpression:
        first = self.expect(TokenType.LBRACE)
        properties = []
        while not self.check(TokenType.RBRACE):
            key = self.parse_identifier()
            self.expect(TokenType.COLON)
            value = self.parse_assignment()
            properties.append(Property(key, value, **self.span(key)))
            if not self.match(TokenType.COMMA):
                break
        self.expect(TokenType.RBRACE)
        return ObjectExpression(tuple(properties), **self.span(first))

    # JSX

    def is_jsx_start(self) -> bool:
        # '<' opens markup only before a tag name or '>' (fragment)
        return (self.check(TokenType.LESS_THAN)
                and self.peek(1).type in (TokenType.IDENTIFIER, TokenType.GREATER_THAN))

    def is_fragment_close(self) -> bool:
        # '</>' lexes as '<' followed by '/>'
        return self.check(TokenType.LESS_THAN) and self.peek(1).type == TokenType.JSX_SELF_CLOSING

    def parse_jsx(self) -> Union[JSXElement, JSXFragment]:
        opening = self.expect(TokenType.LESS_THAN)

        if self.match(TokenType.GREATER_THAN):
            children = self.parse_jsx_children()
            if self.is_fragment_close():
                self.advance()
                self.advance()
            else:
                self.expect(TokenType.JSX_SLASH)
                self.expect(TokenType.GREATER_THAN)
            return JSXFragment(children, **self.span(opening))

        name = self.parse_jsx_name()
        attributes = []
        while self.check(TokenType.IDENTIFIER):
            attributes.append(self.parse_jsx_attribute())

        if self.match(TokenType.JSX_SELF_CLOSING):
            return JSXElement(name, tuple(attributes), (), True, **self.span(opening))

        self.expect(TokenType.GREATER_THAN)
        children = self.parse_jsx_children()
        self.expect(TokenType.JSX_SLASH)
        self.parse_jsx_name()  # closing name is not checked against the opening one
        self.expect(TokenType.GREATER_THAN)
        return JSXElement(name, tuple(attributes), children, False, **self.span(opening))

    def parse_jsx_name(self) -> JSXName:
        first = self.expect(TokenType.IDENTIFIER)
        name: JSXName = JSXIdentifier(first.value, **self.span(first))
        while self.match(TokenType.DOT):
            token = self.expect(TokenType.IDENTIFIER)
            prop = JSXIdentifier(token.value, **self.span(token))
            name = JSXMemberExpression(name, prop, **self.span(first))
        return name

    def parse_jsx_attribute(self) -> JSXAttribute:
        token = self.expect(TokenType.IDENTIFIER)
        name = JSXIdentifier(token.value, **self.span(token))
        value = None
        if self.match(TokenType.ASSIGN):
            if self.check(TokenType.STRING):
                string = self.advance()
                value = Literal(string.value, string.value, **self.span(string))
            elif self.check(TokenType.LBRACE):
                value = self.parse_jsx_expression_container()
            else:
                raise self.error(f"Expected string or {{expression}} for attribute '{token.value}'")
        return JSXAttribute(name, value, **self.span(token))

    def parse_jsx_expression_container(self) -> JSXExpressionContainer:
        first = self.expect(TokenType.LBRACE)
        expression = self.parse_expression()
        self.expect(TokenType.RBRACE)
        return JSXExpressionContainer(expression, **self.span(first))

    def parse_jsx_children(self) -> tuple:
        children: List[JSXChild] = []
        while not (self.check(TokenType.JSX_SLASH) or self.is_fragment_close()):
            token = self.peek()
            if token.type == TokenType.EOF:
                raise self.error("Unterminated JSX element")
            if token.type in (TokenType.IDENTIFIER, TokenType.STRING):
                self.advance()
                children.append(JSXText(token.value, **self.span(token)))
            elif token.type == TokenType.LBRACE:
                children.append(self.parse_jsx_expression_container())
            elif token.type == TokenType.LESS_THAN:
                children.append(self.parse_jsx())
            else:
                self.advance()
        return tuple(children)


def parse(tokens: List[Token]) -> Program:
    """Parse a token list into a Program. Raises ParseError on the first mismatch."""
    return Parser(tokens).parse()
