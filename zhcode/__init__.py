"""
ZhCode Programming Language
Chinese-keyword source compiled to JavaScript, with JSX lowered to React.createElement
"""

import logging

from .errors import ZhCodeError, ParseError, TranspileError, ConfigError
from .tokens import Token, TokenType
from .keywords import CHINESE_KEYWORDS, KEYWORD_TO_JS, is_keyword, keyword_kind, js_equivalent
from .lexer import Lexer, tokenize
from .ast import (
    ASTNode, Program, Statement, Expression, JSXChild, JSXName,
    Identifier, Literal, ArrayPattern, VariableDeclarator, VariableDeclaration,
    BlockStatement, FunctionDeclaration, IfStatement, WhileStatement,
    ForStatement, ReturnStatement, BreakStatement, ContinueStatement,
    ImportSpecifier, ImportDeclaration, ExportDeclaration, ExpressionStatement,
    BinaryExpression, UnaryExpression, AssignmentExpression,
    ConditionalExpression, CallExpression, MemberExpression, ArrayExpression,
    Property, ObjectExpression,
    JSXIdentifier, JSXMemberExpression, JSXExpressionContainer, JSXAttribute,
    JSXText, JSXElement, JSXFragment,
)
from .parser import Parser, parse
from .transpilers import JavaScriptTranspiler, transpile

__version__ = '0.1.0'

logging.getLogger(__name__).addHandler(logging.NullHandler())


def compile(source: str) -> str:
    """Compile ZhCode source text straight to JavaScript."""
    return transpile(parse(tokenize(source)))


__all__ = [
    # Pipeline
    'tokenize', 'parse', 'transpile', 'compile',
    'Lexer', 'Parser', 'JavaScriptTranspiler',
    'Token', 'TokenType',

    # Keywords
    'CHINESE_KEYWORDS', 'KEYWORD_TO_JS', 'is_keyword', 'keyword_kind', 'js_equivalent',

    # AST
    'ASTNode', 'Program', 'Statement', 'Expression', 'JSXChild', 'JSXName',
    'Identifier', 'Literal', 'ArrayPattern', 'VariableDeclarator', 'VariableDeclaration',
    'BlockStatement', 'FunctionDeclaration', 'IfStatement', 'WhileStatement',
    'ForStatement', 'ReturnStatement', 'BreakStatement', 'ContinueStatement',
    'ImportSpecifier', 'ImportDeclaration', 'ExportDeclaration', 'ExpressionStatement',
    'BinaryExpression', 'UnaryExpression', 'AssignmentExpression',
    'ConditionalExpression', 'CallExpression', 'MemberExpression', 'ArrayExpression',
    'Property', 'ObjectExpression',
    'JSXIdentifier', 'JSXMemberExpression', 'JSXExpressionContainer', 'JSXAttribute',
    'JSXText', 'JSXElement', 'JSXFragment',

    # Errors
    'ZhCodeError', 'ParseError', 'TranspileError', 'ConfigError',

    '__version__',
]
