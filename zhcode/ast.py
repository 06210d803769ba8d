"""
ZhCode AST - Abstract Syntax Tree node definitions

Nodes are immutable. Every node carries its source position as keyword-only
fields (line, column, start, end); positions are ignored by equality so hand
built trees compare equal to parsed ones.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union


def _position():
    return field(default=0, kw_only=True, compare=False)


@dataclass(frozen=True)
class ASTNode:
    line: int = _position()
    column: int = _position()
    start: int = _position()
    end: int = _position()

    @property
    def node_type(self) -> str:
        return type(self).__name__


@dataclass(frozen=True)
class Program(ASTNode):
    body: Tuple['Statement', ...]


# Identifiers and patterns

@dataclass(frozen=True)
class Identifier(ASTNode):
    name: str


@dataclass(frozen=True)
class ArrayPattern(ASTNode):
    elements: Tuple[Optional[Identifier], ...]  # None marks a hole: [a, , c]


# Statements

@dataclass(frozen=True)
class VariableDeclarator(ASTNode):
    id: Union[Identifier, ArrayPattern]
    init: Optional['Expression'] = None


@dataclass(frozen=True)
class VariableDeclaration(ASTNode):
    kind: str  # 'let' | 'const'
    declarations: Tuple[VariableDeclarator, ...]


@dataclass(frozen=True)
class BlockStatement(ASTNode):
    body: Tuple['Statement', ...]


@dataclass(frozen=True)
class FunctionDeclaration(ASTNode):
    id: Identifier
    params: Tuple[Identifier, ...]
    body: BlockStatement


@dataclass(frozen=True)
class IfStatement(ASTNode):
    test: 'Expression'
    consequent: 'Statement'
    alternate: Optional['Statement'] = None


@dataclass(frozen=True)
class WhileStatement(ASTNode):
    test: 'Expression'
    body: 'Statement'


@dataclass(frozen=True)
class ForStatement(ASTNode):
    init: Union[VariableDeclaration, 'Expression', None]
    test: Optional['Expression']
    update: Optional['Expression']
    body: 'Statement'


@dataclass(frozen=True)
class ReturnStatement(ASTNode):
    argument: Optional['Expression'] = None


@dataclass(frozen=True)
class BreakStatement(ASTNode):
    pass


@dataclass(frozen=True)
class ContinueStatement(ASTNode):
    pass


@dataclass(frozen=True)
class ImportSpecifier(ASTNode):
    imported: Identifier
    local: Identifier


@dataclass(frozen=True)
class ImportDeclaration(ASTNode):
    specifiers: Tuple[ImportSpecifier, ...]
    source: 'Literal'


@dataclass(frozen=True)
class ExportDeclaration(ASTNode):
    declaration: 'Statement'
    is_default: bool = False


@dataclass(frozen=True)
class ExpressionStatement(ASTNode):
    expression: 'Expression'


# Expressions

@dataclass(frozen=True)
class Literal(ASTNode):
    value: Union[int, float, str, bool, None]
    raw: str = ''
    template: bool = False  # backtick string


@dataclass(frozen=True)
class BinaryExpression(ASTNode):
    operator: str
    left: 'Expression'
    right: 'Expression'


@dataclass(frozen=True)
class UnaryExpression(ASTNode):
    operator: str
    argument: 'Expression'
    prefix: bool = True


@dataclass(frozen=True)
class AssignmentExpression(ASTNode):
    operator: str  # = += -= *= /= %=
    left: 'Expression'
    right: 'Expression'


@dataclass(frozen=True)
class ConditionalExpression(ASTNode):
    test: 'Expression'
    consequent: 'Expression'
    alternate: 'Expression'


@dataclass(frozen=True)
class CallExpression(ASTNode):
    callee: 'Expression'
    arguments: Tuple['Expression', ...]


@dataclass(frozen=True)
class MemberExpression(ASTNode):
    object: 'Expression'
    property: 'Expression'
    computed: bool = False  # obj[prop] rather than obj.prop


@dataclass(frozen=True)
class ArrayExpression(ASTNode):
    elements: Tuple[Optional['Expression'], ...]


@dataclass(frozen=True)
class Property(ASTNode):
    key: Identifier
    value: 'Expression'


@dataclass(frozen=True)
class ObjectExpression(ASTNode):
    properties: Tuple[Property, ...]


# JSX

@dataclass(frozen=True)
class JSXIdentifier(ASTNode):
    name: str


@dataclass(frozen=True)
class JSXMemberExpression(ASTNode):
    object: 'JSXName'
    property: JSXIdentifier


@dataclass(frozen=True)
class JSXExpressionContainer(ASTNode):
    expression: 'Expression'


@dataclass(frozen=True)
class JSXAttribute(ASTNode):
    name: JSXIdentifier
    value: Union[Literal, JSXExpressionContainer, None] = None  # None means true


@dataclass(frozen=True)
class JSXText(ASTNode):
    value: str


@dataclass(frozen=True)
class JSXElement(ASTNode):
    name: 'JSXName'
    attributes: Tuple[JSXAttribute, ...]
    children: Tuple['JSXChild', ...]
    self_closing: bool = False


@dataclass(frozen=True)
class JSXFragment(ASTNode):
    children: Tuple['JSXChild', ...]


JSXName = Union[JSXIdentifier, JSXMemberExpression]

JSXChild = Union[JSXText, JSXExpressionContainer, JSXElement, JSXFragment]

Expression = Union[
    Identifier, Literal, BinaryExpression, UnaryExpression, AssignmentExpression,
    ConditionalExpression, CallExpression, MemberExpression, ArrayExpression,
    ObjectExpression, JSXElement, JSXFragment,
]

Statement = Union[
    VariableDeclaration, FunctionDeclaration, BlockStatement, IfStatement,
    WhileStatement, ForStatement, ReturnStatement, BreakStatement,
    ContinueStatement, ImportDeclaration, ExportDeclaration, ExpressionStatement,
]
