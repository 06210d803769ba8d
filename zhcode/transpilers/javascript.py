"""
ZhCode JavaScript Transpiler - Converts ZhCode AST to JavaScript
Uses target config from data/targets/js.json
"""

import logging
from typing import Optional, Sequence

from ..config import load_target_config
from ..errors import TranspileError
from ..ast import (
    ASTNode, Program, Identifier, Literal, ArrayPattern,
    VariableDeclaration, VariableDeclarator, FunctionDeclaration,
    BlockStatement, IfStatement, WhileStatement, ForStatement, ReturnStatement,
    BreakStatement, ContinueStatement, ImportDeclaration, ExportDeclaration,
    ExpressionStatement, BinaryExpression, UnaryExpression,
    AssignmentExpression, ConditionalExpression, CallExpression,
    MemberExpression, ArrayExpression, ObjectExpression,
    JSXElement, JSXFragment, JSXIdentifier, JSXMemberExpression, JSXAttribute,
    JSXText, JSXExpressionContainer,
)

logger = logging.getLogger(__name__)

T = load_target_config('js')

# Binding strength, loosest first; used to decide where parentheses go
ASSIGNMENT = 1
CONDITIONAL = 2
UNARY = 10
CALL = 11
ATOM = 12

BINARY_PRECEDENCE = {
    '||': 3,
    '&&': 4,
    '==': 5, '!=': 5, '===': 5, '!==': 5,
    '<': 6, '>': 6, '<=': 6, '>=': 6,
    '+': 7, '-': 7,
    '*': 8, '/': 8, '%': 8,
    '**': 9,
}


def precedence(node: ASTNode) -> int:
    if isinstance(node, AssignmentExpression):
        return ASSIGNMENT
    if isinstance(node, ConditionalExpression):
        return CONDITIONAL
    if isinstance(node, BinaryExpression):
        return BINARY_PRECEDENCE.get(node.operator, min(BINARY_PRECEDENCE.values()))
    if isinstance(node, UnaryExpression):
        return UNARY
    if isinstance(node, (CallExpression, MemberExpression)):
        return CALL
    return ATOM


def starts_with_object(node: ASTNode) -> bool:
    """True when the leftmost token of the rendered expression is an object literal brace."""
    while True:
        if isinstance(node, ObjectExpression):
            return True
        if isinstance(node, CallExpression):
            node = node.callee
        elif isinstance(node, MemberExpression):
            node = node.object
        elif isinstance(node, (BinaryExpression, AssignmentExpression)):
            node = node.left
        elif isinstance(node, ConditionalExpression):
            node = node.test
        elif isinstance(node, UnaryExpression) and not node.prefix:
            node = node.argument
        else:
            return False


def is_bare_integer(node: ASTNode) -> bool:
    # `1.x` reads the dot as a decimal point
    if not isinstance(node, Literal) or isinstance(node.value, bool) or not isinstance(node.value, (int, float)):
        return False
    return (node.raw or str(node.value)).isdigit()


def quote(text: str) -> str:
    return '"' + text.replace('"', '\\"') + '"'


class JavaScriptTranspiler:
    def transpile(self, program: Program) -> str:
        code = '\n'.join(self.stmt(s, 0) for s in program.body)
        logger.debug("Generated %d characters of JavaScript from %d statements", len(code), len(program.body))
        return code

    def ind(self, depth: int) -> str:
        return T['indent'] * depth

    def unsupported(self, node) -> TranspileError:
        return TranspileError(f"Unsupported node type: {type(node).__name__}")

    # Statements

    def stmt(self, node: ASTNode, depth: int) -> str:
        return self.ind(depth) + self.inline_stmt(node, depth)

    def inline_stmt(self, node: ASTNode, depth: int) -> str:
        """Statement text without its leading indent; nested lines are indented from depth."""
        if isinstance(node, VariableDeclaration):
            return self.declaration(node) + ';'
        elif isinstance(node, FunctionDeclaration):
            params = ', '.join(p.name for p in node.params)
            return f"function {node.id.name}({params}) {self.inline_stmt(node.body, depth)}"
        elif isinstance(node, BlockStatement):
            if not node.body:
                return '{}'
            body = '\n'.join(self.stmt(s, depth + 1) for s in node.body)
            return f"{{\n{body}\n{self.ind(depth)}}}"
        elif isinstance(node, IfStatement):
            result = f"if ({self.expr(node.test)}) {self.inline_stmt(node.consequent, depth)}"
            if node.alternate is not None:
                result += f" else {self.inline_stmt(node.alternate, depth)}"
            return result
        elif isinstance(node, WhileStatement):
            return f"while ({self.expr(node.test)}) {self.inline_stmt(node.body, depth)}"
        elif isinstance(node, ForStatement):
            if node.init is None:
                init = ''
            elif isinstance(node.init, VariableDeclaration):
                init = self.declaration(node.init)
            else:
                init = self.expr(node.init)
            test = self.expr(node.test) if node.test is not None else ''
            update = self.expr(node.update) if node.update is not None else ''
            return f"for ({init}; {test}; {update}) {self.inline_stmt(node.body, depth)}"
        elif isinstance(node, ReturnStatement):
            if node.argument is None:
                return 'return;'
            return f"return {self.expr(node.argument)};"
        elif isinstance(node, BreakStatement):
            return 'break;'
        elif isinstance(node, ContinueStatement):
            return 'continue;'
        elif isinstance(node, ImportDeclaration):
            names = ', '.join(self.import_specifier(s) for s in node.specifiers)
            return f"import {{ {names} }} from {quote(node.source.value)};"
        elif isinstance(node, ExportDeclaration):
            prefix = 'export default ' if node.is_default else 'export '
            return prefix + self.inline_stmt(node.declaration, depth)
        elif isinstance(node, ExpressionStatement):
            text = self.expr(node.expression)
            if starts_with_object(node.expression):
                text = f"({text})"  # a leading brace would open a block
            return text + ';'
        raise self.unsupported(node)

    def declaration(self, node: VariableDeclaration) -> str:
        return f"{node.kind} {', '.join(self.declarator(d) for d in node.declarations)}"

    def declarator(self, node: VariableDeclarator) -> str:
        target = self.pattern(node.id)
        if node.init is None:
            return target
        return f"{target} = {self.expr(node.init)}"

    def pattern(self, node: ASTNode) -> str:
        if isinstance(node, Identifier):
            return node.name
        elif isinstance(node, ArrayPattern):
            return self.elements([e.name if e is not None else None for e in node.elements])
        raise self.unsupported(node)

    def import_specifier(self, node) -> str:
        if node.imported.name == node.local.name:
            return node.local.name
        return f"{node.imported.name} as {node.local.name}"

    @staticmethod
    def elements(items: Sequence[Optional[str]]) -> str:
        # Holes render empty; a trailing hole needs its own comma to survive
        text = ', '.join('' if item is None else item for item in items)
        if items and items[-1] is None:
            text += ','
        return f"[{text}]"

    # Expressions

    def expr(self, node: ASTNode) -> str:
        if isinstance(node, Literal):
            if node.template:
                return '`' + node.value.replace('`', '\\`') + '`'
            if isinstance(node.value, str):
                return quote(node.value)
            elif node.value is None:
                return 'null'
            elif isinstance(node.value, bool):
                return 'true' if node.value else 'false'
            return node.raw or str(node.value)
        elif isinstance(node, Identifier):
            return node.name
        elif isinstance(node, BinaryExpression):
            level = precedence(node)
            left = self.expr(node.left)
            right = self.expr(node.right)
            left_level = precedence(node.left)
            right_level = precedence(node.right)
            if left_level < level or (node.operator == '**' and (
                    left_level == level or isinstance(node.left, UnaryExpression))):
                left = f"({left})"
            if right_level < level or (right_level == level and node.operator != '**'):
                right = f"({right})"
            return f"{left} {node.operator} {right}"
        elif isinstance(node, UnaryExpression):
            argument = self.expr(node.argument)
            if precedence(node.argument) < UNARY or (
                    isinstance(node.argument, UnaryExpression) and node.operator in ('-', '+')
                    and node.argument.operator == node.operator):
                argument = f"({argument})"
            if node.prefix:
                return f"{node.operator}{argument}"
            return f"{argument}{node.operator}"
        elif isinstance(node, AssignmentExpression):
            left = self.expr(node.left)
            if precedence(node.left) <= CONDITIONAL:
                left = f"({left})"
            return f"{left} {node.operator} {self.expr(node.right)}"
        elif isinstance(node, ConditionalExpression):
            test = self.expr(node.test)
            if precedence(node.test) <= CONDITIONAL:
                test = f"({test})"
            return f"{test} ? {self.expr(node.consequent)} : {self.expr(node.alternate)}"
        elif isinstance(node, CallExpression):
            args = ', '.join(self.expr(a) for a in node.arguments)
            return f"{self.operand(node.callee)}({args})"
        elif isinstance(node, MemberExpression):
            if node.computed:
                return f"{self.operand(node.object)}[{self.expr(node.property)}]"
            obj = self.operand(node.object)
            if is_bare_integer(node.object):
                obj = f"({obj})"
            return f"{obj}.{self.expr(node.property)}"
        elif isinstance(node, ArrayExpression):
            return self.elements([None if e is None else self.expr(e) for e in node.elements])
        elif isinstance(node, ObjectExpression):
            if not node.properties:
                return '{}'
            pairs = ', '.join(f"{p.key.name}: {self.expr(p.value)}" for p in node.properties)
            return f"{{ {pairs} }}"
        elif isinstance(node, JSXElement):
            return self.jsx_element(node)
        elif isinstance(node, JSXFragment):
            return self.create_element(T['fragment'], 'null', node.children)
        raise self.unsupported(node)

    def operand(self, node: ASTNode) -> str:
        """Callee or member object, wrapped when it binds looser than a call."""
        text = self.expr(node)
        return f"({text})" if precedence(node) < CALL else text

    # JSX lowering to React.createElement

    def jsx_element(self, node: JSXElement) -> str:
        return self.create_element(self.jsx_name(node.name), self.jsx_props(node.attributes), node.children)

    def create_element(self, tag: str, props: str, children: Sequence[ASTNode]) -> str:
        args = [tag, props] + [self.jsx_child(c) for c in children]
        return f"{T['createElement']}({', '.join(args)})"

    def jsx_name(self, node: ASTNode) -> str:
        if isinstance(node, JSXIdentifier):
            return quote(node.name)
        elif isinstance(node, JSXMemberExpression):
            return f"{self.jsx_member(node.object)}.{node.property.name}"
        raise self.unsupported(node)

    def jsx_member(self, node: ASTNode) -> str:
        # Dotted names are references, so no quotes on any part
        if isinstance(node, JSXIdentifier):
            return node.name
        return self.jsx_name(node)

    def jsx_props(self, attributes: Sequence[JSXAttribute]) -> str:
        if not attributes:
            return 'null'
        props = ', '.join(f"{a.name.name}: {self.jsx_value(a.value)}" for a in attributes)
        return f"{{ {props} }}"

    def jsx_value(self, value: Optional[ASTNode]) -> str:
        if value is None:
            return 'true'
        elif isinstance(value, Literal):
            return quote(str(value.value))
        elif isinstance(value, JSXExpressionContainer):
            return self.expr(value.expression)
        raise self.unsupported(value)

    def jsx_child(self, node: ASTNode) -> str:
        if isinstance(node, JSXText):
            return quote(node.value)
        elif isinstance(node, JSXExpressionContainer):
            return self.expr(node.expression)
        elif isinstance(node, (JSXElement, JSXFragment)):
            return self.expr(node)
        raise self.unsupported(node)


def transpile(program: Program) -> str:
    """Render a Program as JavaScript source text."""
    return JavaScriptTranspiler().transpile(program)
