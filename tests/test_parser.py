"""Parser tests."""

from typing import get_args

import pytest

from zhcode import (
    ArrayExpression, ArrayPattern, AssignmentExpression, BinaryExpression,
    BlockStatement, BreakStatement, CallExpression, ConditionalExpression,
    ContinueStatement, ExportDeclaration, ExpressionStatement, Expression, ForStatement,
    FunctionDeclaration, Identifier, IfStatement, ImportDeclaration,
    ImportSpecifier, JSXAttribute, JSXElement, JSXExpressionContainer,
    JSXFragment, JSXIdentifier, JSXMemberExpression, JSXText, Literal,
    MemberExpression, ObjectExpression, ParseError, Parser, Program, Property,
    ReturnStatement, Statement, UnaryExpression, VariableDeclaration, VariableDeclarator,
    WhileStatement, parse, tokenize,
)


def expr(source: str):
    program = parse(tokenize(source))
    assert len(program.body) == 1
    assert isinstance(program.body[0], ExpressionStatement)
    return program.body[0].expression


def first(source: str):
    return parse(tokenize(source)).body[0]


# --- Statements ---


def test_variable_declaration():
    assert parse(tokenize("令 x = 10;")) == Program((
        VariableDeclaration("let", (VariableDeclarator(Identifier("x"), Literal(10, "10")),)),
    ))


def test_const_with_several_declarators():
    node = first("常量 a = 1, b, c = a;")
    assert node.kind == "const"
    assert [d.id.name for d in node.declarations] == ["a", "b", "c"]
    assert node.declarations[1].init is None
    assert node.declarations[2].init == Identifier("a")


def test_array_destructuring():
    node = first("令 [状态, 设状态] = 使用状态(0);")
    declarator = node.declarations[0]
    assert declarator.id == ArrayPattern((Identifier("状态"), Identifier("设状态")))
    assert declarator.init == CallExpression(Identifier("使用状态"), (Literal(0, "0"),))


def test_array_pattern_holes():
    node = first("令 [a, , b] = c;")
    assert node.declarations[0].id.elements == (Identifier("a"), None, Identifier("b"))


def test_function_declaration():
    node = first("函数 add(a, b) { 返回 a + b; }")
    assert node == FunctionDeclaration(
        Identifier("add"),
        (Identifier("a"), Identifier("b")),
        BlockStatement((ReturnStatement(BinaryExpression("+", Identifier("a"), Identifier("b"))),)),
    )


def test_component_declares_function():
    node = first("组件 App() { 返回 空; }")
    assert isinstance(node, FunctionDeclaration)
    assert node.id.name == "App"
    assert node.params == ()


def test_if_else():
    node = first("如果 (x > 0) { 返回 1; } 否则 { 返回 2; }")
    assert isinstance(node, IfStatement)
    assert node.test == BinaryExpression(">", Identifier("x"), Literal(0, "0"))
    assert isinstance(node.consequent, BlockStatement)
    assert isinstance(node.alternate, BlockStatement)


def test_else_if_chain():
    node = first("如果 (a) { } 否则 如果 (b) { } 否则 { }")
    assert isinstance(node.alternate, IfStatement)
    assert node.alternate.test == Identifier("b")
    assert node.alternate.alternate == BlockStatement(())


def test_fused_else_if_keyword():
    fused = first("如果 (a) { } 否则如果 (b) { } 否则 { }")
    split = first("如果 (a) { } 否则 如果 (b) { } 否则 { }")
    assert fused == split


def test_while():
    node = first("当 (真) { 破; }")
    assert node == WhileStatement(Literal(True, "真"), BlockStatement((BreakStatement(),)))


def test_for():
    node = first("对于 (令 i = 0; i < 10; i = i + 1) { 续; }")
    assert isinstance(node, ForStatement)
    assert isinstance(node.init, VariableDeclaration)
    assert node.test == BinaryExpression("<", Identifier("i"), Literal(10, "10"))
    assert node.update == AssignmentExpression(
        "=", Identifier("i"), BinaryExpression("+", Identifier("i"), Literal(1, "1"))
    )
    assert node.body == BlockStatement((ContinueStatement(),))


def test_for_with_empty_clauses():
    node = first("对于 (;;) { }")
    assert (node.init, node.test, node.update) == (None, None, None)


def test_for_with_expression_init():
    node = first("对于 (i = 0; i < n; i += 1) 破;")
    assert isinstance(node.init, AssignmentExpression)
    assert node.body == BreakStatement()


def test_return_without_argument():
    body = first("函数 f() { 返回; }").body.body
    assert body == (ReturnStatement(None),)
    body = first("函数 f() { 返回 }").body.body
    assert body == (ReturnStatement(None),)


def test_import():
    node = first('导入 { 使用状态, 使用效果 } 从 "react";')
    assert node == ImportDeclaration(
        (
            ImportSpecifier(Identifier("使用状态"), Identifier("使用状态")),
            ImportSpecifier(Identifier("使用效果"), Identifier("使用效果")),
        ),
        Literal("react", "react"),
    )


@pytest.mark.parametrize(
    "source,is_default",
    [("导出 默认 组件 App() { }", True), ("导出 函数 f() { }", False)],
)
def test_export(source, is_default):
    node = first(source)
    assert isinstance(node, ExportDeclaration)
    assert node.is_default is is_default
    assert isinstance(node.declaration, FunctionDeclaration)


def test_block_statement():
    node = first("{ 令 a = 1; a; }")
    assert isinstance(node, BlockStatement)
    assert len(node.body) == 2


def test_empty_program():
    assert parse(tokenize("")) == Program(())


# --- Terminators ---


@pytest.mark.parametrize(
    "source",
    [
        "令 x = 1",
        "x = 1",
        "{ x = 1 }",
        "函数 f() { 返回 1 }",
        "当 (真) { 破 }",
        "当 (真) { 续 }",
        '导入 { a } 从 "m"',
    ],
)
def test_semicolon_optional_before_brace_or_end(source):
    parse(tokenize(source))


@pytest.mark.parametrize(
    "source,found",
    [
        ("令 x = 1 令 y = 2", "LET"),
        ("x = 1 y = 2", "IDENTIFIER"),
        ("函数 f() { 返回 1 2 }", "NUMBER"),
        ("当 (真) { 破 x }", "IDENTIFIER"),
    ],
)
def test_missing_semicolon(source, found):
    with pytest.raises(ParseError) as info:
        parse(tokenize(source))
    assert info.value.expected == "SEMICOLON"
    assert info.value.found == found
    assert f"Expected SEMICOLON but found {found}" in str(info.value)


def test_block_forms_take_no_terminator():
    program = parse(tokenize("函数 f() { } 函数 g() { } 如果 (a) { } 当 (b) { }"))
    assert len(program.body) == 4


def test_for_init_needs_semicolon():
    with pytest.raises(ParseError, match="Expected SEMICOLON"):
        parse(tokenize("对于 (令 i = 0 i < 3; i += 1) { }"))


# --- Expressions ---


def test_multiplication_binds_tighter():
    assert expr("2 + 3 * 4") == BinaryExpression(
        "+", Literal(2, "2"), BinaryExpression("*", Literal(3, "3"), Literal(4, "4"))
    )


def test_subtraction_is_left_associative():
    assert expr("a - b - c") == BinaryExpression(
        "-", BinaryExpression("-", Identifier("a"), Identifier("b")), Identifier("c")
    )


def test_power_is_right_associative():
    assert expr("2 ** 3 ** 2") == BinaryExpression(
        "**", Literal(2, "2"), BinaryExpression("**", Literal(3, "3"), Literal(2, "2"))
    )


def test_assignment_is_right_associative():
    assert expr("a = b = c") == AssignmentExpression(
        "=", Identifier("a"), AssignmentExpression("=", Identifier("b"), Identifier("c"))
    )


@pytest.mark.parametrize("op", ["=", "+=", "-=", "*=", "/=", "%="])
def test_assignment_operators(op):
    assert expr(f"x {op} 1").operator == op


def test_logical_precedence():
    assert expr("a || b && c") == BinaryExpression(
        "||", Identifier("a"), BinaryExpression("&&", Identifier("b"), Identifier("c"))
    )


def test_equality_below_relational():
    assert expr("a === b < c") == BinaryExpression(
        "===", Identifier("a"), BinaryExpression("<", Identifier("b"), Identifier("c"))
    )


def test_conditional():
    assert expr("x > 0 ? 1 : -1") == ConditionalExpression(
        BinaryExpression(">", Identifier("x"), Literal(0, "0")),
        Literal(1, "1"),
        UnaryExpression("-", Literal(1, "1")),
    )


def test_conditional_branches_allow_assignment():
    node = expr("ok ? a = 1 : b = 2")
    assert isinstance(node.consequent, AssignmentExpression)
    assert isinstance(node.alternate, AssignmentExpression)


def test_unary():
    assert expr("!-x") == UnaryExpression("!", UnaryExpression("-", Identifier("x")))
    assert expr("+x") == UnaryExpression("+", Identifier("x"))


def test_unary_binds_tighter_than_power_operand():
    assert expr("-2 ** 2") == BinaryExpression(
        "**", UnaryExpression("-", Literal(2, "2")), Literal(2, "2")
    )


def test_parentheses_group():
    assert expr("(1 + 2) * 3") == BinaryExpression(
        "*", BinaryExpression("+", Literal(1, "1"), Literal(2, "2")), Literal(3, "3")
    )


def test_call_member_chain():
    assert expr("a.b(1)[c].d()") == CallExpression(
        MemberExpression(
            MemberExpression(
                CallExpression(MemberExpression(Identifier("a"), Identifier("b")), (Literal(1, "1"),)),
                Identifier("c"),
                True,
            ),
            Identifier("d"),
        ),
        (),
    )


def test_array_literal_with_holes():
    assert expr("[1, , 2]") == ArrayExpression((Literal(1, "1"), None, Literal(2, "2")))
    assert expr("[]") == ArrayExpression(())


def test_object_literal():
    assert expr("x = { a: 1, b: c, }") == AssignmentExpression(
        "=",
        Identifier("x"),
        ObjectExpression((
            Property(Identifier("a"), Literal(1, "1")),
            Property(Identifier("b"), Identifier("c")),
        )),
    )


@pytest.mark.parametrize(
    "source,value",
    [
        ("42", 42),
        ("3.5", 3.5),
        ("1e3", 1000.0),
        ("0xFF", 255),
        ("0b101", 5),
        ("0o17", 15),
    ],
)
def test_number_values(source, value):
    node = expr(source)
    assert node.value == value
    assert type(node.value) is type(value)
    assert node.raw == source


def test_incomplete_radix_literal():
    with pytest.raises(ParseError, match="Invalid number literal: 0x"):
        parse(tokenize("0x"))


def test_literals():
    assert expr('"hi"') == Literal("hi", "hi")
    assert expr("`hi`") == Literal("hi", "hi", template=True)
    assert expr("真") == Literal(True, "真")
    assert expr("false").value is False
    assert expr("空") == Literal(None, "空")
    assert expr("未定义") == Identifier("undefined")


def test_positions_are_recorded():
    node = first("令 x = 1;\n令 y = 2;")
    assert (node.line, node.column, node.start) == (1, 1, 0)
    second = parse(tokenize("令 x = 1;\n令 y = 2;")).body[1]
    assert (second.line, second.column) == (2, 1)
    assert second.declarations[0].id.column == 3


def test_positions_do_not_affect_equality():
    assert Identifier("x", line=3, column=4) == Identifier("x")


def test_node_type():
    assert first("令 x = 1;").node_type == "VariableDeclaration"


def test_nodes_are_immutable():
    node = Identifier("x")
    with pytest.raises(AttributeError):
        node.name = "y"


# --- JSX ---


def test_less_than_is_relational():
    assert expr("x < y") == BinaryExpression("<", Identifier("x"), Identifier("y"))
    assert expr("x < 1") == BinaryExpression("<", Identifier("x"), Literal(1, "1"))


def test_element_with_text():
    assert expr("<div>text</div>") == JSXElement(
        JSXIdentifier("div"), (), (JSXText("text"),), False
    )


def test_self_closing_element():
    assert expr("<br />") == JSXElement(JSXIdentifier("br"), (), (), True)


def test_attributes():
    node = expr('<input type="text" value={名字} disabled />')
    assert node.attributes == (
        JSXAttribute(JSXIdentifier("type"), Literal("text", "text")),
        JSXAttribute(JSXIdentifier("value"), JSXExpressionContainer(Identifier("名字"))),
        JSXAttribute(JSXIdentifier("disabled"), None),
    )


def test_attribute_value_must_be_string_or_expression():
    with pytest.raises(ParseError, match="attribute 'a'"):
        parse(tokenize("<div a=1 />"))


def test_nested_children():
    node = expr('<ul><li>{项目}</li>"文字"<br/></ul>')
    assert node.children == (
        JSXElement(JSXIdentifier("li"), (), (JSXExpressionContainer(Identifier("项目")),), False),
        JSXText("文字"),
        JSXElement(JSXIdentifier("br"), (), (), True),
    )


def test_identifier_children_are_text():
    node = expr("<p>hello world</p>")
    assert node.children == (JSXText("hello"), JSXText("world"))


def test_other_child_tokens_are_skipped():
    node = expr("<p>a , 1 b</p>")
    assert node.children == (JSXText("a"), JSXText("b"))


def test_dotted_name():
    node = expr("<Module.Component />")
    assert node.name == JSXMemberExpression(JSXIdentifier("Module"), JSXIdentifier("Component"))


@pytest.mark.parametrize("source", ["<>a</>", "<>a</ >"])
def test_fragment(source):
    assert expr(source) == JSXFragment((JSXText("a"),))


def test_jsx_as_return_value():
    node = first("组件 App() { 返回 <div className=\"app\">{计数}</div>; }")
    returned = node.body.body[0].argument
    assert isinstance(returned, JSXElement)
    assert returned.attributes[0].name.name == "className"


def test_unterminated_jsx():
    with pytest.raises(ParseError, match="Unterminated JSX element"):
        parse(tokenize("<div>hello"))


def test_closing_name_not_checked():
    assert expr("<a>x</b>").name == JSXIdentifier("a")


# --- Errors ---


def test_error_message_for_unexpected_token():
    with pytest.raises(ParseError) as info:
        parse(tokenize("函数 add(a, b) { 返回 a + }"))
    error = info.value
    assert error.line == 1
    assert error.col == 23
    assert str(error) == "Parse Error at line 1, column 23: Unexpected token: }"
    assert error.expected is None
    assert error.found is None


def test_error_message_for_expected_token():
    with pytest.raises(ParseError) as info:
        parse(tokenize("函数 (a) { }"))
    assert str(info.value) == "Parse Error at line 1, column 4: Expected IDENTIFIER but found LPAREN"
    assert info.value.expected == "IDENTIFIER"
    assert info.value.found == "LPAREN"


def test_unexpected_end_of_input():
    with pytest.raises(ParseError, match="Unexpected token: EOF"):
        parse(tokenize("令 x ="))


def test_unrecognized_character_is_a_parse_error():
    with pytest.raises(ParseError, match="Unexpected token: @"):
        parse(tokenize("x = @;"))


def test_parse_error_is_syntax_error():
    with pytest.raises(SyntaxError):
        parse(tokenize("如果 x { }"))


def test_parser_without_eof_token():
    tokens = tokenize("x;")[:-1]
    assert Parser(tokens).parse() == Program((ExpressionStatement(Identifier("x")),))


def test_node_unions():
    assert Identifier in get_args(Expression)
    assert ArrayPattern not in get_args(Expression)
    assert ArrayPattern not in get_args(Statement)
    assert Identifier not in get_args(Statement)
