"""
Tests for the tree-sitter lifting layer.

Verifies:
1. Import declarations of every binding form.
2. Call / member expressions and their shapes.
3. Opaque fallback and parent links.
4. Syntax error reporting.
"""

import pytest

from jest_easy_mock.core.js import (
  CallExpression,
  ExpressionStatement,
  Identifier,
  ImportDeclaration,
  ImportDefaultSpecifier,
  ImportNamespaceSpecifier,
  ImportSpecifier,
  JsParser,
  JsSyntaxError,
  MemberExpression,
  Opaque,
  StringLiteral,
)
from jest_easy_mock.enums import Dialect


def test_default_and_named_imports(parse):
  program = parse('import A, { b, c as d } from "./mod";\n')
  decl = program.body[0]

  assert isinstance(decl, ImportDeclaration)
  assert decl.source.value == "./mod"
  assert [type(s) for s in decl.specifiers] == [ImportDefaultSpecifier, ImportSpecifier, ImportSpecifier]
  assert decl.specifiers[0].local.name == "A"
  assert decl.specifiers[1].imported_name == "b"
  assert decl.specifiers[1].local.name == "b"
  assert decl.specifiers[2].imported_name == "c"
  assert decl.specifiers[2].local.name == "d"


def test_namespace_import(parse):
  program = parse("import * as Utils from '../utils';")
  decl = program.body[0]

  assert isinstance(decl.specifiers[0], ImportNamespaceSpecifier)
  assert decl.specifiers[0].local.name == "Utils"
  assert decl.source.value == "../utils"


def test_side_effect_import_has_no_specifiers(parse):
  decl = parse('import "./setup";').body[0]
  assert isinstance(decl, ImportDeclaration)
  assert decl.specifiers == []


def test_string_escape_is_decoded(parse):
  decl = parse('import A from "./a\\u0062";').body[0]
  assert decl.source.value == "./ab"


def test_member_call_expression(parse):
  stmt = parse("jest.mockObj(Utils.a, 42);").body[0]

  assert isinstance(stmt, ExpressionStatement)
  call = stmt.expression
  assert isinstance(call, CallExpression)
  assert isinstance(call.callee, MemberExpression)
  assert call.callee.object.name == "jest"
  assert call.callee.property.name == "mockObj"

  first, second = call.arguments
  assert isinstance(first, MemberExpression)
  assert isinstance(second, Opaque)
  assert second.to_js() == "42"


def test_computed_and_optional_member(parse):
  computed = parse('A["b"];').body[0].expression
  optional = parse("A?.b;").body[0].expression

  assert isinstance(computed, MemberExpression) and computed.computed
  assert isinstance(computed.property, StringLiteral)
  assert isinstance(optional, MemberExpression) and optional.optional


def test_unknown_shapes_stay_opaque_but_traversable(parse):
  program = parse("describe('x', () => { jest.mockFn(A); });")
  call = program.body[0].expression
  arrow = call.arguments[1]

  assert isinstance(arrow, Opaque)
  assert arrow.type == "arrow_function"

  found = []

  def collect(node):
    if isinstance(node, CallExpression):
      found.append(node)
    for child in node.children():
      collect(child)

  collect(arrow)
  assert len(found) == 1
  assert found[0].to_js() == "jest.mockFn(A)"


def test_parent_links_and_origins(parse):
  source = "foo(bar);"
  program = parse(source)
  stmt = program.body[0]
  call = stmt.expression

  assert stmt.parent is program
  assert call.parent is stmt
  assert call.arguments[0].parent is call
  assert call.origin.start == 0
  assert call.origin.end == len("foo(bar)")
  assert isinstance(call.arguments[0], Identifier)


def test_comments_kept_in_program_body(parse):
  program = parse("// header\nfoo();\n")
  assert isinstance(program.body[0], Opaque)
  assert program.body[0].type == "comment"


def test_syntax_error_raises():
  with pytest.raises(JsSyntaxError) as excinfo:
    JsParser().parse("import A from ;\nfoo(")
  assert isinstance(excinfo.value, ValueError)
  assert excinfo.value.line >= 1


def test_typescript_type_only_import():
  program = JsParser(Dialect.TYPESCRIPT).parse('import type { T } from "./types";\nconst x: number = 1;\n')
  decl = program.body[0]
  assert isinstance(decl, ImportDeclaration)
  assert decl.type_only is True


def test_tsx_dialect_parses_jsx():
  program = JsParser("tsx").parse("const el = <div>{x as number}</div>;")
  assert len(program.body) == 1
