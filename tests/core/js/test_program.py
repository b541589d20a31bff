"""
Tests for the lossless Program printer and its mutation methods.
"""

import pytest

from jest_easy_mock.core.js import (
  BlockStatement,
  BooleanLiteral,
  CallExpression,
  ExpressionStatement,
  Identifier,
  MemberExpression,
  ObjectExpression,
  ObjectProperty,
  ReturnStatement,
  SpreadElement,
  StringLiteral,
  VariableDeclaration,
)
from jest_easy_mock.core.js.nodes import ArrowFunctionExpression, in_statement_list


def _stmt(name: str) -> ExpressionStatement:
  return ExpressionStatement(CallExpression(Identifier(name), []))


def test_unmodified_program_roundtrips_exactly(parse):
  source = "#!/usr/bin/env node\n'use strict';\n// c\nimport  A   from './a' ;\n\nfoo( A );\n"
  program = parse(source)
  assert program.edits == []
  assert program.to_js() == source


def test_insert_before_first_statement(parse):
  program = parse("import A from './a';\nfoo();\n")
  program.insert_statements([_stmt("first"), _stmt("second")])

  assert program.to_js() == "first();\nsecond();\nimport A from './a';\nfoo();\n"
  assert program.body[0].expression.callee.name == "first"
  assert program.body[0].parent is program


def test_insert_before_leading_comment(parse):
  program = parse("// license\nfoo();\n")
  program.insert_statements([_stmt("reg")])
  assert program.to_js() == "reg();\n// license\nfoo();\n"


def test_insert_after_directive_prologue(parse):
  program = parse('"use strict";\nfoo();\n')
  assert program.prologue_length() == 1

  program.insert_statements([_stmt("reg")])
  assert program.to_js() == '"use strict";\nreg();\nfoo();\n'


def test_insert_after_directive_behind_leading_comment(parse):
  program = parse('// header\n"use strict";\nfoo();\n')
  assert program.prologue_length() == 2

  program.insert_statements([_stmt("reg")])
  assert program.to_js() == '// header\n"use strict";\nreg();\nfoo();\n'


def test_comment_after_prologue_stays_below_insertion(parse):
  program = parse('"use strict";\n// about foo\nfoo();\n')
  assert program.prologue_length() == 1

  program.insert_statements([_stmt("reg")])
  assert program.to_js() == '"use strict";\nreg();\n// about foo\nfoo();\n'


def test_in_statement_list(parse):
  program = parse("a();\nif (x) b();\nwhile (y) { c(); }\n")
  assert in_statement_list(program.body[0]) is True

  sole_body = program.body[1].children()[-1]
  assert isinstance(sole_body, ExpressionStatement)
  assert in_statement_list(sole_body) is False

  block = program.body[2].children()[-1]
  assert in_statement_list(block.children()[0]) is True


def test_lifted_only_nodes_cannot_be_synthesized(parse):
  decl = parse("import A from './a';\n").body[0]
  decl.origin = None
  with pytest.raises(ValueError):
    decl.to_js()


def test_insert_after_hashbang(parse):
  program = parse("#!/usr/bin/env node\nfoo();\n")
  program.insert_statements([_stmt("reg")])
  assert program.to_js() == "#!/usr/bin/env node\nreg();\nfoo();\n"


def test_insert_into_empty_program(parse):
  program = parse("")
  program.insert_statements([_stmt("reg")])
  assert program.to_js() == "reg();\n"


def test_remove_statement_alone_on_line(parse):
  program = parse("a();\nb();\nc();\n")
  target = program.body[1]
  program.remove(target)

  assert program.to_js() == "a();\nc();\n"
  assert target not in program.body
  assert target.parent is None


def test_remove_statement_sharing_a_line(parse):
  program = parse("a(); b(); c();\n")
  program.remove(program.body[1])
  assert program.to_js() == "a(); c();\n"


def test_remove_adjacent_statements_on_one_line(parse):
  program = parse("keep();\na(); b();\n")
  program.remove(program.body[1])
  program.remove(program.body[1])
  assert program.to_js() == "keep();\n\n"


def test_remove_nested_statement(parse):
  program = parse("test('x', () => {\n  a();\n  b();\n});\n")
  arrow = program.body[0].expression.arguments[1]
  block = arrow.children()[-1]
  first = block.children()[0]

  program.remove(first)
  assert program.to_js() == "test('x', () => {\n  b();\n});\n"


def test_replace_expression(parse):
  program = parse("const x = foo(1);\n")
  call = program.body[0].children()[0].children()[1]
  assert isinstance(call, CallExpression)

  program.replace(call, Identifier("undefined"))
  assert program.to_js() == "const x = undefined;\n"


def test_remove_requires_origin(parse):
  program = parse("a();\n")
  with pytest.raises(ValueError):
    program.remove(_stmt("synthetic"))


def test_synthesized_object_layout():
  obj = ObjectExpression(
    [
      SpreadElement(Identifier("base")),
      ObjectProperty(StringLiteral("a"), StringLiteral("A")),
      ObjectProperty(StringLiteral("n"), ObjectExpression([ObjectProperty(Identifier("x"), BooleanLiteral(True))])),
    ]
  )
  assert obj.to_js() == '{\n  ...base,\n  "a": "A",\n  "n": {\n    x: true\n  }\n}'
  assert ObjectExpression().to_js() == "{}"


def test_synthesized_arrow_with_block():
  fn = ArrowFunctionExpression(
    [],
    BlockStatement(
      [
        VariableDeclaration("const", Identifier("m"), MemberExpression(Identifier("a"), StringLiteral("b"), computed=True)),
        ReturnStatement(Identifier("m")),
      ]
    ),
  )
  assert fn.to_js() == '() => {\n  const m = a["b"];\n  return m;\n}'


def test_string_literal_escaping():
  assert StringLiteral('a"b').to_js() == '"a\\"b"'
