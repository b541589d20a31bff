"""
tree-sitter based JavaScript/TypeScript parser.

Parses source text with the tree-sitter grammars and lifts the concrete syntax
tree into the node model of `jest_easy_mock.core.js.nodes`. Only the shapes the
rewriting core inspects are lifted into typed nodes (imports, expression
statements, calls, member access, identifiers, strings); everything else
becomes an `Opaque` node that keeps its children for traversal.
"""

import logging
from typing import Dict, List, Optional

import tree_sitter
import tree_sitter_javascript
import tree_sitter_typescript

from jest_easy_mock.core.js.nodes import (
  CallExpression,
  ExpressionStatement,
  Identifier,
  ImportDeclaration,
  ImportDefaultSpecifier,
  ImportNamespaceSpecifier,
  ImportSpecifier,
  JsNode,
  MemberExpression,
  Opaque,
  Origin,
  Program,
  StringLiteral,
)
from jest_easy_mock.enums import Dialect

logger = logging.getLogger(__name__)

_LANGUAGES: Dict[Dialect, tree_sitter.Language] = {
  Dialect.JAVASCRIPT: tree_sitter.Language(tree_sitter_javascript.language()),
  Dialect.TYPESCRIPT: tree_sitter.Language(tree_sitter_typescript.language_typescript()),
  Dialect.TSX: tree_sitter.Language(tree_sitter_typescript.language_tsx()),
}

_SIMPLE_ESCAPES = {
  "n": "\n",
  "r": "\r",
  "t": "\t",
  "b": "\b",
  "f": "\f",
  "v": "\v",
  "0": "\0",
}


class JsSyntaxError(ValueError):
  """
  Raised when the source contains syntax errors.

  Attributes:
      line: 1-based line of the first error.
      column: 0-based column of the first error.
  """

  def __init__(self, message: str, line: int = 0, column: int = 0):
    super().__init__(message)
    self.line = line
    self.column = column


class JsParser:
  """
  Parses one source file into a `Program`.
  """

  def __init__(self, dialect: Dialect = Dialect.JAVASCRIPT):
    self.dialect = Dialect(dialect)
    self._parser = tree_sitter.Parser(_LANGUAGES[self.dialect])

  def parse(self, code: str) -> Program:
    """
    Parses source text.

    Args:
        code: The file contents.

    Returns:
        Program: The lifted tree.

    Raises:
        JsSyntaxError: If tree-sitter reports error or missing nodes.
    """
    source = code.encode("utf-8")
    tree = self._parser.parse(source)
    root = tree.root_node
    if root.has_error:
      bad = _first_error(root) or root
      line, column = bad.start_point
      kind = "Missing" if bad.is_missing else "Unexpected"
      snippet = source[bad.start_byte : bad.end_byte].decode("utf-8", errors="replace")[:40]
      raise JsSyntaxError(
        f"{kind} syntax at line {line + 1}, column {column}: {snippet!r} ({self.dialect.value})",
        line=line + 1,
        column=column,
      )
    return _Lifter(source).lift_program(root)


def _first_error(node: tree_sitter.Node) -> Optional[tree_sitter.Node]:
  if node.is_error or node.is_missing:
    return node
  for child in node.children:
    if child.has_error or child.is_missing:
      found = _first_error(child)
      if found is not None:
        return found
  return None


def _named(node: tree_sitter.Node) -> List[tree_sitter.Node]:
  return [c for c in node.named_children if c.type != "comment"]


class _Lifter:
  """
  Converts tree-sitter nodes to `JsNode` instances over one source buffer.
  """

  def __init__(self, source: bytes):
    self.source = source

  def text(self, node: tree_sitter.Node) -> str:
    return self.source[node.start_byte : node.end_byte].decode("utf-8")

  def _finish(self, ts_node: tree_sitter.Node, node: JsNode) -> JsNode:
    node.origin = Origin(ts_node.start_byte, ts_node.end_byte, self.text(ts_node))
    for child in node.children():
      child.parent = node
    return node

  def lift_program(self, root: tree_sitter.Node) -> Program:
    # Comments stay in the body: they anchor where registrations are inserted.
    body = [self.lift(c) for c in root.named_children]
    program = Program(body=body, source=self.source)
    self._finish(root, program)
    return program

  def lift(self, node: tree_sitter.Node) -> JsNode:
    handler = getattr(self, f"_lift_{node.type}", None)
    lifted = handler(node) if handler else None
    if lifted is None:
      lifted = Opaque(type=node.type, nodes=[self.lift(c) for c in _named(node)])
    return self._finish(node, lifted)

  # --- Leaves ---

  def _lift_identifier(self, node: tree_sitter.Node) -> JsNode:
    return Identifier(self.text(node))

  def _lift_property_identifier(self, node: tree_sitter.Node) -> JsNode:
    return Identifier(self.text(node))

  def _lift_string(self, node: tree_sitter.Node) -> JsNode:
    return StringLiteral(self.string_value(node))

  def string_value(self, node: tree_sitter.Node) -> str:
    parts = []
    for child in node.named_children:
      if child.type == "escape_sequence":
        parts.append(_unescape(self.text(child)))
      elif child.type == "string_fragment":
        parts.append(self.text(child))
    return "".join(parts)

  # --- Expressions ---

  def _lift_member_expression(self, node: tree_sitter.Node) -> Optional[JsNode]:
    obj = node.child_by_field_name("object")
    prop = node.child_by_field_name("property")
    if obj is None or prop is None:
      return None
    if prop.type == "private_property_identifier":
      return None
    optional = node.child_by_field_name("optional_chain") is not None
    return MemberExpression(self.lift(obj), self.lift(prop), computed=False, optional=optional)

  def _lift_subscript_expression(self, node: tree_sitter.Node) -> Optional[JsNode]:
    obj = node.child_by_field_name("object")
    index = node.child_by_field_name("index")
    if obj is None or index is None:
      return None
    optional = node.child_by_field_name("optional_chain") is not None
    return MemberExpression(self.lift(obj), self.lift(index), computed=True, optional=optional)

  def _lift_call_expression(self, node: tree_sitter.Node) -> Optional[JsNode]:
    function = node.child_by_field_name("function")
    arguments = node.child_by_field_name("arguments")
    # Tagged templates and optional calls stay opaque.
    if function is None or arguments is None or arguments.type != "arguments":
      return None
    if node.child_by_field_name("optional_chain") is not None:
      return None
    return CallExpression(self.lift(function), [self.lift(a) for a in _named(arguments)])

  # --- Statements ---

  def _lift_expression_statement(self, node: tree_sitter.Node) -> Optional[JsNode]:
    children = _named(node)
    if len(children) != 1:
      return None
    return ExpressionStatement(self.lift(children[0]))

  def _lift_import_statement(self, node: tree_sitter.Node) -> Optional[JsNode]:
    source = node.child_by_field_name("source")
    if source is None:
      source = next((c for c in node.named_children if c.type == "string"), None)
    if source is None:
      # `import x = require("y")` and similar TypeScript forms.
      return None

    type_only = any(c.type in ("type", "typeof") for c in node.children)
    specifiers: List[JsNode] = []
    clause = next((c for c in node.named_children if c.type == "import_clause"), None)
    if clause is not None:
      for part in _named(clause):
        if part.type == "identifier":
          local = self._finish(part, Identifier(self.text(part)))
          specifiers.append(self._finish(part, ImportDefaultSpecifier(local)))
        elif part.type == "namespace_import":
          ident = next((c for c in part.named_children if c.type == "identifier"), None)
          if ident is not None:
            local = self._finish(ident, Identifier(self.text(ident)))
            specifiers.append(self._finish(part, ImportNamespaceSpecifier(local)))
        elif part.type == "named_imports":
          for spec in _named(part):
            if spec.type == "import_specifier":
              lifted = self._lift_import_specifier(spec)
              if lifted is not None:
                specifiers.append(lifted)

    return ImportDeclaration(self.lift(source), specifiers, type_only=type_only)

  def _lift_import_specifier(self, node: tree_sitter.Node) -> Optional[JsNode]:
    name = node.child_by_field_name("name")
    alias = node.child_by_field_name("alias")
    if name is None:
      return None
    if name.type == "string":
      imported: JsNode = self._finish(name, StringLiteral(self.string_value(name)))
    else:
      imported = self._finish(name, Identifier(self.text(name)))
    if alias is not None:
      local = self._finish(alias, Identifier(self.text(alias)))
    elif isinstance(imported, Identifier):
      local = self._finish(name, Identifier(imported.name))
    else:
      logger.debug("Skipping string import specifier without alias: %s", self.text(node))
      return None
    type_only = any(c.type in ("type", "typeof") for c in node.children)
    return self._finish(node, ImportSpecifier(imported, local, type_only=type_only))


def _unescape(sequence: str) -> str:
  body = sequence[1:]
  if not body:
    return ""
  if body[0] in _SIMPLE_ESCAPES and len(body) == 1:
    return _SIMPLE_ESCAPES[body[0]]
  if body[0] in ("x", "u"):
    digits = body[1:].strip("{}")
    try:
      return chr(int(digits, 16))
    except ValueError:
      return body
  if body[0] in ("\n", "\r"):
    # Line continuation.
    return ""
  return body
