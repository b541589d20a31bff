"""
JavaScript Syntax Nodes.

This module defines a small ESTree-shaped node model. Nodes are produced in two
ways:

1.  **Lifted** by `JsParser` from a tree-sitter parse. Such nodes carry an
    `Origin` (byte span plus original text) and a `parent` link. Their `to_js()`
    returns the original text unchanged.
2.  **Synthesized** by the emitter through plain constructor calls. Their
    `to_js()` renders fresh source text.

Shapes the rewriting core does not need to understand are lifted as `Opaque`
nodes, which still expose their children so that traversal reaches nested call
expressions.

The `Program` root records edits (insertions, removals, replacements) and
renders them over the original source, so untouched code is reproduced
byte-for-byte.
"""

import dataclasses
import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, List, Optional

INDENT = "  "

# Lifted containers whose statements sit in a list and can be dropped freely.
STATEMENT_LIST_TYPES = ("statement_block", "switch_case", "switch_default")


@dataclass(frozen=True)
class Origin:
  """
  Location of a lifted node in the original source.

  Attributes:
      start: Start byte offset.
      end: End byte offset (exclusive).
      text: Decoded source text of the span.
  """

  start: int
  end: int
  text: str


class JsNode(ABC):
  """
  Abstract base class for all syntax nodes.

  `origin` and `parent` are plain class attributes rather than dataclass fields,
  so subclasses can be constructed positionally. The parser assigns both after
  construction.
  """

  origin: Optional[Origin] = None
  parent: Optional["JsNode"] = None

  def children(self) -> List["JsNode"]:
    """
    Returns the direct child nodes in source order.
    """
    return []

  def visit(self, visitor: Any) -> None:
    """
    Runs a `JsVisitor` over this subtree.

    Args:
        visitor: The visitor instance.
    """
    visitor.walk(self)

  def to_js(self, indent: int = 0) -> str:
    """
    Serializes the node to JavaScript source.

    Args:
        indent: Nesting level used when synthesizing multi-line output.

    Returns:
        str: Original text for lifted nodes, generated text otherwise.
    """
    if self.origin is not None:
      return self.origin.text
    return self.synthesize(indent)

  @abstractmethod
  def synthesize(self, indent: int) -> str:
    """Renders a node built by code (no origin)."""
    pass


# --- Expressions ---


@dataclass(eq=False)
class Identifier(JsNode):
  name: str

  def synthesize(self, indent: int) -> str:
    return self.name


@dataclass(eq=False)
class StringLiteral(JsNode):
  """
  A string literal. `value` holds the decoded (unquoted) string.
  """

  value: str

  def synthesize(self, indent: int) -> str:
    # JSON string syntax is a valid JS double-quoted string.
    return json.dumps(self.value)


@dataclass(eq=False)
class BooleanLiteral(JsNode):
  value: bool

  def synthesize(self, indent: int) -> str:
    return "true" if self.value else "false"


@dataclass(eq=False)
class MemberExpression(JsNode):
  """
  Property access: `object.property` or, when `computed`, `object[property]`.

  `optional` marks optional chaining (`object?.property`).
  """

  object: JsNode
  property: JsNode
  computed: bool = False
  optional: bool = False

  def children(self) -> List[JsNode]:
    return [self.object, self.property]

  def synthesize(self, indent: int) -> str:
    obj = self.object.to_js(indent)
    if self.computed:
      return f"{obj}{'?.' if self.optional else ''}[{self.property.to_js(indent)}]"
    return f"{obj}{'?.' if self.optional else '.'}{self.property.to_js(indent)}"


@dataclass(eq=False)
class CallExpression(JsNode):
  callee: JsNode
  arguments: List[JsNode] = field(default_factory=list)

  def children(self) -> List[JsNode]:
    return [self.callee, *self.arguments]

  def synthesize(self, indent: int) -> str:
    args = ", ".join(a.to_js(indent) for a in self.arguments)
    return f"{self.callee.to_js(indent)}({args})"


@dataclass(eq=False)
class SpreadElement(JsNode):
  argument: JsNode

  def children(self) -> List[JsNode]:
    return [self.argument]

  def synthesize(self, indent: int) -> str:
    return f"...{self.argument.to_js(indent)}"


@dataclass(eq=False)
class ObjectProperty(JsNode):
  key: JsNode
  value: JsNode

  def children(self) -> List[JsNode]:
    return [self.key, self.value]

  def synthesize(self, indent: int) -> str:
    return f"{self.key.to_js(indent)}: {self.value.to_js(indent)}"


@dataclass(eq=False)
class ObjectExpression(JsNode):
  """
  Object literal. Members are `ObjectProperty` or `SpreadElement` nodes and are
  rendered one per line.
  """

  properties: List[JsNode] = field(default_factory=list)

  def children(self) -> List[JsNode]:
    return list(self.properties)

  def synthesize(self, indent: int) -> str:
    if not self.properties:
      return "{}"
    pad = INDENT * (indent + 1)
    members = ",\n".join(f"{pad}{p.to_js(indent + 1)}" for p in self.properties)
    return f"{{\n{members}\n{INDENT * indent}}}"


@dataclass(eq=False)
class ArrowFunctionExpression(JsNode):
  params: List[Identifier] = field(default_factory=list)
  body: Optional["BlockStatement"] = None

  def children(self) -> List[JsNode]:
    return [*self.params, *([self.body] if self.body else [])]

  def synthesize(self, indent: int) -> str:
    params = ", ".join(p.to_js(indent) for p in self.params)
    body = self.body.to_js(indent) if self.body else "{}"
    return f"({params}) => {body}"


@dataclass(eq=False)
class Opaque(JsNode):
  """
  Any lifted syntax the rewriting core does not model explicitly.

  Attributes:
      type: The tree-sitter node type (e.g. `arrow_function`, `comment`).
      nodes: Lifted named children, kept for traversal.
  """

  type: str
  nodes: List[JsNode] = field(default_factory=list)

  def children(self) -> List[JsNode]:
    return list(self.nodes)

  def synthesize(self, indent: int) -> str:
    raise ValueError(f"Opaque '{self.type}' node has no source text to render")


# --- Statements ---


@dataclass(eq=False)
class ExpressionStatement(JsNode):
  expression: JsNode

  def children(self) -> List[JsNode]:
    return [self.expression]

  @property
  def is_directive(self) -> bool:
    """True for prologue-style string statements such as `"use strict";`."""
    return isinstance(self.expression, StringLiteral)

  def synthesize(self, indent: int) -> str:
    return f"{self.expression.to_js(indent)};"


@dataclass(eq=False)
class VariableDeclaration(JsNode):
  """
  Single-declarator variable declaration (`const id = init;`).
  """

  kind: str
  id: Identifier
  init: JsNode

  def children(self) -> List[JsNode]:
    return [self.id, self.init]

  def synthesize(self, indent: int) -> str:
    return f"{self.kind} {self.id.to_js(indent)} = {self.init.to_js(indent)};"


@dataclass(eq=False)
class ReturnStatement(JsNode):
  argument: Optional[JsNode] = None

  def children(self) -> List[JsNode]:
    return [self.argument] if self.argument else []

  def synthesize(self, indent: int) -> str:
    if self.argument is None:
      return "return;"
    return f"return {self.argument.to_js(indent)};"


@dataclass(eq=False)
class BlockStatement(JsNode):
  body: List[JsNode] = field(default_factory=list)

  def children(self) -> List[JsNode]:
    return list(self.body)

  def synthesize(self, indent: int) -> str:
    if not self.body:
      return "{}"
    pad = INDENT * (indent + 1)
    lines = "\n".join(f"{pad}{s.to_js(indent + 1)}" for s in self.body)
    return f"{{\n{lines}\n{INDENT * indent}}}"


# --- Imports ---


class _LiftedOnly(JsNode):
  """Nodes that only ever come from the parser and are never built by code."""

  def synthesize(self, indent: int) -> str:
    raise ValueError(f"{type(self).__name__} nodes are only produced by the parser")


@dataclass(eq=False)
class ImportDefaultSpecifier(_LiftedOnly):
  local: Identifier

  def children(self) -> List[JsNode]:
    return [self.local]


@dataclass(eq=False)
class ImportNamespaceSpecifier(_LiftedOnly):
  local: Identifier

  def children(self) -> List[JsNode]:
    return [self.local]


@dataclass(eq=False)
class ImportSpecifier(_LiftedOnly):
  """
  Named import specifier. `imported` is an Identifier, or a StringLiteral for
  arbitrary module export names (`import { "a-b" as ab }`).
  """

  imported: JsNode
  local: Identifier
  type_only: bool = False

  def children(self) -> List[JsNode]:
    return [self.imported, self.local]

  @property
  def imported_name(self) -> str:
    if isinstance(self.imported, StringLiteral):
      return self.imported.value
    if isinstance(self.imported, Identifier):
      return self.imported.name
    return self.imported.to_js()


@dataclass(eq=False)
class ImportDeclaration(_LiftedOnly):
  source: StringLiteral
  specifiers: List[JsNode] = field(default_factory=list)
  type_only: bool = False

  def children(self) -> List[JsNode]:
    return [*self.specifiers, self.source]


# --- Root ---


@dataclass(frozen=True)
class Edit:
  """
  A pending text edit against the original program source (byte offsets).
  An insertion has `start == end`.
  """

  start: int
  end: int
  text: str


@dataclass(eq=False)
class Program(JsNode):
  """
  Root node of a parsed file.

  The tree is mutated through `insert_statements`, `remove` and `replace`. Each
  mutation updates the node structure and records an `Edit`; `to_js()` applies
  the edits to the original source.
  """

  body: List[JsNode] = field(default_factory=list)
  source: bytes = b""
  edits: List[Edit] = field(default_factory=list, repr=False)

  def children(self) -> List[JsNode]:
    return list(self.body)

  def prologue_length(self) -> int:
    """
    Counts leading body elements that must stay first: a hashbang line
    and a directive prologue (`"use strict";`). Comments inside the prologue
    are skipped over; those after its last directive are not counted.
    """
    count = 0
    for index, stmt in enumerate(self.body):
      if isinstance(stmt, Opaque) and stmt.type == "comment":
        continue
      if isinstance(stmt, Opaque) and stmt.type == "hash_bang_line":
        count = index + 1
      elif isinstance(stmt, ExpressionStatement) and stmt.is_directive:
        count = index + 1
      else:
        break
    return count

  def insert_statements(self, statements: List[JsNode]) -> None:
    """
    Inserts synthesized statements at the top of the body, after the prologue.

    Args:
        statements: Nodes without origin, inserted in the given order.
    """
    if not statements:
      return
    index = self.prologue_length()
    rendered = "\n".join(s.to_js() for s in statements)

    if index > 0:
      anchor = self.body[index - 1]
      offset = anchor.origin.end if anchor.origin else len(self.source)
      text = f"\n{rendered}"
    elif self.body and self.body[0].origin is not None:
      offset = self._line_start(self.body[0].origin.start)
      text = f"{rendered}\n"
    else:
      offset = len(self.source)
      lead = "\n" if self.source and not self.source.endswith(b"\n") else ""
      text = f"{lead}{rendered}\n"

    for stmt in statements:
      stmt.parent = self
    self.body[index:index] = statements
    self.edits.append(Edit(offset, offset, text))

  def remove(self, node: JsNode) -> None:
    """
    Removes a lifted statement, together with the line it occupied when the
    statement was alone on that line.

    Args:
        node: A node with an origin somewhere in this program.
    """
    if node.origin is None:
      raise ValueError("Only lifted nodes can be removed from the source")
    if node.parent is not None:
      _detach(node.parent, node)
      node.parent = None
    start, end = self._removal_span(node.origin.start, node.origin.end)
    self.edits.append(Edit(start, end, ""))

  def replace(self, node: JsNode, replacement: JsNode) -> None:
    """
    Swaps a lifted node for another node in place.

    Args:
        node: The lifted node to replace.
        replacement: Its substitute (usually synthesized).
    """
    if node.origin is None:
      raise ValueError("Only lifted nodes can be replaced in the source")
    if node.parent is not None:
      _substitute(node.parent, node, replacement)
      replacement.parent = node.parent
      node.parent = None
    self.edits.append(Edit(node.origin.start, node.origin.end, replacement.to_js()))

  def to_js(self, indent: int = 0) -> str:
    if not self.edits:
      return self.source.decode("utf-8")
    out: List[bytes] = []
    cursor = 0
    for edit in sorted(self.edits, key=lambda e: (e.start, e.end)):
      start = edit.start
      if start < cursor:
        # Deletions may share surrounding whitespace; anything else here is
        # nested inside an edit that already rewrote this region.
        if edit.text or edit.end <= cursor:
          continue
        start = cursor
      out.append(self.source[cursor:start])
      out.append(edit.text.encode("utf-8"))
      cursor = edit.end
    out.append(self.source[cursor:])
    return b"".join(out).decode("utf-8")

  def synthesize(self, indent: int) -> str:
    return "\n".join(s.to_js(indent) for s in self.body)

  def _line_start(self, offset: int) -> int:
    pos = offset
    while pos > 0 and self.source[pos - 1 : pos] in (b" ", b"\t"):
      pos -= 1
    if pos == 0 or self.source[pos - 1 : pos] == b"\n":
      return pos
    return offset

  def _removal_span(self, start: int, end: int):
    src = self.source
    left = start
    while left > 0 and src[left - 1 : left] in (b" ", b"\t"):
      left -= 1
    right = end
    while right < len(src) and src[right : right + 1] in (b" ", b"\t", b"\r"):
      right += 1
    at_line_start = left == 0 or src[left - 1 : left] == b"\n"
    at_line_end = right == len(src) or src[right : right + 1] == b"\n"

    if at_line_start and at_line_end:
      return left, min(right + 1, len(src))
    if at_line_start:
      return start, right
    return left, end


def _detach(parent: JsNode, child: JsNode) -> None:
  for f in dataclasses.fields(parent):
    value = getattr(parent, f.name)
    if isinstance(value, list):
      for i, item in enumerate(value):
        if item is child:
          del value[i]
          return


def _substitute(parent: JsNode, old: JsNode, new: JsNode) -> None:
  for f in dataclasses.fields(parent):
    value = getattr(parent, f.name)
    if value is old:
      setattr(parent, f.name, new)
      return
    if isinstance(value, list):
      for i, item in enumerate(value):
        if item is old:
          value[i] = new
          return


def in_statement_list(node: JsNode) -> bool:
  """
  True when `node` is one entry of a statement list (program or block body),
  as opposed to the single body of an `if`, loop or labeled statement.
  """
  parent = node.parent
  if isinstance(parent, (Program, BlockStatement)):
    return True
  return isinstance(parent, Opaque) and parent.type in STATEMENT_LIST_TYPES
