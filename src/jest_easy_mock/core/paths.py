"""
Property-Path Resolution.

Decomposes identifier and member-access expressions into a root binding name
plus ordered property segments (`Utils.a.b` -> root 'Utils', segments ('a', 'b')).
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from jest_easy_mock.core.js.nodes import Identifier, JsNode, MemberExpression


@dataclass(frozen=True)
class PropertyPath:
  """
  A root binding name followed by zero or more property names.
  """

  root_name: str
  segments: Tuple[str, ...] = ()

  @property
  def last_name(self) -> str:
    """The final segment, or the root name when there are no segments."""
    return self.segments[-1] if self.segments else self.root_name

  @property
  def dotted(self) -> str:
    """Dot-joined root and segments (e.g. 'Utils.a.b')."""
    return ".".join((self.root_name, *self.segments))


def resolve_property_path(node: JsNode) -> Optional[PropertyPath]:
  """
  Resolves an expression to a property path.

  Only bare identifiers and chains of non-computed, non-optional member
  accesses rooted at an identifier are accepted.

  Args:
    node: Any expression node.

  Returns:
    PropertyPath or None if the expression has another shape (call result,
    bracket access, optional chaining, `this`, parenthesized base...).

  Example:
    >>> resolve_property_path(MemberExpression(Identifier("A"), Identifier("b")))
    PropertyPath(root_name='A', segments=('b',))
  """
  segments: List[str] = []
  current = node
  while isinstance(current, MemberExpression):
    if current.computed or current.optional or not isinstance(current.property, Identifier):
      return None
    segments.append(current.property.name)
    current = current.object
  if not isinstance(current, Identifier):
    return None
  segments.reverse()
  return PropertyPath(current.name, tuple(segments))


def get_full_name(node: JsNode) -> str:
  """
  Flattens a callee expression into a dot-separated name.

  Args:
    node: The callee node (e.g. `jest.mockObj`).

  Returns:
    str: The dotted name, or an empty string for unsupported shapes.
  """
  path = resolve_property_path(node)
  return path.dotted if path else ""
