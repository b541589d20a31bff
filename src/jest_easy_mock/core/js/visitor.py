"""
Traversal dispatch for the JavaScript node model.

Mirrors the LibCST visitor protocol: for each node, `visit_<ClassName>` is
called on the way down and `leave_<ClassName>` on the way up. Returning `False`
from a `visit_*` method skips that node's children.
"""

from typing import Optional

from jest_easy_mock.core.js.nodes import JsNode


class JsVisitor:
  """
  Base class for read-mostly passes over a lifted tree.
  """

  def walk(self, node: JsNode) -> None:
    """
    Visits `node` and, unless told otherwise, its descendants (depth-first,
    source order).

    Args:
        node: Subtree root.
    """
    name = type(node).__name__
    descend: Optional[bool] = None
    visit = getattr(self, f"visit_{name}", None)
    if visit is not None:
      descend = visit(node)

    if descend is not False:
      # Snapshot: callbacks may mutate child lists.
      for child in list(node.children()):
        self.walk(child)

    leave = getattr(self, f"leave_{name}", None)
    if leave is not None:
      leave(node)
