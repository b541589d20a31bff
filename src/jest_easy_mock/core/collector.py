"""
Collection Pass.

A single forward traversal that fills the import table, the mock request
registry and the suppressed-module set of a `MockContext`. The tree is not
modified here; deletions are only marked.
"""

from typing import Optional

from jest_easy_mock.core.classifier import IgnoreCall, RequestCall
from jest_easy_mock.core.context import MockContext
from jest_easy_mock.core.js.nodes import CallExpression, ImportDeclaration
from jest_easy_mock.core.js.visitor import JsVisitor


class MockCallCollector(JsVisitor):
  """
  Visits import declarations and call expressions.
  """

  def __init__(self, context: MockContext):
    self.context = context

  def visit_ImportDeclaration(self, node: ImportDeclaration) -> Optional[bool]:
    self.context.imports.add_declaration(node)
    return False

  def visit_CallExpression(self, node: CallExpression) -> Optional[bool]:
    """
    Classifies the call. Removed mock requests are not traversed further,
    since their arguments leave the output with them.
    """
    result = self.context.classifier.classify(node)
    if isinstance(result, IgnoreCall):
      self.context.suppress(result.module_path)
    elif isinstance(result, RequestCall):
      self.context.registry.record_call(node, result.identifier)
      if result.identifier.remove:
        self.context.mark_for_removal(node)
        return False
    return None
