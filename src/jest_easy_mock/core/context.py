"""
Rewriter Context Module.

Holds the per-file state of one rewriting run. A context is created at the
start of a file, filled by the collection pass, consumed by aggregation and
emission, and then discarded. Nothing is shared between files.
"""

from typing import List

from jest_easy_mock.config import MockConfig
from jest_easy_mock.core.classifier import ExpressionClassifier
from jest_easy_mock.core.imports import ImportTable
from jest_easy_mock.core.js.nodes import CallExpression
from jest_easy_mock.core.registry import MockRequestRegistry
from jest_easy_mock.core.tracer import TraceLogger


class MockContext:
  """
  Shared state container for the collection, aggregation and emission passes.
  """

  def __init__(self, config: MockConfig):
    """
    Initializes an empty context.

    Args:
        config: The runtime configuration for the file.
    """
    self.config = config
    self.tracer = TraceLogger()
    self.classifier = ExpressionClassifier(config)

    # -- Core State --
    self.imports = ImportTable()
    self.registry = MockRequestRegistry(config.global_mock_identifier, tracer=self.tracer)

    # Module paths with an explicit jest.mock()/unmock() anywhere in the file.
    self.suppressed_modules: List[str] = []

    # Mock-request calls to delete, in file order.
    self.removals: List[CallExpression] = []

    # Filled by the emitter.
    self.emitted_modules: List[str] = []

  def suppress(self, module_path: str) -> None:
    """Records an explicit module mock for `module_path`."""
    if module_path not in self.suppressed_modules:
      self.suppressed_modules.append(module_path)
      self.tracer.log_suppressed(module_path)

  def is_suppressed(self, module_path: str) -> bool:
    return module_path in self.suppressed_modules

  def mark_for_removal(self, call: CallExpression) -> None:
    self.removals.append(call)
