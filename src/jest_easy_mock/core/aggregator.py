"""
Module Mock Aggregator.

Joins the import table against the mock request registry once the whole file
has been collected, and produces one `ModuleMockFactory` per mocked module.

Export keys:

- default bindings map to `"default"`, named bindings to the imported name;
  the first request segment (if any) becomes a sub-key, deeper paths are dropped.
- namespace bindings take the export key from the first segment and the
  sub-key from the second; zero or more than two segments are dropped.

Entries for the same key are replayed in order: a flat entry replaces the whole
value, a sub-keyed entry turns the value into an object (keeping sub-keys set
since the last flat entry) and sets that sub-key.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union

from jest_easy_mock.core.context import MockContext
from jest_easy_mock.core.imports import ImportBinding
from jest_easy_mock.core.js.nodes import JsNode
from jest_easy_mock.core.registry import MockRequest
from jest_easy_mock.enums import BindingKind

logger = logging.getLogger(__name__)

# (replacement, sub-key) in application order.
Entry = Tuple[JsNode, Optional[str]]


@dataclass
class FlatValue:
  replacement: JsNode


@dataclass
class NestedValue:
  entries: Dict[str, JsNode] = field(default_factory=dict)


ExportValue = Union[FlatValue, NestedValue]


@dataclass
class ModuleMockFactory:
  """
  Synthesized mock definition of one module.

  Attributes:
      module_path: Import source string.
      exports: Export key -> resolved value, in discovery order.
  """

  module_path: str
  exports: Dict[str, ExportValue] = field(default_factory=dict)

  @property
  def has_nested(self) -> bool:
    return any(isinstance(v, NestedValue) for v in self.exports.values())


def resolve_entries(entries: List[Entry]) -> Optional[ExportValue]:
  """
  Replays the entries of one export key.

  Args:
      entries: (replacement, sub-key) pairs in order.

  Returns:
      The final value, or None if there were no entries.
  """
  current: Optional[ExportValue] = None
  for replacement, sub_key in entries:
    if sub_key is None:
      current = FlatValue(replacement)
    else:
      if not isinstance(current, NestedValue):
        current = NestedValue()
      current.entries[sub_key] = replacement
  return current


class ModuleMockAggregator:
  """
  Builds module factories from a collected `MockContext`.
  """

  def __init__(self, context: MockContext):
    self.context = context

  def aggregate(self) -> List[ModuleMockFactory]:
    """
    Produces factories for every non-suppressed module with resolvable exports.

    Returns:
        List[ModuleMockFactory]: In first-import order.
    """
    self._trace_unbound_roots()
    factories: List[ModuleMockFactory] = []
    for module_path in self.context.imports.modules():
      if self.context.is_suppressed(module_path):
        logger.debug("Module '%s' already mocked explicitly, skipping", module_path)
        continue
      factory = self.build_factory(module_path, self.context.imports.bindings_for(module_path))
      if factory is not None:
        factories.append(factory)
    return factories

  def build_factory(self, module_path: str, bindings: List[ImportBinding]) -> Optional[ModuleMockFactory]:
    """
    Builds the factory of a single module.

    Args:
        module_path: The module.
        bindings: Its import bindings in declaration order.

    Returns:
        ModuleMockFactory, or None if no export received a value.
    """
    per_key: Dict[str, List[Entry]] = {}
    for binding in bindings:
      for request in self.context.registry.requests_for(binding.local_name):
        placed = self._place(binding, request)
        if placed is None:
          continue
        key, sub_key = placed
        per_key.setdefault(key, []).append((request.replacement, sub_key))

    factory = ModuleMockFactory(module_path)
    for key, entries in per_key.items():
      value = resolve_entries(entries)
      if value is not None:
        factory.exports[key] = value
    if not factory.exports:
      return None
    return factory

  def _place(self, binding: ImportBinding, request: MockRequest) -> Optional[Tuple[str, Optional[str]]]:
    segments = request.segments
    if binding.kind == BindingKind.NAMESPACE:
      if len(segments) not in (1, 2):
        reason = "namespace import needs an export name" if not segments else "nesting deeper than one level"
        self.context.tracer.log_dropped(request.path.dotted, reason)
        return None
      return segments[0], (segments[1] if len(segments) == 2 else None)

    if len(segments) > 1:
      self.context.tracer.log_dropped(request.path.dotted, "nesting deeper than one level")
      return None
    return binding.export_key, (segments[0] if segments else None)

  def _trace_unbound_roots(self) -> None:
    for root in self.context.registry.root_names():
      if self.context.imports.lookup(root) is None:
        self.context.tracer.log_dropped(root, "no import binding")
