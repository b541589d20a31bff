"""
Mock Request Registry.

Turns matched mock-request calls into `MockRequest` records, grouped by root
binding name in file order.

Argument handling of `jest.mockObj(...)` / `jest.mockFn(...)`:

- `jest.mockObj(A, <expr>)`, where `<expr>` is neither an identifier nor a
  member expression: `<expr>` replaces `A`.
- Otherwise each argument is a separate target with the default replacement:
  the export name as a string (NAME_MOCK) or a generated `jest.fn()` carrying
  the dotted path as display name (FUNCTION_MOCK).
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from jest_easy_mock.config import RequestIdentifier
from jest_easy_mock.core.js.nodes import (
  CallExpression,
  Identifier,
  JsNode,
  MemberExpression,
  Opaque,
  StringLiteral,
)
from jest_easy_mock.core.paths import PropertyPath, resolve_property_path
from jest_easy_mock.core.tracer import TraceLogger
from jest_easy_mock.enums import RequestKind

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class GeneratedMockFunction(JsNode):
  """
  A synthesized `jest.fn()` standing in for a mocked export.

  `display_name` is applied by the emitter through `.mockName(...)` once the
  final location of the function in the factory object is known.
  """

  global_identifier: str
  display_name: str

  def synthesize(self, indent: int) -> str:
    return f"{self.global_identifier}.fn()"


@dataclass(frozen=True)
class MockRequest:
  """
  One request to replace `root_name.segments...` by `replacement`.
  """

  root_name: str
  segments: Tuple[str, ...]
  kind: RequestKind
  replacement: JsNode

  @property
  def path(self) -> PropertyPath:
    return PropertyPath(self.root_name, self.segments)


def _is_path_like(node: JsNode) -> bool:
  return isinstance(node, (Identifier, MemberExpression))


def _is_spread(node: JsNode) -> bool:
  return isinstance(node, Opaque) and node.type == "spread_element"


class MockRequestRegistry:
  """
  Ordered mock requests per root binding name.
  """

  def __init__(self, global_identifier: str = "jest", tracer: Optional[TraceLogger] = None):
    self.global_identifier = global_identifier
    self.tracer = tracer or TraceLogger()
    self._requests: Dict[str, List[MockRequest]] = {}

  def record_call(self, call: CallExpression, identifier: RequestIdentifier) -> List[MockRequest]:
    """
    Records the requests expressed by one mock-request call.

    Args:
        call: The matched call expression.
        identifier: The configuration entry that matched it.

    Returns:
        List[MockRequest]: Requests appended to the registry, in argument order.
    """
    args = call.arguments
    if len(args) == 2 and not _is_path_like(args[1]):
      target, replacement = args
      if _is_spread(replacement):
        self.tracer.log_dropped(replacement.to_js(), "spread element cannot be a replacement")
        return []
      request = self.add(target, identifier.kind, replacement)
      return [request] if request else []

    recorded = []
    for arg in args:
      request = self.add(arg, identifier.kind)
      if request:
        recorded.append(request)
    return recorded

  def add(self, target: JsNode, kind: RequestKind, replacement: Optional[JsNode] = None) -> Optional[MockRequest]:
    """
    Resolves one target expression and appends a request for it.

    Args:
        target: The expression naming the mocked symbol (`A`, `A.b`).
        kind: Default replacement policy.
        replacement: Explicit replacement, or None for the default.

    Returns:
        The recorded request, or None if the target has an unsupported shape.
    """
    path = resolve_property_path(target)
    if path is None:
      source = target.to_js() if target.origin else type(target).__name__
      logger.debug("Skipping unresolvable mock target: %s", source)
      self.tracer.log_dropped(source, "not an identifier or property path")
      return None

    explicit = replacement is not None
    if replacement is None:
      replacement = self.default_replacement(path, kind)

    request = MockRequest(path.root_name, path.segments, kind, replacement)
    self._requests.setdefault(path.root_name, []).append(request)
    self.tracer.log_request(path.dotted, kind.value, explicit)
    return request

  def default_replacement(self, path: PropertyPath, kind: RequestKind) -> JsNode:
    """
    Builds the replacement used when a call site supplies none.

    Args:
        path: Resolved target path.
        kind: NAME_MOCK or FUNCTION_MOCK.

    Returns:
        JsNode: `"<last name>"` or a `GeneratedMockFunction`.
    """
    if kind == RequestKind.FUNCTION_MOCK:
      return GeneratedMockFunction(self.global_identifier, path.dotted)
    return StringLiteral(path.last_name)

  def requests_for(self, root_name: str) -> List[MockRequest]:
    """Requests for a root binding name, in file order."""
    return list(self._requests.get(root_name, []))

  def root_names(self) -> List[str]:
    return list(self._requests)

  def __len__(self) -> int:
    return sum(len(v) for v in self._requests.values())
