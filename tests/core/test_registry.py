"""
Tests for mock request recording and default replacements.
"""

from jest_easy_mock.config import RequestIdentifier
from jest_easy_mock.core.js import StringLiteral
from jest_easy_mock.core.registry import GeneratedMockFunction, MockRequestRegistry
from jest_easy_mock.core.tracer import TraceEventType, TraceLogger
from jest_easy_mock.enums import RequestKind

NAME = RequestIdentifier(name=".mockObj", kind=RequestKind.NAME_MOCK)
FUNC = RequestIdentifier(name=".mockFn", kind=RequestKind.FUNCTION_MOCK)


def _call(parse, code: str):
  return parse(f"{code};").body[0].expression


def test_name_mock_defaults_to_last_segment(parse):
  registry = MockRequestRegistry()
  recorded = registry.record_call(_call(parse, "jest.mockObj(A, Utils.x.Foo)"), NAME)

  assert [r.path.dotted for r in recorded] == ["A", "Utils.x.Foo"]
  assert isinstance(recorded[0].replacement, StringLiteral)
  assert recorded[0].replacement.to_js() == '"A"'
  assert recorded[1].replacement.to_js() == '"Foo"'
  assert recorded[1].segments == ("x", "Foo")


def test_function_mock_generates_named_fn(parse):
  registry = MockRequestRegistry(global_identifier="vi")
  (request,) = registry.record_call(_call(parse, "vi.mockFn(Utils.x.Foo)"), FUNC)

  replacement = request.replacement
  assert isinstance(replacement, GeneratedMockFunction)
  assert replacement.display_name == "Utils.x.Foo"
  assert replacement.to_js() == "vi.fn()"


def test_explicit_replacement(parse):
  registry = MockRequestRegistry()
  (request,) = registry.record_call(_call(parse, "jest.mockObj(A.b, () => 42)"), NAME)

  assert request.root_name == "A"
  assert request.segments == ("b",)
  assert request.replacement.to_js() == "() => 42"


def test_two_paths_are_two_targets(parse):
  registry = MockRequestRegistry()
  recorded = registry.record_call(_call(parse, "jest.mockObj(A, B.c)"), NAME)
  assert len(recorded) == 2
  assert registry.root_names() == ["A", "B"]


def test_spread_replacement_is_dropped(parse):
  tracer = TraceLogger()
  registry = MockRequestRegistry(tracer=tracer)
  recorded = registry.record_call(_call(parse, "jest.mockObj(A, ...rest)"), NAME)

  assert recorded == []
  assert len(registry) == 0
  assert tracer.events_of(TraceEventType.REQUEST_DROPPED)


def test_unresolvable_targets_are_skipped(parse):
  tracer = TraceLogger()
  registry = MockRequestRegistry(tracer=tracer)
  recorded = registry.record_call(_call(parse, 'jest.mockObj(A["b"], foo(), C)'), NAME)

  assert [r.root_name for r in recorded] == ["C"]
  assert len(tracer.events_of(TraceEventType.REQUEST_DROPPED)) == 2


def test_requests_grouped_by_root_in_order(parse):
  registry = MockRequestRegistry()
  registry.record_call(_call(parse, "jest.mockObj(A.x)"), NAME)
  registry.record_call(_call(parse, "jest.mockObj(B)"), NAME)
  registry.record_call(_call(parse, "jest.mockObj(A.y)"), NAME)

  assert [r.segments for r in registry.requests_for("A")] == [("x",), ("y",)]
  assert registry.requests_for("missing") == []
  assert len(registry) == 3
