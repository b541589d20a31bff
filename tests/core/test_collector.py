"""
Tests for the collection pass.
"""

from jest_easy_mock.config import MockConfig, RequestIdentifier
from jest_easy_mock.core.collector import MockCallCollector
from jest_easy_mock.core.context import MockContext
from jest_easy_mock.enums import RequestKind


def _collect(parse, code: str, config: MockConfig = None) -> MockContext:
  context = MockContext(config or MockConfig())
  parse(code).visit(MockCallCollector(context))
  return context


def test_collects_imports_requests_and_explicit_mocks(parse):
  context = _collect(
    parse,
    'import A from "./a";\nimport * as B from "./b";\n'
    'describe("x", () => {\n  jest.mockObj(A);\n  jest.mockFn(B.c);\n});\n'
    'jest.doMock("./c");\njest.doMock("./c");\n',
  )

  assert context.imports.modules() == ["./a", "./b"]
  assert context.registry.root_names() == ["A", "B"]
  assert context.suppressed_modules == ["./c"]
  assert [c.to_js() for c in context.removals] == ["jest.mockObj(A)", "jest.mockFn(B.c)"]


def test_kept_requests_are_recorded_but_not_removed(parse):
  config = MockConfig(request_identifiers=[RequestIdentifier(name=".mockObj", remove=False)])
  context = _collect(parse, 'import A from "./a";\njest.mockObj(A);\n', config)

  assert len(context.registry) == 1
  assert context.removals == []


def test_nested_request_inside_removed_call_is_not_collected(parse):
  context = _collect(parse, 'import A from "./a";\njest.mockObj(A, jest.mockFn(A));\n')

  assert len(context.registry) == 1
  assert context.registry.requests_for("A")[0].kind == RequestKind.NAME_MOCK
  assert len(context.removals) == 1


def test_calls_in_import_declarations_are_skipped(parse):
  context = _collect(parse, 'import A from "./a";\n')
  assert len(context.imports) == 1
  assert len(context.registry) == 0
