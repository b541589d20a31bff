"""
Tests for registration statement construction.
"""

from jest_easy_mock.config import MockConfig
from jest_easy_mock.core.aggregator import FlatValue, ModuleMockFactory, NestedValue
from jest_easy_mock.core.emitter import FactoryEmitter
from jest_easy_mock.core.js import StringLiteral
from jest_easy_mock.core.registry import GeneratedMockFunction


def _factory() -> ModuleMockFactory:
  return ModuleMockFactory(
    "./mod",
    {
      "default": FlatValue(StringLiteral("A")),
      "Nest": NestedValue({"x": GeneratedMockFunction("jest", "C.Nest.x")}),
    },
  )


def test_registration_without_real_exports():
  statement = FactoryEmitter(MockConfig()).build_registration(_factory())

  assert statement.to_js() == (
    'jest.mock("./mod", () => {\n'
    "  const __mock = {\n"
    '    "default": "A",\n'
    '    "Nest": {\n'
    '      "x": jest.fn()\n'
    "    }\n"
    "  };\n"
    '  Object.defineProperty(__mock, "__esModule", {\n'
    "    value: true\n"
    "  });\n"
    '  __mock["Nest"]["x"].mockName("C.Nest.x");\n'
    "  return __mock;\n"
    "});"
  )


def test_registration_preserving_real_exports():
  config = MockConfig(preserve_real_exports="nested")
  code = FactoryEmitter(config).build_registration(_factory()).to_js()

  assert '  const __actual = jest.requireActual("./mod");\n' in code
  assert "    ...__actual,\n" in code
  assert '      ...__actual["Nest"],\n' in code
  assert code.index("requireActual") < code.index("const __mock")


def test_nested_mode_skips_flat_only_modules():
  config = MockConfig(preserve_real_exports="nested")
  flat = ModuleMockFactory("./flat", {"a": FlatValue(StringLiteral("a"))})
  code = FactoryEmitter(config).build_registration(flat).to_js()
  assert "requireActual" not in code


def test_custom_global_identifier():
  config = MockConfig(global_mock_identifier="vi", preserve_real_exports="always")
  factory = ModuleMockFactory("./m", {"f": FlatValue(GeneratedMockFunction("vi", "f"))})
  code = FactoryEmitter(config).build_registration(factory).to_js()

  assert code.startswith('vi.mock("./m", () => {')
  assert 'vi.requireActual("./m")' in code
  assert '"f": vi.fn()' in code
  assert '__mock["f"].mockName("f");' in code


def test_naming_only_for_generated_functions():
  factory = ModuleMockFactory(
    "./m",
    {
      "a": FlatValue(StringLiteral("a")),
      "b": FlatValue(GeneratedMockFunction("jest", "b")),
    },
  )
  statements = FactoryEmitter(MockConfig()).build_naming_statements(factory)
  assert [s.to_js() for s in statements] == ['__mock["b"].mockName("b");']
