"""
Tests for the configuration models.

Verifies:
1. Defaults and qualification of relative names.
2. Validation failures.
3. Plugin-option compatibility names.
"""

import pytest
from pydantic import ValidationError

from jest_easy_mock.config import MockConfig, RequestIdentifier
from jest_easy_mock.enums import PreserveMode, RequestKind


def test_defaults():
  config = MockConfig()
  assert config.global_mock_identifier == "jest"
  assert config.effective_ignore_patterns == ["jest.mock", "jest.doMock", "jest.unmock", "jest.dontMock"]

  requests = config.effective_request_identifiers
  assert [(r.name, r.kind, r.remove) for r in requests] == [
    ("jest.mockObj", RequestKind.NAME_MOCK, True),
    ("jest.mockFn", RequestKind.FUNCTION_MOCK, True),
  ]
  assert config.preserve_real_exports == PreserveMode.NEVER


def test_relative_names_follow_global_identifier():
  config = MockConfig(global_mock_identifier="vi")
  assert "vi.mock" in config.effective_ignore_patterns
  assert config.effective_request_identifiers[0].name == "vi.mockObj"
  assert config.qualify("custom.mockObj") == "custom.mockObj"


def test_camel_case_aliases():
  config = MockConfig.model_validate(
    {
      "globalMockIdentifier": "td",
      "ignorePatterns": [".replace"],
      "preserveRealExports": "nested",
    }
  )
  assert config.global_mock_identifier == "td"
  assert config.effective_ignore_patterns == ["td.replace"]
  assert config.preserve_real_exports == PreserveMode.NESTED


@pytest.mark.parametrize(
  "value, expected",
  [(True, PreserveMode.ALWAYS), (False, PreserveMode.NEVER), ("always", PreserveMode.ALWAYS)],
)
def test_preserve_mode_coercion(value, expected):
  assert MockConfig(preserve_real_exports=value).preserve_real_exports == expected


def test_preserves_real_exports_policy():
  nested = MockConfig(preserve_real_exports="nested")
  assert nested.preserves_real_exports(has_nested=True) is True
  assert nested.preserves_real_exports(has_nested=False) is False
  assert MockConfig(preserve_real_exports="always").preserves_real_exports(False) is True
  assert MockConfig().preserves_real_exports(True) is False


def test_invalid_global_identifier():
  with pytest.raises(ValidationError):
    MockConfig(global_mock_identifier="not valid")


def test_invalid_request_identifier():
  with pytest.raises(ValidationError):
    RequestIdentifier(name="jest..mockObj")


def test_from_plugin_options_legacy_names():
  config = MockConfig.from_plugin_options(
    {
      "jestIdentifier": "vi",
      "identifiers": ["mockObj", "mockFn", "spyAll"],
      "mockIdentifiers": ["mock"],
      "requireActual": True,
    }
  )
  assert config.global_mock_identifier == "vi"
  assert config.effective_ignore_patterns == ["vi.mock"]
  assert [(r.name, r.kind) for r in config.effective_request_identifiers] == [
    ("vi.mockObj", RequestKind.NAME_MOCK),
    ("vi.mockFn", RequestKind.FUNCTION_MOCK),
    ("vi.spyAll", RequestKind.FUNCTION_MOCK),
  ]
  assert config.preserve_real_exports == PreserveMode.ALWAYS


def test_from_plugin_options_empty():
  assert MockConfig.from_plugin_options(None) == MockConfig()


def test_from_plugin_options_invalid():
  with pytest.raises(ValueError, match="Plugin configuration validation failed"):
    MockConfig.from_plugin_options({"preserveRealExports": "sometimes"})
