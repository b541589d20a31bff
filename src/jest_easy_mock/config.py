"""
Runtime Configuration Store.

Defines which call expressions are mock requests, which ones are explicit
module mocks, and how emitted factories treat the real module.
"""

import re
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from jest_easy_mock.enums import PreserveMode, RequestKind

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][\w$]*$")

# Jest APIs registering (or disabling) a module mock by path.
DEFAULT_IGNORE_CALLS = ("mock", "doMock", "unmock", "dontMock")


class RequestIdentifier(BaseModel):
  """
  A dotted callee name treated as a mock request (e.g. `jest.mockObj`).
  """

  model_config = ConfigDict(frozen=True)

  name: str = Field(
    ...,
    description="Dotted callee name. A leading '.' is relative to the global mock identifier ('.mockObj').",
  )
  remove: bool = Field(True, description="Delete matched call statements from the output.")
  kind: RequestKind = Field(RequestKind.NAME_MOCK, description="Default replacement policy.")

  @field_validator("name")
  @classmethod
  def validate_name(cls, v: str) -> str:
    """
    Ensures the name is a dotted identifier path.

    Args:
        v (str): Raw name.

    Returns:
        str: The stripped name.

    Raises:
        ValueError: If any segment is not an identifier.
    """
    v_clean = v.strip()
    segments = v_clean[1:].split(".") if v_clean.startswith(".") else v_clean.split(".")
    if not v_clean or not all(_IDENTIFIER_RE.match(s) for s in segments):
      raise ValueError(f"Invalid mock request identifier: '{v}'")
    return v_clean


def _default_request_identifiers() -> List[RequestIdentifier]:
  return [
    RequestIdentifier(name=".mockObj", remove=True, kind=RequestKind.NAME_MOCK),
    RequestIdentifier(name=".mockFn", remove=True, kind=RequestKind.FUNCTION_MOCK),
  ]


class MockConfig(BaseModel):
  """
  Configuration container for the mock rewriting engine.

  Fields accept both snake_case names and camelCase aliases
  (`globalMockIdentifier`, `ignorePatterns`, ...).
  """

  model_config = ConfigDict(populate_by_name=True)

  global_mock_identifier: str = Field(
    "jest",
    alias="globalMockIdentifier",
    description="Global object of the test runner's mocking API.",
  )
  ignore_patterns: Optional[List[str]] = Field(
    None,
    alias="ignorePatterns",
    description="Dotted names of explicit module mock calls. None selects mock/doMock/unmock/dontMock.",
  )
  request_identifiers: List[RequestIdentifier] = Field(
    default_factory=_default_request_identifiers,
    alias="requestIdentifiers",
    description="Call names recognized as mock requests, in priority order.",
  )
  preserve_real_exports: PreserveMode = Field(
    PreserveMode.NEVER,
    alias="preserveRealExports",
    description="Spread the real module exports underneath the mocked ones.",
  )

  @field_validator("global_mock_identifier")
  @classmethod
  def validate_global_identifier(cls, v: str) -> str:
    """
    Ensures the global mock identifier is a plain identifier.

    Args:
        v (str): Raw identifier.

    Returns:
        str: The stripped identifier.

    Raises:
        ValueError: If it is not a valid JS identifier.
    """
    v_clean = v.strip()
    if not _IDENTIFIER_RE.match(v_clean):
      raise ValueError(f"Invalid global mock identifier: '{v}'")
    return v_clean

  @field_validator("preserve_real_exports", mode="before")
  @classmethod
  def coerce_preserve_mode(cls, v: Any) -> Any:
    """Maps booleans onto `PreserveMode.ALWAYS` / `PreserveMode.NEVER`."""
    if isinstance(v, bool):
      return PreserveMode.ALWAYS if v else PreserveMode.NEVER
    return v

  def qualify(self, name: str) -> str:
    """
    Resolves a relative pattern (`.mockObj`) against the global identifier.

    Args:
        name (str): Dotted name, possibly relative.

    Returns:
        str: Fully qualified dotted name.
    """
    if name.startswith("."):
      return f"{self.global_mock_identifier}{name}"
    return name

  @property
  def effective_ignore_patterns(self) -> List[str]:
    """
    Fully qualified ignore patterns, de-duplicated in order.

    Returns:
        List[str]: e.g. ['jest.mock', 'jest.doMock', 'jest.unmock', 'jest.dontMock'].
    """
    raw = self.ignore_patterns
    if raw is None:
      raw = [f".{call}" for call in DEFAULT_IGNORE_CALLS]
    return list(dict.fromkeys(self.qualify(p.strip()) for p in raw))

  @property
  def effective_request_identifiers(self) -> List[RequestIdentifier]:
    """
    Request identifiers with qualified names.

    Returns:
        List[RequestIdentifier]: Copies whose `name` is fully qualified.
    """
    return [ri.model_copy(update={"name": self.qualify(ri.name)}) for ri in self.request_identifiers]

  def preserves_real_exports(self, has_nested: bool) -> bool:
    """
    Decides whether a factory should spread the real module.

    Args:
        has_nested (bool): True if the factory has at least one nested export.

    Returns:
        bool: True if `requireActual` should be emitted.
    """
    if self.preserve_real_exports == PreserveMode.ALWAYS:
      return True
    if self.preserve_real_exports == PreserveMode.NESTED:
      return has_nested
    return False

  @classmethod
  def from_plugin_options(cls, options: Optional[Dict[str, Any]] = None) -> "MockConfig":
    """
    Builds a configuration from plugin-style options.

    Besides the field names and their camelCase aliases, the Babel plugin
    option names are understood:

    - `jestIdentifier` -> `global_mock_identifier`
    - `mockIdentifiers` (e.g. ['mock', 'doMock']) -> `ignore_patterns`
    - `identifiers` (e.g. ['mockObj', 'mockFn']) -> `request_identifiers`;
      'mockObj' selects NAME_MOCK, any other name FUNCTION_MOCK.
    - `requireActual` -> `preserve_real_exports`

    Args:
        options (Optional[Dict]): Raw options mapping.

    Returns:
        MockConfig: The validated configuration.

    Raises:
        ValueError: If validation fails.
    """
    data: Dict[str, Any] = dict(options or {})

    if "jestIdentifier" in data:
      data.setdefault("globalMockIdentifier", data.pop("jestIdentifier"))
    if "mockIdentifiers" in data:
      data.setdefault("ignorePatterns", [_relative(n) for n in data.pop("mockIdentifiers")])
    if "identifiers" in data:
      legacy = data.pop("identifiers")
      data.setdefault(
        "requestIdentifiers",
        [
          {
            "name": _relative(n),
            "remove": True,
            "kind": RequestKind.NAME_MOCK if n == "mockObj" else RequestKind.FUNCTION_MOCK,
          }
          for n in legacy
        ],
      )
    if "requireActual" in data:
      data.setdefault("preserveRealExports", data.pop("requireActual"))

    try:
      return cls.model_validate(data)
    except ValidationError as e:
      raise ValueError(f"Plugin configuration validation failed: {e}")


def _relative(name: Any) -> str:
  name = str(name)
  return name if "." in name else f".{name}"
