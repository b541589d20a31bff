"""
Enumerations for jest-easy-mock.

This module defines the enumerations shared by the configuration layer,
the syntax layer and the rewriting core.
"""

from enum import Enum
from pathlib import Path
from typing import Union


class BindingKind(str, Enum):
  """
  How a local name was bound by an import declaration.
  """

  DEFAULT = "default"  # import A from "m" / import { default as A } from "m"
  NAMESPACE = "namespace"  # import * as A from "m"
  NAMED = "named"  # import { A } from "m"


class RequestKind(str, Enum):
  """
  Default replacement policy of a mock-request identifier.

  Only relevant when the call site does not supply an explicit replacement.
  """

  NAME_MOCK = "name"  # string literal holding the mocked export name
  FUNCTION_MOCK = "function"  # generated `jest.fn()` with a display name


class PreserveMode(str, Enum):
  """
  Controls whether emitted factories spread the real module exports
  underneath the mocked ones.
  """

  NEVER = "never"
  NESTED = "nested"  # only for modules with at least one nested export
  ALWAYS = "always"


class Dialect(str, Enum):
  """
  Source grammar used by the parser.
  """

  JAVASCRIPT = "javascript"
  TYPESCRIPT = "typescript"
  TSX = "tsx"

  @classmethod
  def from_path(cls, path: Union[str, Path]) -> "Dialect":
    """
    Picks the grammar matching a file suffix.

    Args:
        path: Source file path.

    Returns:
        Dialect: TYPESCRIPT for `.ts/.mts/.cts`, TSX for `.tsx`, JAVASCRIPT otherwise.
    """
    suffix = Path(path).suffix.lower()
    if suffix == ".tsx":
      return cls.TSX
    if suffix in (".ts", ".mts", ".cts"):
      return cls.TYPESCRIPT
    return cls.JAVASCRIPT
