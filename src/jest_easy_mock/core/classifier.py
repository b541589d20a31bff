"""
Expression Classifier.

Sorts call expressions into explicit module mocks (`jest.mock("./a")`), mock
requests (`jest.mockObj(A)`) and everything else.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Union

from jest_easy_mock.config import MockConfig, RequestIdentifier
from jest_easy_mock.core.js.nodes import CallExpression, StringLiteral
from jest_easy_mock.core.paths import get_full_name


@dataclass(frozen=True)
class IgnoreCall:
  """An explicit module mock registration for `module_path`."""

  module_path: str


@dataclass(frozen=True)
class RequestCall:
  """A mock request matched by `identifier`."""

  identifier: RequestIdentifier


Classification = Optional[Union[IgnoreCall, RequestCall]]


class ExpressionClassifier:
  """
  Matches call expressions against the configured dotted names.

  Ignore patterns take precedence over request identifiers. When several
  request identifiers share a name, the first one wins.
  """

  def __init__(self, config: MockConfig):
    self._ignore = frozenset(config.effective_ignore_patterns)
    self._requests: Dict[str, RequestIdentifier] = {}
    for identifier in config.effective_request_identifiers:
      self._requests.setdefault(identifier.name, identifier)

  def classify(self, call: CallExpression) -> Classification:
    """
    Classifies one call expression.

    Args:
        call: The call node.

    Returns:
        IgnoreCall if the callee is an explicit module mock whose first argument
        is a string literal; RequestCall if the callee is a mock request;
        None otherwise.
    """
    name = get_full_name(call.callee)
    if not name:
      return None

    if name in self._ignore:
      first = call.arguments[0] if call.arguments else None
      if isinstance(first, StringLiteral):
        return IgnoreCall(first.value)
      return None

    identifier = self._requests.get(name)
    if identifier is not None:
      return RequestCall(identifier)
    return None
