"""
jest-easy-mock Package.

A source-to-source rewriter for jest test files. Mock requests such as
`jest.mockObj(A)` or `jest.mockFn(A.b)` are collected across the whole file and
turned into `jest.mock(path, factory)` registrations at the top of the file,
one per imported module.

Usage
-----

Simple String Conversion
^^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    import jest_easy_mock as jem
    code = 'import A from "./a";\\njest.mockObj(A);\\n'
    print(jem.transform(code))
    # jest.mock("./a", () => { ... });
    # import A from "./a";

Advanced Usage (Engine)
^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    from jest_easy_mock import MockConfig, MockEngine

    config = MockConfig(global_mock_identifier="vi", preserve_real_exports="nested")
    res = MockEngine(config=config, dialect="typescript").run(code)

    if res.success:
        print(res.code)
    else:
        print(f"Errors: {res.errors}")
"""

from typing import Any, Dict, Optional, Union

from jest_easy_mock.config import MockConfig, RequestIdentifier
from jest_easy_mock.core.conversion_result import TransformResult
from jest_easy_mock.core.engine import MockEngine
from jest_easy_mock.enums import Dialect, PreserveMode, RequestKind

__version__ = "0.1.0"


def transform(
  code: str,
  config: Optional[Union[MockConfig, Dict[str, Any]]] = None,
  dialect: Union[Dialect, str] = Dialect.JAVASCRIPT,
) -> str:
  """
  Rewrites the mock requests of one test file.

  This is a convenience wrapper around `MockEngine`. For batches of files use
  the `jest-easy-mock convert` command or keep one engine around.

  Args:
      code (str): The test file source.
      config (MockConfig | dict, optional): Configuration, or plugin-style
          options accepted by `MockConfig.from_plugin_options`.
      dialect (Dialect | str): "javascript", "typescript" or "tsx".

  Returns:
      str: The rewritten source.

  Raises:
      ValueError: If the source cannot be parsed or the options are invalid.
  """
  if isinstance(config, dict):
    config = MockConfig.from_plugin_options(config)

  engine = MockEngine(config=config, dialect=dialect)
  result = engine.run(code)

  if not result.success:
    error_msg = "\n".join(result.errors)
    raise ValueError(f"Transformation failed:\n{error_msg}")

  return result.code


__all__ = [
  "Dialect",
  "MockConfig",
  "MockEngine",
  "PreserveMode",
  "RequestIdentifier",
  "RequestKind",
  "TransformResult",
  "transform",
  "__version__",
]
