"""
Orchestration Engine for mock rewriting.

This module provides the `MockEngine`, the driver that rewrites one test file.

The pipeline consists of:

1.  **Parsing**: source text is parsed with tree-sitter and lifted into a
    `Program` (see `jest_easy_mock.core.js`).
2.  **Collection**: `MockCallCollector` walks the tree once, filling the
    import table, the mock request registry and the set of modules the file
    already mocks explicitly. Mock-request calls are marked for deletion.
3.  **Aggregation**: `ModuleMockAggregator` joins imports and requests into one
    `ModuleMockFactory` per module.
4.  **Emission**: `FactoryEmitter` inserts a registration per factory at the top
    of the program and deletes the marked calls.

Aggregation only starts after the whole file was collected, so a request at the
bottom of a file still shapes the registration inserted at its top.
"""

import logging
from typing import Optional, Union

from jest_easy_mock.config import MockConfig
from jest_easy_mock.core.aggregator import ModuleMockAggregator
from jest_easy_mock.core.collector import MockCallCollector
from jest_easy_mock.core.context import MockContext
from jest_easy_mock.core.conversion_result import TransformResult
from jest_easy_mock.core.emitter import FactoryEmitter
from jest_easy_mock.core.js import JsParser, JsSyntaxError, Program
from jest_easy_mock.enums import Dialect

logger = logging.getLogger(__name__)


class MockEngine:
  """
  The main rewriting unit.

  An engine is cheap to keep around: it holds configuration only. All per-file
  state lives in the `MockContext` created by `transform`.
  """

  def __init__(
    self,
    config: Optional[MockConfig] = None,
    dialect: Union[Dialect, str] = Dialect.JAVASCRIPT,
  ):
    """
    Initializes the Engine.

    Args:
        config (MockConfig, optional): Runtime configuration. Defaults apply if None.
        dialect (Dialect | str): Grammar used to parse input files.
    """
    self.config = config or MockConfig()
    self.dialect = Dialect(dialect)
    self.parser = JsParser(self.dialect)

  def parse(self, code: str) -> Program:
    """
    Parses source text into a `Program`.

    Raises:
        JsSyntaxError: If the input is not valid for the dialect.
    """
    return self.parser.parse(code)

  def to_source(self, program: Program) -> str:
    return program.to_js()

  def transform(self, program: Program, context: Optional[MockContext] = None) -> MockContext:
    """
    Runs collection, aggregation and emission over a parsed program.

    The program is mutated in place.

    Args:
        program: The parsed file.
        context: Context to fill; a fresh one is created if None.

    Returns:
        MockContext: The state gathered while rewriting.
    """
    context = context or MockContext(self.config)
    tracer = context.tracer

    tracer.start_phase("Collection", "Imports, mock requests and explicit mocks")
    program.visit(MockCallCollector(context))
    tracer.end_phase()
    logger.debug(
      "Collected %d imported modules, %d mock requests, %d explicit mocks",
      len(context.imports.modules()),
      len(context.registry),
      len(context.suppressed_modules),
    )

    tracer.start_phase("Aggregation", "Per-module export objects")
    factories = ModuleMockAggregator(context).aggregate()
    tracer.end_phase()

    tracer.start_phase("Emission", "Insert registrations, delete requests")
    FactoryEmitter(self.config).apply(program, context, factories)
    tracer.end_phase()
    return context

  def run(self, code: str) -> TransformResult:
    """
    Executes the full pipeline on source text.

    Args:
        code (str): The input source string.

    Returns:
        TransformResult: The rewritten code and a summary. Syntax errors are
        reported through `errors` with `success=False` and the input unchanged.
    """
    context = MockContext(self.config)
    tracer = context.tracer
    tracer.start_phase("Mock Rewriting", self.dialect.value)

    tracer.start_phase("Parsing", "Source -> Program")
    try:
      program = self.parse(code)
    except JsSyntaxError as e:
      logger.warning("Parse failed: %s", e)
      return TransformResult(
        code=code,
        errors=[f"Parse Error: {e}"],
        success=False,
        trace_events=tracer.export(),
      )
    tracer.end_phase()

    self.transform(program, context)
    output = self.to_source(program)
    tracer.end_phase()

    return TransformResult(
      code=output,
      changed=output != code,
      mocked_modules=list(context.emitted_modules),
      suppressed_modules=list(context.suppressed_modules),
      removed_calls=len(context.removals),
      trace_events=tracer.export(),
    )
