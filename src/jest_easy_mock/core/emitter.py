"""
Factory Emitter.

Materializes `ModuleMockFactory` definitions as registration statements and
applies them, together with the deletion of mock-request call sites, to the
`Program`.

Each registration is built statement by statement:

.. code-block:: javascript

    jest.mock("./mod", () => {
      const __actual = jest.requireActual("./mod");
      const __mock = {
        ...__actual,
        "default": "A",
        "Nest": {
          ...__actual["Nest"],
          "x": jest.fn()
        }
      };
      Object.defineProperty(__mock, "__esModule", {
        value: true
      });
      __mock["Nest"]["x"].mockName("C.Nest.x");
      return __mock;
    });

The `__actual` lines only appear when real exports are preserved.
"""

import logging
from typing import List

from jest_easy_mock.config import MockConfig
from jest_easy_mock.core.aggregator import FlatValue, ModuleMockFactory, NestedValue
from jest_easy_mock.core.context import MockContext
from jest_easy_mock.core.js.nodes import (
  ArrowFunctionExpression,
  BlockStatement,
  BooleanLiteral,
  CallExpression,
  ExpressionStatement,
  Identifier,
  JsNode,
  MemberExpression,
  ObjectExpression,
  ObjectProperty,
  Program,
  ReturnStatement,
  SpreadElement,
  StringLiteral,
  VariableDeclaration,
  in_statement_list,
)
from jest_easy_mock.core.registry import GeneratedMockFunction

logger = logging.getLogger(__name__)

ACTUAL_NAME = "__actual"
MOCK_NAME = "__mock"


def _member(obj: JsNode, *keys: str) -> JsNode:
  node = obj
  for key in keys:
    node = MemberExpression(node, StringLiteral(key), computed=True)
  return node


def _call(callee: JsNode, *args: JsNode) -> CallExpression:
  return CallExpression(callee, list(args))


class FactoryEmitter:
  """
  Builds registration statements and splices them into a program.
  """

  def __init__(self, config: MockConfig):
    self.config = config

  # --- Statement builders ---

  def build_registration(self, factory: ModuleMockFactory) -> ExpressionStatement:
    """
    Builds `jest.mock("<path>", () => {...});`.

    Args:
        factory: The aggregated module definition.

    Returns:
        ExpressionStatement: The registration call.
    """
    callee = MemberExpression(Identifier(self.config.global_mock_identifier), Identifier("mock"))
    return ExpressionStatement(_call(callee, StringLiteral(factory.module_path), self.build_factory(factory)))

  def build_factory(self, factory: ModuleMockFactory) -> ArrowFunctionExpression:
    preserve = self.config.preserves_real_exports(factory.has_nested)
    body: List[JsNode] = []
    if preserve:
      body.append(self.build_actual_import(factory.module_path))
    body.append(VariableDeclaration("const", Identifier(MOCK_NAME), self.build_exports_object(factory, preserve)))
    body.append(self.build_es_module_marker())
    body.extend(self.build_naming_statements(factory))
    body.append(ReturnStatement(Identifier(MOCK_NAME)))
    return ArrowFunctionExpression([], BlockStatement(body))

  def build_actual_import(self, module_path: str) -> VariableDeclaration:
    """`const __actual = jest.requireActual("<path>");`"""
    callee = MemberExpression(Identifier(self.config.global_mock_identifier), Identifier("requireActual"))
    return VariableDeclaration("const", Identifier(ACTUAL_NAME), _call(callee, StringLiteral(module_path)))

  def build_exports_object(self, factory: ModuleMockFactory, preserve: bool) -> ObjectExpression:
    """
    Builds the exports literal, spreading the real module first when
    `preserve` is set.
    """
    properties: List[JsNode] = []
    if preserve:
      properties.append(SpreadElement(Identifier(ACTUAL_NAME)))

    for key, value in factory.exports.items():
      if isinstance(value, FlatValue):
        properties.append(ObjectProperty(StringLiteral(key), value.replacement))
        continue
      nested: List[JsNode] = []
      if preserve:
        nested.append(SpreadElement(_member(Identifier(ACTUAL_NAME), key)))
      for sub_key, replacement in value.entries.items():
        nested.append(ObjectProperty(StringLiteral(sub_key), replacement))
      properties.append(ObjectProperty(StringLiteral(key), ObjectExpression(nested)))
    return ObjectExpression(properties)

  def build_es_module_marker(self) -> ExpressionStatement:
    """`Object.defineProperty(__mock, "__esModule", { value: true });`"""
    callee = MemberExpression(Identifier("Object"), Identifier("defineProperty"))
    descriptor = ObjectExpression([ObjectProperty(Identifier("value"), BooleanLiteral(True))])
    return ExpressionStatement(_call(callee, Identifier(MOCK_NAME), StringLiteral("__esModule"), descriptor))

  def build_naming_statements(self, factory: ModuleMockFactory) -> List[ExpressionStatement]:
    """
    Builds `__mock[...].mockName("<path>");` for every generated mock function
    that survived into the final exports object.
    """
    statements: List[ExpressionStatement] = []
    for key, value in factory.exports.items():
      if isinstance(value, FlatValue):
        located = [((key,), value.replacement)]
      elif isinstance(value, NestedValue):
        located = [((key, sub_key), r) for sub_key, r in value.entries.items()]
      else:
        located = []
      for keys, replacement in located:
        if not isinstance(replacement, GeneratedMockFunction):
          continue
        target = MemberExpression(_member(Identifier(MOCK_NAME), *keys), Identifier("mockName"))
        statements.append(ExpressionStatement(_call(target, StringLiteral(replacement.display_name))))
    return statements

  # --- Program mutation ---

  def apply(self, program: Program, context: MockContext, factories: List[ModuleMockFactory]) -> None:
    """
    Inserts one registration per factory and deletes the marked call sites.

    Args:
        program: The tree to mutate.
        context: The collected per-file state (removals, tracer).
        factories: Output of the aggregator, in insertion order.
    """
    registrations = []
    for factory in factories:
      statement = self.build_registration(factory)
      registrations.append(statement)
      context.emitted_modules.append(factory.module_path)
      context.tracer.log_factory(factory.module_path, list(factory.exports))
      context.tracer.log_mutation("Registration", "(none)", statement.to_js())
    program.insert_statements(registrations)

    for call in context.removals:
      parent = call.parent
      before = call.to_js()
      if isinstance(parent, ExpressionStatement) and parent.expression is call:
        if in_statement_list(parent):
          program.remove(parent)
          context.tracer.log_mutation("ExpressionStatement", before, "(removed)")
        else:
          # Sole body of an if, loop or label: the slot must stay filled.
          program.replace(parent, BlockStatement())
          context.tracer.log_mutation("ExpressionStatement", before, "{}")
      else:
        program.replace(call, Identifier("undefined"))
        context.tracer.log_mutation("CallExpression", before, "undefined")
    logger.debug(
      "Emitted %d registrations, removed %d mock request calls", len(registrations), len(context.removals)
    )
