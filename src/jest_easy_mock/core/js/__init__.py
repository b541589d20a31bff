"""
JavaScript Syntax Layer.

Parsing (tree-sitter), the ESTree-shaped node model, visitor dispatch and the
lossless `Program` printer used by the rewriting core.
"""

from jest_easy_mock.core.js.nodes import (
  ArrowFunctionExpression,
  BlockStatement,
  BooleanLiteral,
  CallExpression,
  ExpressionStatement,
  Identifier,
  ImportDeclaration,
  ImportDefaultSpecifier,
  ImportNamespaceSpecifier,
  ImportSpecifier,
  JsNode,
  MemberExpression,
  ObjectExpression,
  ObjectProperty,
  Opaque,
  Origin,
  Program,
  ReturnStatement,
  SpreadElement,
  StringLiteral,
  VariableDeclaration,
)
from jest_easy_mock.core.js.parser import JsParser, JsSyntaxError
from jest_easy_mock.core.js.visitor import JsVisitor

__all__ = [
  "ArrowFunctionExpression",
  "BlockStatement",
  "BooleanLiteral",
  "CallExpression",
  "ExpressionStatement",
  "Identifier",
  "ImportDeclaration",
  "ImportDefaultSpecifier",
  "ImportNamespaceSpecifier",
  "ImportSpecifier",
  "JsNode",
  "JsParser",
  "JsSyntaxError",
  "JsVisitor",
  "MemberExpression",
  "ObjectExpression",
  "ObjectProperty",
  "Opaque",
  "Origin",
  "Program",
  "ReturnStatement",
  "SpreadElement",
  "StringLiteral",
  "VariableDeclaration",
]
