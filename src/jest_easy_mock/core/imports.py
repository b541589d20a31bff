"""
Import Table.

Records every local binding introduced by static import declarations, keyed by
module path (in first-import order) and by local name.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from jest_easy_mock.core.js.nodes import (
  ImportDeclaration,
  ImportDefaultSpecifier,
  ImportNamespaceSpecifier,
  ImportSpecifier,
)
from jest_easy_mock.enums import BindingKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImportBinding:
  """
  One local name bound by an import.

  Attributes:
      local_name: Name visible in the file.
      module_path: Import source string.
      kind: DEFAULT, NAMESPACE or NAMED.
      imported_name: Exported name the binding refers to ('default' for
          default bindings, None for namespaces).
  """

  local_name: str
  module_path: str
  kind: BindingKind
  imported_name: Optional[str] = None

  @property
  def export_key(self) -> Optional[str]:
    """
    The module export this binding maps to, or None for namespace bindings
    (whose requests name the export themselves).
    """
    if self.kind == BindingKind.DEFAULT:
      return "default"
    if self.kind == BindingKind.NAMED:
      return self.imported_name or self.local_name
    return None


class ImportTable:
  """
  Bindings of one file, grouped by module path.
  """

  def __init__(self) -> None:
    self._by_module: Dict[str, List[ImportBinding]] = {}
    self._by_local: Dict[str, ImportBinding] = {}

  def add_declaration(self, decl: ImportDeclaration) -> List[ImportBinding]:
    """
    Registers the bindings of one import declaration.

    Side-effect imports and TypeScript type-only imports bind nothing.

    Args:
        decl: The import declaration node.

    Returns:
        List[ImportBinding]: The bindings added.
    """
    if decl.type_only:
      return []
    module_path = decl.source.value
    added: List[ImportBinding] = []
    for spec in decl.specifiers:
      binding = _binding_for(spec, module_path)
      if binding is not None:
        added.append(binding)

    if not added:
      return []
    self._by_module.setdefault(module_path, []).extend(added)
    for binding in added:
      if binding.local_name in self._by_local:
        logger.debug("Local name '%s' imported more than once", binding.local_name)
      self._by_local[binding.local_name] = binding
    return added

  def modules(self) -> List[str]:
    """Module paths in first-import order."""
    return list(self._by_module)

  def bindings_for(self, module_path: str) -> List[ImportBinding]:
    """Bindings of a module in declaration order."""
    return list(self._by_module.get(module_path, []))

  def lookup(self, local_name: str) -> Optional[ImportBinding]:
    return self._by_local.get(local_name)

  def __len__(self) -> int:
    return len(self._by_local)


def _binding_for(spec, module_path: str) -> Optional[ImportBinding]:
  if isinstance(spec, ImportDefaultSpecifier):
    return ImportBinding(spec.local.name, module_path, BindingKind.DEFAULT, "default")
  if isinstance(spec, ImportNamespaceSpecifier):
    return ImportBinding(spec.local.name, module_path, BindingKind.NAMESPACE)
  if isinstance(spec, ImportSpecifier):
    if spec.type_only:
      return None
    imported = spec.imported_name
    if imported == "default":
      # `import { default as A }` binds the default export.
      return ImportBinding(spec.local.name, module_path, BindingKind.DEFAULT, "default")
    return ImportBinding(spec.local.name, module_path, BindingKind.NAMED, imported)
  return None
