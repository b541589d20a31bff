"""
Transformation Trace Logger.

Records the decisions taken while rewriting one file:
1. Lifecycle phases (Parsing, Collection, Aggregation, Emission).
2. Mock requests recorded or dropped, and why.
3. Suppressed modules and emitted factories.
4. Tree mutations (inserted registrations, removed call sites).

A `TraceLogger` belongs to a single file's `MockContext`; there is no shared
instance. The output is a list of dictionaries suitable for JSON serialization.
"""

import time
import uuid
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class TraceEventType(str, Enum):
  PHASE_START = "phase_start"
  PHASE_END = "phase_end"
  REQUEST_RECORDED = "request_recorded"
  REQUEST_DROPPED = "request_dropped"
  MODULE_SUPPRESSED = "module_suppressed"
  FACTORY_EMITTED = "factory_emitted"
  AST_MUTATION = "ast_mutation"


@dataclass
class TraceEvent:
  id: str
  type: TraceEventType
  timestamp: float
  description: str
  parent_id: Optional[str] = None
  metadata: Dict[str, Any] = field(default_factory=dict)


class TraceLogger:
  """
  Records rewriting events for one file.
  """

  def __init__(self):
    self._events: List[TraceEvent] = []
    self._active_phases: List[str] = []  # Stack of phase IDs

  def start_phase(self, name: str, description: str = "") -> str:
    """Starts a nested phase (e.g. 'Aggregation'). Returns the phase ID."""
    phase_id = str(uuid.uuid4())
    parent = self._active_phases[-1] if self._active_phases else None
    self._events.append(
      TraceEvent(
        id=phase_id,
        type=TraceEventType.PHASE_START,
        timestamp=time.time(),
        description=name,
        parent_id=parent,
        metadata={"detail": description},
      )
    )
    self._active_phases.append(phase_id)
    return phase_id

  def end_phase(self):
    """Ends the current active phase."""
    if not self._active_phases:
      return
    phase_id = self._active_phases.pop()
    self._events.append(
      TraceEvent(
        id=str(uuid.uuid4()),
        type=TraceEventType.PHASE_END,
        timestamp=time.time(),
        description="End Phase",
        parent_id=phase_id,
      )
    )

  def log_request(self, path: str, kind: str, explicit: bool):
    self._log_simple(
      TraceEventType.REQUEST_RECORDED,
      f"Mock request {path}",
      {"path": path, "kind": kind, "explicit_replacement": explicit},
    )

  def log_dropped(self, subject: str, reason: str):
    """Logs a request or argument that was skipped."""
    self._log_simple(TraceEventType.REQUEST_DROPPED, f"Dropped '{subject}'", {"subject": subject, "reason": reason})

  def log_suppressed(self, module_path: str):
    self._log_simple(TraceEventType.MODULE_SUPPRESSED, f"Explicit mock for '{module_path}'", {"module": module_path})

  def log_factory(self, module_path: str, keys: List[str]):
    self._log_simple(
      TraceEventType.FACTORY_EMITTED,
      f"Factory for '{module_path}'",
      {"module": module_path, "exports": list(keys)},
    )

  def log_mutation(self, node_type: str, before: str, after: str):
    """Logs a tree transformation."""
    self._log_simple(TraceEventType.AST_MUTATION, f"Transformed {node_type}", {"before": before, "after": after})

  def events_of(self, evt_type: TraceEventType) -> List[TraceEvent]:
    return [e for e in self._events if e.type == evt_type]

  def _log_simple(self, evt_type: TraceEventType, desc: str, meta: Dict[str, Any]):
    parent = self._active_phases[-1] if self._active_phases else None
    self._events.append(
      TraceEvent(
        id=str(uuid.uuid4()), type=evt_type, timestamp=time.time(), description=desc, parent_id=parent, metadata=meta
      )
    )

  def export(self) -> List[Dict[str, Any]]:
    """Returns list of dicts for JSON serialization."""
    return [asdict(e) for e in self._events]
