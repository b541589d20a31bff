"""
Data structures representing the output of a rewriting run.

This module defines the `TransformResult` Pydantic model, which encapsulates
the generated code, any errors encountered, a summary of what was rewritten,
and the execution trace logs.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, Field


class TransformResult(BaseModel):
  """
  Container for the results of rewriting one file.
  """

  code: str = Field(default="", description="The generated source code.")
  errors: List[str] = Field(default_factory=list, description="List of error messages encountered.")
  success: bool = Field(
    default=True,
    description="True if the pipeline completed without fatal crashes.",
  )
  changed: bool = Field(default=False, description="True if the output differs from the input.")
  mocked_modules: List[str] = Field(
    default_factory=list,
    description="Module paths for which a mock registration was inserted, in insertion order.",
  )
  suppressed_modules: List[str] = Field(
    default_factory=list,
    description="Module paths skipped because the file already mocks them explicitly.",
  )
  removed_calls: int = Field(default=0, description="Number of mock-request calls deleted from the source.")
  trace_events: List[Dict[str, Any]] = Field(default_factory=list, description="Execution trace log data.")

  @property
  def has_errors(self) -> bool:
    """
    Check if the result contains any error messages.

    Returns:
        True if one or more errors are present.
    """
    return len(self.errors) > 0
