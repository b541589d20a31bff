"""
CLI Command Handlers Facade.

Re-exports handlers from `jest_easy_mock.cli.handlers` so the dispatcher and
tests have a single patch target.
"""

from jest_easy_mock.cli.handlers.convert import (
  SOURCE_SUFFIXES,
  handle_convert,
  _collect_sources,
  _convert_single_file,
  _print_batch_summary,
)

__all__ = [
  "SOURCE_SUFFIXES",
  "_collect_sources",
  "_convert_single_file",
  "_print_batch_summary",
  "handle_convert",
]
