"""
Convert Command Handler.

This module implements the logic for the `jest-easy-mock convert` command.
It orchestrates:
1. Configuration from CLI flags.
2. Source discovery (single file or directory walk).
3. Rewriting via the Engine, with the grammar chosen per file suffix.
4. Output writing (or change detection with `--check`) and trace dumping.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError
from rich.markup import escape
from rich.table import Table

from jest_easy_mock.config import MockConfig
from jest_easy_mock.core.conversion_result import TransformResult
from jest_easy_mock.core.engine import MockEngine
from jest_easy_mock.enums import Dialect
from jest_easy_mock.utils.console import (
  console,
  log_error,
  log_info,
  log_success,
  log_warning,
)

SOURCE_SUFFIXES = (".js", ".jsx", ".mjs", ".cjs", ".ts", ".tsx")


def handle_convert(
  input_path: Path,
  output_path: Optional[Path],
  global_identifier: str = "jest",
  preserve_real_exports: str = "never",
  check: bool = False,
  json_trace_path: Optional[Path] = None,
) -> int:
  """
  Handles the 'convert' command execution.

  Args:
      input_path: Source file or directory.
      output_path: Destination file (or directory, for directory input). A
          single file without destination is printed to stdout.
      global_identifier: Global object of the mocking API.
      preserve_real_exports: "never", "nested" or "always".
      check: If True, nothing is written and the exit code reports whether
          any file would change.
      json_trace_path: Optional path to dump execution trace JSON.

  Returns:
      int: Exit code (0 for success, 1 for failures or, with `check`, pending changes).
  """
  if not input_path.exists():
    log_error(f"Input not found: {input_path}")
    return 1

  try:
    config = MockConfig(
      global_mock_identifier=global_identifier,
      preserve_real_exports=preserve_real_exports,
    )
  except ValidationError as e:
    log_error(f"Invalid configuration: {escape(str(e))}")
    return 1

  batch_results: Dict[str, TransformResult] = {}
  traces: Dict[str, List[Dict[str, Any]]] = {}

  if input_path.is_file():
    result = _convert_single_file(input_path, output_path, config, check)
    batch_results[input_path.name] = result
    traces[input_path.name] = result.trace_events

  elif input_path.is_dir():
    if not output_path and not check:
      log_error("Directory conversion requires --out destination directory (or --check).")
      return 1

    sources = _collect_sources(input_path)
    if not sources:
      log_warning(f"No test sources found in {input_path}")
      return 0

    log_info(f"Processing {len(sources)} files from [path]{input_path}[/path]...")
    for src_file in sources:
      rel_path = src_file.relative_to(input_path)
      dest_file = output_path / rel_path if output_path else None
      result = _convert_single_file(src_file, dest_file, config, check)
      batch_results[str(rel_path)] = result
      traces[str(rel_path)] = result.trace_events

  if json_trace_path:
    payload: Any = traces[input_path.name] if input_path.is_file() else traces
    _write_trace(json_trace_path, payload)

  _print_batch_summary(batch_results, check)

  if any(not r.success for r in batch_results.values()):
    return 1
  if check and any(r.changed for r in batch_results.values()):
    return 1
  return 0


def _collect_sources(root: Path) -> List[Path]:
  """
  Finds rewritable files below `root`, skipping installed packages.

  Args:
      root: Directory to walk.

  Returns:
      List[Path]: Sorted source paths.
  """
  return sorted(
    p for p in root.rglob("*") if p.is_file() and p.suffix in SOURCE_SUFFIXES and "node_modules" not in p.parts
  )


def _convert_single_file(
  input_path: Path,
  output_path: Optional[Path],
  config: MockConfig,
  check: bool = False,
) -> TransformResult:
  """
  Rewrites a single file.

  Args:
      input_path: Source file path.
      output_path: Destination file path, or None for stdout.
      config: Runtime configuration object.
      check: Skip writing.

  Returns:
      TransformResult: Result object containing status and code.
  """
  try:
    with open(input_path, "rt", encoding="utf-8") as f:
      code = f.read()
    engine = MockEngine(config=config, dialect=Dialect.from_path(input_path))
    result = engine.run(code)

    if not result.success:
      log_error(f"Failed to rewrite [path]{input_path}[/path]: {escape('; '.join(result.errors))}")
      return result

    if check:
      if result.changed:
        log_warning(f"Would rewrite: [path]{input_path}[/path]")
      return result

    if output_path:
      output_path.parent.mkdir(parents=True, exist_ok=True)
      with open(output_path, "wt", encoding="utf-8") as f:
        f.write(result.code)
      log_success(f"Rewritten: [path]{input_path}[/path] -> [path]{output_path}[/path]")
    else:
      print(result.code, end="")

    return result
  except (OSError, ValueError) as e:
    log_error(f"Failed to convert {input_path}: {escape(str(e))}")
    return TransformResult(success=False, errors=[str(e)])


def _write_trace(path: Path, payload: Any) -> None:
  try:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wt", encoding="utf-8") as f:
      json.dump(payload, f, indent=2)
    log_info(f"Trace saved to [path]{path}[/path]")
  except OSError as e:
    log_error(f"Failed to write trace: {e}")


def _print_batch_summary(results: Dict[str, TransformResult], check: bool = False) -> None:
  """
  Renders a summary table of rewrite results to the console.

  Args:
      results: Dictionary mapping filenames to results.
      check: Label changed files as pending instead of rewritten.
  """
  total = len(results)
  failures = sum(1 for r in results.values() if not r.success)
  changed = sum(1 for r in results.values() if r.success and r.changed)

  if failures == 0 and changed == 0:
    log_success(f"Batch Complete: {total} files, nothing to rewrite.")
    return

  table = Table(title="Mock Rewrite Report")
  table.add_column("File", style="cyan")
  table.add_column("Status", justify="center")
  table.add_column("Modules / Issues")

  for filename, res in results.items():
    if not res.success:
      issues = "; ".join(res.errors) if res.errors else "Unknown Error"
      table.add_row(filename, "❌ Failed", f"[red]{escape(issues)}[/red]")
    elif res.changed:
      status = "⚠️ Pending" if check else "✅ Rewritten"
      table.add_row(filename, status, ", ".join(res.mocked_modules) or f"{res.removed_calls} calls removed")

  console.print(table)
  console.print(f"\n[bold]Summary:[/bold] {changed} {'pending' if check else 'rewritten'}, {failures} failed, {total} total.")
