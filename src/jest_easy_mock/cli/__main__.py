"""
Main Entry Point for the jest-easy-mock CLI.

This module handles argument parsing and dispatches to the command handlers
exposed by `jest_easy_mock.cli.commands`.
"""

import argparse
from pathlib import Path
from typing import List, Optional

from jest_easy_mock import __version__
from jest_easy_mock.cli import commands
from jest_easy_mock.enums import PreserveMode


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="jest-easy-mock: rewrite mock requests into jest.mock() factories")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: CONVERT ---
  cmd_conv = subparsers.add_parser("convert", help="Rewrite a test file or a directory of test files")
  cmd_conv.add_argument("path", type=Path, help="Input source file or directory")
  cmd_conv.add_argument("--out", type=Path, default=None, help="Output destination (file or dir)")
  cmd_conv.add_argument(
    "--global-identifier",
    default="jest",
    help="Global object of the mocking API (default: jest)",
  )
  cmd_conv.add_argument(
    "--preserve-real-exports",
    choices=[m.value for m in PreserveMode],
    default=PreserveMode.NEVER.value,
    help="Spread the real module under the mocked exports (default: never)",
  )
  cmd_conv.add_argument(
    "--check",
    action="store_true",
    help="Write nothing; exit with 1 if any file would be rewritten",
  )
  cmd_conv.add_argument(
    "--json-trace", type=Path, default=None, help="Dump the rewriting trace events to a JSON file."
  )

  args = parser.parse_args(argv)

  if args.command == "convert":
    return commands.handle_convert(
      args.path,
      args.out,
      args.global_identifier,
      args.preserve_real_exports,
      args.check,
      args.json_trace,
    )

  parser.print_help()
  return 1


if __name__ == "__main__":
  raise SystemExit(main())
