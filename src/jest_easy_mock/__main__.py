"""
Entry point for module execution (``python -m jest_easy_mock``).

This module delegates execution to the CLI handler in ``jest_easy_mock.cli.__main__``.
"""

import sys
from jest_easy_mock.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
