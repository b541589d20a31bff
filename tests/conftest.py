"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Shared engine/config fixtures.
"""

import sys
from pathlib import Path

import pytest

# Add src to path so we can import 'jest_easy_mock' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from jest_easy_mock.config import MockConfig  # noqa: E402
from jest_easy_mock.core.engine import MockEngine  # noqa: E402
from jest_easy_mock.core.js import JsParser  # noqa: E402


@pytest.fixture
def config() -> MockConfig:
  return MockConfig()


@pytest.fixture
def engine(config) -> MockEngine:
  return MockEngine(config=config)


@pytest.fixture
def parse():
  """Returns a callable parsing JavaScript source into a Program."""
  parser = JsParser()
  return parser.parse
