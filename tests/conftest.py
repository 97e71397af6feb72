"""Pytest configuration.

The repository uses a flat `src/` layout. This conftest makes `import src...` work when running
`pytest` without installing the package, and keeps host environment overrides out of the tests.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Run each test in an empty directory with no `MINIPARSE_*` variables set."""

    for name in list(os.environ):
        if name.startswith("MINIPARSE_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
