"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages and
isolates every test from the user's interpose configuration.
"""

import os
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
# This ensures that the local interpose package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of interpose modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("interpose"):
        del sys.modules[module_name]

from interpose.config.loader import reset_config  # noqa: E402
from interpose.engine.registry import registry  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Run each test without user config files, INTERPOSE__ env vars or default registrations."""
    for key in list(os.environ):
        if key.upper().startswith("INTERPOSE__"):
            monkeypatch.delenv(key)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)
    reset_config()
    yield tmp_path
    reset_config()
    registry.clear()
