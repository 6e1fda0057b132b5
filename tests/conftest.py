"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from pathlib import Path

import pytest
from fakes import FakeAclReader, fake_translate, orphan_snapshot, user_snapshot


@pytest.fixture(autouse=True)
def isolated_config_dir(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> Path:
    """Point the config directory at an empty temp dir for every test."""
    config_dir = tmp_path_factory.mktemp("config")
    monkeypatch.setenv("HOMESWEEP_CONFIG_DIR", str(config_dir))
    return config_dir


@pytest.fixture
def translator() -> Callable[[str], str]:
    """SID translator that fails only for ORPHAN_SID."""
    return fake_translate


@pytest.fixture
def abc_tree(tmp_path: Path) -> Path:
    """Parent directory with A (empty), B (non-empty, orphan SID), C (empty, orphan SID)."""
    parent = tmp_path / "Users"
    (parent / "A").mkdir(parents=True)
    (parent / "B").mkdir()
    (parent / "B" / "ntuser.dat").write_text("hive")
    (parent / "C").mkdir()
    return parent


@pytest.fixture
def abc_reader() -> FakeAclReader:
    """ACLs for abc_tree: A healthy, B and C carrying an orphaned SID."""
    return FakeAclReader({"A": user_snapshot(), "B": orphan_snapshot(), "C": orphan_snapshot()})
