"""Shared pytest fixtures for crosschain-deploy-config tests."""

import importlib
import uuid
from pathlib import Path
from typing import Callable, Dict, Mapping

import pytest

from crosschain_deploy_config import tasks

# Public development mnemonic and its first derived key
TEST_MNEMONIC = "test test test test test test test test test test test junk"
TEST_PRIVATE_KEY_0 = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"


@pytest.fixture
def empty_env() -> Dict[str, str]:
    """Environment with no variables set."""
    return {}


@pytest.fixture
def mnemonic_env() -> Dict[str, str]:
    """Environment with only a seed phrase."""
    return {"MNEMONIC": TEST_MNEMONIC}


@pytest.fixture
def private_key_env() -> Dict[str, str]:
    """Environment with both a raw key and a seed phrase."""
    return {"PRIVATE_KEY": TEST_PRIVATE_KEY_0, "MNEMONIC": TEST_MNEMONIC}


@pytest.fixture
def fresh_registry(monkeypatch) -> tasks.TaskRegistry:
    """Replace the process-wide task registry for the duration of a test."""
    new_registry = tasks.TaskRegistry()
    monkeypatch.setattr(tasks, "registry", new_registry)
    return new_registry


@pytest.fixture
def make_tasks_root(tmp_path: Path) -> Callable[[Mapping[str, Mapping[str, str]]], Path]:
    """
    Build a tasks folder under tmp_path, which is not on sys.path.

    The returned factory takes category -> {file name: source} and returns
    the tasks root. Each root gets a unique package name so imports from
    different tests never collide in sys.modules.
    """

    def factory(layout: Mapping[str, Mapping[str, str]]) -> Path:
        root = tmp_path / f"tasks_{uuid.uuid4().hex}"
        root.mkdir()
        (root / "__init__.py").write_text("")
        for category, files in layout.items():
            folder = root / category
            folder.mkdir()
            (folder / "__init__.py").write_text("")
            for filename, source in files.items():
                (folder / filename).write_text(source)
        importlib.invalidate_caches()
        return root

    return factory


@pytest.fixture
def all_categories_layout() -> Dict[str, Dict[str, str]]:
    """One registering task module per category."""
    layout: Dict[str, Dict[str, str]] = {}
    for category in tasks.TASK_CATEGORIES:
        layout[category] = {
            f"{category}_task.py": (
                "from crosschain_deploy_config.tasks import task\n"
                "\n"
                f"@task('{category}-run', 'Run {category} step')\n"
                "def run():\n"
                f"    return '{category}'\n"
            )
        }
    return layout
