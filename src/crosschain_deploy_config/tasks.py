"""Task registry and loading of task modules by category."""

import importlib
import importlib.util
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Set, Tuple, Union

from .environment import SKIP_LOAD_ENV, env_flag, resolve_env
from .exceptions import TaskLoadError
from .paths import get_task_category_paths

logger = logging.getLogger(__name__)

# Load order of task categories
TASK_CATEGORIES: Tuple[str, ...] = ("deploy", "governance", "l2", "misc", "setup", "verify")

# A dotted module name, or the path of a task file
ManifestEntry = Union[str, Path]

# Category -> manifest entries, loaded in order
TaskManifest = Mapping[str, Sequence[ManifestEntry]]


@dataclass(frozen=True)
class Task:
    """A named command contributed by a task module."""

    name: str
    action: Callable[..., object]
    description: str = ""


class TaskRegistry:
    """Registered tasks, enumerable in registration order."""

    def __init__(self) -> None:
        self._tasks: Dict[str, Task] = {}

    def register(self, name: str, action: Callable[..., object], description: str = "") -> Task:
        """
        Register a task under a unique name.

        Raises:
            TaskLoadError: If the name is already taken
        """
        if name in self._tasks:
            raise TaskLoadError(f"Task '{name}' is already registered")
        registered = Task(name=name, action=action, description=description)
        self._tasks[name] = registered
        return registered

    def task(self, name: str, description: str = "") -> Callable[[Callable[..., object]], Callable[..., object]]:
        """Decorator form of register(); returns the function unchanged."""

        def decorator(action: Callable[..., object]) -> Callable[..., object]:
            self.register(name, action, description)
            return action

        return decorator

    def get(self, name: str) -> Task:
        try:
            return self._tasks[name]
        except KeyError as e:
            raise KeyError(f"Task '{name}' is not registered") from e

    def unregister(self, name: str) -> None:
        self._tasks.pop(name, None)

    def names(self) -> List[str]:
        return list(self._tasks)

    def __contains__(self, name: object) -> bool:
        return name in self._tasks

    def __len__(self) -> int:
        return len(self._tasks)


# Process-wide registry that task modules register into
registry = TaskRegistry()


def task(name: str, description: str = "") -> Callable[[Callable[..., object]], Callable[..., object]]:
    """Register the decorated function as a task in the process-wide registry."""
    return registry.task(name, description)


def should_skip_loading(env: Optional[Mapping[str, str]] = None) -> bool:
    """Check the SKIP_LOAD flag."""
    return env_flag(resolve_env(env), SKIP_LOAD_ENV)


def discover_task_manifest(
    tasks_root: Optional[Union[Path, str]] = None,
    categories: Sequence[str] = TASK_CATEGORIES,
) -> Dict[str, Tuple[Path, ...]]:
    """
    Build a task manifest from a folder layout.

    Expects ``<tasks_root>/<category>/<module>.py``. Files are listed by
    name; files starting with an underscore are skipped. Entries are file
    paths, so the tasks root does not need to be importable.

    Args:
        tasks_root: Tasks directory (defaults to ./tasks)
        categories: Categories to scan, in load order

    Returns:
        Manifest mapping category -> sorted task file paths

    Raises:
        TaskLoadError: If a category folder is missing
    """
    category_paths = get_task_category_paths(categories, tasks_root)
    manifest: Dict[str, Tuple[Path, ...]] = {}

    for category, folder in category_paths.items():
        if not folder.is_dir():
            raise TaskLoadError(f"Task folder for category '{category}' not found: {folder}")

        manifest[category] = tuple(
            path for path in sorted(folder.glob("*.py")) if not path.name.startswith("_")
        )

    return manifest


def task_module_name(entry: ManifestEntry) -> str:
    """
    Module name a manifest entry is loaded under.

    Dotted names are used as given. A file path is named
    ``<tasks root>.<category>.<stem>`` after its two parent folders.
    """
    if isinstance(entry, Path):
        return f"{entry.parent.parent.name}.{entry.parent.name}.{entry.stem}"
    return entry


def _import_task_module(entry: ManifestEntry) -> str:
    module_name = task_module_name(entry)
    if not isinstance(entry, Path):
        importlib.import_module(module_name)
        return module_name
    if module_name in sys.modules:
        return module_name

    spec = importlib.util.spec_from_file_location(module_name, entry)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot load task file {entry}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        del sys.modules[module_name]
        raise
    return module_name


def load_tasks(
    manifest: TaskManifest,
    skip: bool = False,
    categories: Sequence[str] = TASK_CATEGORIES,
) -> List[str]:
    """
    Import every task module of every category.

    Loading is all or nothing: when a module fails, tasks registered and
    modules imported earlier in the same call are removed again before the
    error is raised.

    Args:
        manifest: Category -> dotted module names or task file paths
        skip: Load nothing when True
        categories: Category load order

    Returns:
        Loaded module names, in load order

    Raises:
        TaskLoadError: If a category is missing from the manifest or a
                       module fails to import
    """
    if skip:
        logger.debug("Task loading skipped")
        return []

    missing = [category for category in categories if category not in manifest]
    if missing:
        raise TaskLoadError(f"Task category '{missing[0]}' missing from manifest")

    target = registry
    registered_before = set(target.names())
    loaded: List[str] = []
    imported: List[str] = []

    for category in categories:
        for entry in manifest[category]:
            module_name = task_module_name(entry)
            already_imported = module_name in sys.modules
            try:
                _import_task_module(entry)
            except Exception as e:
                _roll_back(target, registered_before, imported)
                raise TaskLoadError(
                    f"Failed to load task module '{module_name}' in category '{category}': {e}"
                ) from e
            if not already_imported:
                imported.append(module_name)
            loaded.append(module_name)

    logger.debug("Loaded %d task modules", len(loaded))
    return loaded


def _roll_back(target: TaskRegistry, registered_before: Set[str], imported: Sequence[str]) -> None:
    for name in target.names():
        if name not in registered_before:
            target.unregister(name)
    for module_name in imported:
        sys.modules.pop(module_name, None)
    logger.debug("Rolled back %d task modules", len(imported))


def load_tasks_from_env(
    env: Optional[Mapping[str, str]] = None,
    manifest: Optional[TaskManifest] = None,
    tasks_root: Optional[Union[Path, str]] = None,
) -> List[str]:
    """
    Startup entry point: honour SKIP_LOAD, then load the given or discovered manifest.

    Discovery does not run at all when loading is skipped.
    """
    if should_skip_loading(env):
        return load_tasks({}, skip=True)

    if manifest is None:
        manifest = discover_task_manifest(tasks_root)
    return load_tasks(manifest)
