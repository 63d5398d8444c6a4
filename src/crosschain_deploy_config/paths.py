"""Path management utilities for crosschain-deploy-config library."""

from pathlib import Path
from typing import Dict, Iterable, Optional, Union


def get_default_tasks_dir() -> Path:
    """
    Get default task scripts directory.

    Returns:
        Path to ./tasks
    """
    return Path.cwd() / "tasks"


def get_task_category_paths(
    categories: Iterable[str], tasks_root: Optional[Union[Path, str]] = None
) -> Dict[str, Path]:
    """
    Get the folder of each task category.

    Args:
        categories: Category names, in load order
        tasks_root: Custom tasks directory (defaults to ./tasks)

    Returns:
        Dictionary mapping category -> folder path, in the given order
    """
    if tasks_root is None:
        tasks_root = get_default_tasks_dir()
    else:
        tasks_root = Path(tasks_root).absolute()

    return {category: tasks_root / category for category in categories}
