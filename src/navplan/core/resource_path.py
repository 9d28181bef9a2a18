"""Resolution of configuration and data files shipped with the project.

Typical usage:
    from navplan.core.resource_path import get_config_path

    settings = get_config_path("navplan.yaml")
"""

from pathlib import Path


def get_project_root() -> Path:
    """Get the project root directory (parent of ``src``)."""
    return Path(__file__).resolve().parent.parent.parent.parent


def get_config_path(config_file: str) -> Path:
    """Get path to a file in the ``config`` directory.

    Examples:
        >>> get_config_path("fleet.yaml").name
        'fleet.yaml'
    """
    return get_project_root() / "config" / config_file


def get_data_path(data_file: str) -> Path:
    """Get path to a file in the ``data`` directory."""
    return get_project_root() / "data" / data_file
