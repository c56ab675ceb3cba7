"""Version management for Wayfinder API.

Reads the version from installed package metadata, falling back to
pyproject.toml when running from a source checkout.
"""

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

# src/api/infrastructure/version.py -> repository root
_PYPROJECT_PATH = Path(__file__).resolve().parents[3] / "pyproject.toml"


def get_version() -> str:
    """Get the application version.

    Returns:
        Version string (e.g., "0.1.0")
    """
    try:
        return version("wayfinder-api")
    except PackageNotFoundError:
        with open(_PYPROJECT_PATH, "rb") as f:
            pyproject_data = tomllib.load(f)

        return pyproject_data["project"]["version"]


__version__ = get_version()
