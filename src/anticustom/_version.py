"""Version lookup for the CLI and ``anticustom.__version__``."""

import tomllib
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version
from pathlib import Path

_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def get_version() -> str:
    """Version from a source checkout's pyproject.toml, else installed metadata."""
    if _PYPROJECT.is_file():
        with _PYPROJECT.open("rb") as f:
            project = tomllib.load(f).get("project", {})
        if project.get("name") == "anticustom" and project.get("version"):
            return str(project["version"])
    try:
        return _metadata_version("anticustom")
    except PackageNotFoundError:
        return "0.0.0"
