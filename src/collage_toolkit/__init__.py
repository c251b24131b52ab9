"""Top-level package for the collage toolkit.

Provides subpackages:
- collage_toolkit.core – immutable value objects, schemas, serialization
- collage_toolkit.common – paper sizes and tuning thresholds
- collage_toolkit.layout – layout algorithms, optimizer and orchestrator
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from importlib.metadata import PackageNotFoundError, version as pkg_version
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        for line in pyproject.read_text(encoding="utf-8").splitlines():
            if line.strip().startswith("version"):
                # Parse: version = "0.3.1"
                return line.split("=")[1].strip().strip('"').strip("'")

    try:
        return pkg_version("collage-toolkit")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
