"""Top-level package for dochistory.

Provides subpackages:
- dochistory_toolkit.layout – grid planning for tiled pages
- dochistory_toolkit.documents – PDF decoding (PyMuPDF)
- dochistory_toolkit.output – frame rendering and PNG writing
- dochistory_toolkit.history – two-pass revision history pipeline
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            for line in pyproject.read_text().splitlines():
                if line.strip().startswith("version"):
                    # Parse: version = "0.3.0"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    try:
        from importlib.metadata import PackageNotFoundError, version as pkg_version
        return pkg_version("dochistory")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__copyright__ = "Copyright 2026 dochistory contributors. Licensed under the MIT License"
__all__: list[str] = ["__version__"]
