"""
Top-level package for the clustering playground.

This package contains the seed-driven synthetic 2D dataset generators,
upload validation, clustering orchestration and the experiment CLI.
"""

from importlib.metadata import PackageNotFoundError, version


def get_version() -> str:
    """
    Return the installed package version if available.

    This is safe to call even when the project is not installed
    as a package; in that case a default string is returned.

    Returns:
        str: Semantic version string or a fallback value.
    """
    try:
        return version("clusterviz")
    except PackageNotFoundError:
        return "0.0.0"


__all__ = ["get_version"]
