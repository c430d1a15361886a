"""Minimal version helper for the radial_dial package."""

from importlib import metadata

PACKAGE_NAME = "radial_dial"
DISTRIBUTION_NAME = "radial-dial"
UNKNOWN_VERSION = "0.0.0"


def get_version() -> str:
    """
    Get version for application.

    Installed packages report the version setuptools_scm wrote into the
    distribution metadata at build time.

    :return: Version number.
    """
    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:  # running from a source checkout
        return UNKNOWN_VERSION


__all__ = ["get_version"]
