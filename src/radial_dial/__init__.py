"""radial_dial package: a quantized radial range-input control.

The engine (:mod:`radial_dial.engine`) is importable without Qt; ``main`` loads
the PySide6 application lazily.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ._version import get_version

__version__ = get_version()

if TYPE_CHECKING:  # pragma: no cover - only for type checkers
    from .app import main as _main_type  # noqa: F401


def main() -> None:
    """Entry point for ``python -m radial_dial`` and console scripts."""
    from .app import main as _main

    _main()


__all__ = ["main", "__version__", "get_version"]
