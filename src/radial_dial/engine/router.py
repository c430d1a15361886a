"""Route window-level pointer releases to the dials that own a drag."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

import logging

from .pointer import PointerSource

if TYPE_CHECKING:  # pragma: no cover - only for type checkers
    from .dial import Dial, Transition

logger = logging.getLogger(__name__)


class ReleaseRouter:
    """Tracks which registered dials are being dragged.

    A mouse drag may end outside the dial that started it, so mouse releases
    are observed globally and handed to the dial dragged by the mouse. Touch
    drags can run on several dials at once; a touch release only ever ends
    the drag of the dial it was addressed to.
    """

    def __init__(self) -> None:
        self._dials: List["Dial"] = []
        self._active: List["Dial"] = []

    @property
    def active(self) -> List["Dial"]:
        return list(self._active)

    @property
    def dials(self) -> List["Dial"]:
        return list(self._dials)

    def register(self, dial: "Dial") -> None:
        if dial not in self._dials:
            self._dials.append(dial)

    def unregister(self, dial: "Dial") -> None:
        if dial in self._dials:
            self._dials.remove(dial)
        self.forget(dial)

    def claim(self, dial: "Dial") -> None:
        if dial not in self._dials:
            raise ValueError("Dial is not registered with this router.")
        if dial not in self._active:
            self._active.append(dial)

    def forget(self, dial: "Dial") -> None:
        if dial in self._active:
            self._active.remove(dial)

    def release(
        self, source: PointerSource, dial: Optional["Dial"] = None
    ) -> List["Transition"]:
        """End the drags started from ``source``; a no-op when none match.

        A touch release without a target ``dial`` ends nothing.
        """
        touch = source is PointerSource.TOUCH
        if touch and dial is None:
            return []
        targets = [
            d
            for d in self._active
            if d.machine.touch_drag == touch and (dial is None or d is dial)
        ]
        transitions = []
        for target in targets:
            logger.debug(
                "routing %s release to %r",
                source.value,
                target.config.display_name or target,
            )
            # Dial.release() calls forget() on us when it accepts.
            transitions.append(target.release())
            self.forget(target)
        return transitions


__all__ = ["ReleaseRouter"]
