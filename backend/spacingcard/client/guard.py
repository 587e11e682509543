"""
SpacingCard Client — Navigation Guard
=======================================

What:  Unsaved-changes flag consulted before the user leaves the form.
How:   SpacingForm arms the guard while a save is pending and disarms it
       once the PATCH fires; the host asks confirm_leave() before closing.
"""

import logging
from typing import Callable

logger = logging.getLogger(__name__)

DEFAULT_PROMPT = "You have unsaved spacing changes. Leave anyway?"


class NavigationGuard:
    """Dirty flag plus a leave-confirmation hook."""

    def __init__(self, prompt: str = DEFAULT_PROMPT):
        self.prompt = prompt
        self._armed = False

    @property
    def armed(self) -> bool:
        return self._armed

    def arm(self) -> None:
        if not self._armed:
            logger.debug("Navigation guard armed")
        self._armed = True

    def disarm(self) -> None:
        if self._armed:
            logger.debug("Navigation guard disarmed")
        self._armed = False

    def confirm_leave(self, confirm: Callable[[str], bool]) -> bool:
        """True when leaving is allowed; asks `confirm` only while armed."""
        if not self._armed:
            return True
        return bool(confirm(self.prompt))
