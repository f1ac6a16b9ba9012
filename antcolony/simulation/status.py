"""Status sinks — where the colony reports its day label and ending.

The colony publishes one line per turn (``"Day 3, turn 7"``), one line
when the queen dies, and an empty line when it is torn down.  Hosts
implement ``StatusSink`` to show those lines; ``LoggingStatusSink`` is
the default used when nothing else is attached.
"""

from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class StatusSink(Protocol):
    """Anything that can display a one-line status message."""

    def show_status(self, message: str) -> None: ...


class LoggingStatusSink:
    """Writes status messages to the ``antcolony`` log.

    Attributes:
        last: The most recent message shown.
    """

    def __init__(self, level: int = logging.DEBUG) -> None:
        self.level = level
        self.last = ""

    def show_status(self, message: str) -> None:
        self.last = message
        if message:
            logger.log(self.level, message)
