"""The sleep action: record it, then suspend the machine"""

import logging
import sqlite3
from typing import Callable, Optional

from .counter import SleepCounter, sleep_counter
from .power import PowerError, suspend_system
from . import ui


logger = logging.getLogger(__name__)


class SleepTrigger:
    """Suspends the computer and keeps count of how often it did"""

    def __init__(
        self,
        counter: Optional[SleepCounter] = None,
        suspend: Callable[[], None] = suspend_system,
        verbose: bool = False
    ):
        self.counter = counter or sleep_counter
        self.suspend = suspend
        self.verbose = verbose

    def fire(self):
        """
        Record the sleep action and suspend

        When run from Task Scheduler there is no console, so the counter is
        the only trace of what happened. Recording is best effort: a failure
        is reported and the machine is suspended anyway.
        """
        if self.verbose:
            ui.print_warning("Putting the computer to sleep")

        try:
            count = self.counter.increment_and_stamp()
            logger.info("Sleep action #%d", count)
        except (sqlite3.Error, OSError) as e:
            logger.error("Failed to update sleep count in %s: %s", self.counter.db.db_path, e)
            ui.print_error(f"Failed to update the sleep count: {e}")

        try:
            self.suspend()
        except PowerError as e:
            logger.error("Suspend failed: %s", e)
            ui.print_error(f"Could not put the computer to sleep: {e}")
