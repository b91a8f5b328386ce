"""The sample loop that watches the screen saver and decides when to sleep"""

import logging
import time
from typing import Callable, Optional

from .models import MonitorSettings, TickResult
from .reconciler import RequestEvaluator
from .tracker import DurationTracker
from .trigger import SleepTrigger
from . import ui


logger = logging.getLogger(__name__)


class SleepMonitor:
    """Samples the screen saver on a fixed period and fires the sleep trigger"""

    def __init__(
        self,
        settings: MonitorSettings,
        detector: Callable[[], bool],
        evaluator: RequestEvaluator,
        trigger: SleepTrigger,
        sleep: Callable[[float], None] = time.sleep
    ):
        self.settings = settings
        self.detector = detector
        self.evaluator = evaluator
        self.trigger = trigger
        self.tracker = DurationTracker(settings)
        self._sleep = sleep

    def run(self):
        """Loop until the process is stopped"""
        logger.info("Monitoring %s", self.settings.describe_screen_saver().lower())
        while True:
            self._sleep(self.settings.sample_period_ms / 1000)
            self.run_once()

    def run_once(self) -> Optional[TickResult]:
        """
        Take one sample

        Returns:
            TickResult, or None if the tick failed
        """
        try:
            if self.settings.verbose:
                ui.console.clear()

            running = self._screen_saver_running()
            result = self.tracker.tick(running, self.evaluator.active_requests)

            if self.settings.verbose:
                ui.display_status(result, self.settings)

            if result.fire_sleep:
                logger.info("No SYSTEM requests for %ss; sleeping",
                            self.settings.idle_time_ms // 1000)
                self.trigger.fire()

            return result

        except Exception:
            # Nothing escapes a sample
            logger.exception("Sample failed")
            return None

    def _screen_saver_running(self) -> bool:
        try:
            return bool(self.detector())
        except Exception as e:
            logger.warning("Could not list processes: %s", e)
            return False
