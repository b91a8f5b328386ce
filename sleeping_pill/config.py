"""Configuration management for Sleeping Pill"""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .models import MonitorSettings


logger = logging.getLogger(__name__)

SCR_EXTENSION = ".SCR"

# Seconds
DEFAULT_SCREEN_TIME = 180
DEFAULT_IDLE_TIME = 20
DEFAULT_SAMPLE_PERIOD = 5
MINIMUM_TIME = 30          # applies to screen time and idle time
MAXIMUM_TIME = 1800
MINIMUM_SAMPLE_PERIOD = 1
MAXIMUM_SAMPLE_PERIOD = 60
DEFAULT_POWERCFG_TIMEOUT = 30
MINIMUM_POWERCFG_TIMEOUT = 1
MAXIMUM_POWERCFG_TIMEOUT = 300


def clamp(value: int, low: int, high: int) -> int:
    """Clamp value into [low, high]"""
    return min(high, max(low, value))


def is_valid_screen_saver(name: str) -> bool:
    """A screen saver process name must be something.scr"""
    return len(name) > len(SCR_EXTENSION) and name.upper().endswith(SCR_EXTENSION)


class Config:
    """Application configuration loaded from .env and environment variables"""

    def __init__(self):
        # Load .env file from project root
        env_path = Path(__file__).parent.parent / '.env'
        load_dotenv(env_path)

        # Screen saver process to watch, None for any .scr process
        self.screen_saver = self._read_screen_saver()

        # Timing (seconds)
        self.screen_time = self._read_seconds(
            'SLEEPING_PILL_TIME', DEFAULT_SCREEN_TIME, MINIMUM_TIME, MAXIMUM_TIME)
        self.idle_time = self._read_seconds(
            'SLEEPING_PILL_IDLE', DEFAULT_IDLE_TIME, MINIMUM_TIME, MAXIMUM_TIME)
        self.sample_period = self._read_seconds(
            'SLEEPING_PILL_SAMPLE', DEFAULT_SAMPLE_PERIOD, MINIMUM_SAMPLE_PERIOD, MAXIMUM_SAMPLE_PERIOD)
        self.powercfg_timeout = self._read_seconds(
            'SLEEPING_PILL_POWERCFG_TIMEOUT', DEFAULT_POWERCFG_TIMEOUT,
            MINIMUM_POWERCFG_TIMEOUT, MAXIMUM_POWERCFG_TIMEOUT)

        # Behavior
        self.verbose = self._parse_bool(os.getenv('SLEEPING_PILL_VERBOSE', 'false'))

        # Storage
        self.data_dir = self._get_data_dir()
        self.db_path = self.data_dir / 'sleeping_pill.db'
        self.log_file = os.getenv('SLEEPING_PILL_LOG_FILE') or None

    def _get_data_dir(self) -> Path:
        """Get data directory from .env or the per-user application data folder"""
        env_path = os.getenv('SLEEPING_PILL_DATA_DIR')
        if env_path:
            return Path(env_path)

        local_app_data = os.getenv('LOCALAPPDATA')
        if local_app_data:
            return Path(local_app_data) / 'SleepingPill'

        return Path.home() / '.sleeping_pill'

    def _read_screen_saver(self) -> Optional[str]:
        name = (os.getenv('SLEEPING_PILL_PROCESS') or '').strip().strip('"')
        if not name:
            return None
        if not is_valid_screen_saver(name):
            logger.warning("Ignoring SLEEPING_PILL_PROCESS=%s (expected a .scr name)", name)
            return None
        return name

    def _read_seconds(self, name: str, default: int, low: int, high: int) -> int:
        """Read a duration in seconds, clamped to bounds when present"""
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        try:
            return clamp(int(raw), low, high)
        except ValueError:
            logger.warning("Invalid %s=%r, using default %s", name, raw, default)
            return default

    def _parse_bool(self, value: str) -> bool:
        """Parse boolean string"""
        return value.lower() in ('true', '1', 'yes', 'on')

    def build_settings(
        self,
        screen_saver: Optional[str] = None,
        screen_time: Optional[int] = None,
        idle_time: Optional[int] = None,
        sample_period: Optional[int] = None,
        verbose: Optional[bool] = None,
        powercfg_timeout: Optional[int] = None
    ) -> MonitorSettings:
        """
        Combine command line values with the configured defaults

        Explicit values are clamped to their bounds. Idle time is finally
        limited to the screen time.

        Args:
            screen_saver: Screen saver process name (must end with .scr)
            screen_time: Seconds of screen saver before requests are checked
            idle_time: Seconds without requests required before sleeping
            sample_period: Seconds between samples
            verbose: Show per-sample status
            powercfg_timeout: Seconds to wait for powercfg

        Returns:
            MonitorSettings in milliseconds
        """
        if screen_saver is not None and not is_valid_screen_saver(screen_saver):
            raise ValueError(f"Invalid screen saver process: {screen_saver}. Expected a .scr name")

        screen = self.screen_time if screen_time is None else clamp(screen_time, MINIMUM_TIME, MAXIMUM_TIME)
        idle = self.idle_time if idle_time is None else clamp(idle_time, MINIMUM_TIME, MAXIMUM_TIME)
        sample = (self.sample_period if sample_period is None
                  else clamp(sample_period, MINIMUM_SAMPLE_PERIOD, MAXIMUM_SAMPLE_PERIOD))
        timeout = (self.powercfg_timeout if powercfg_timeout is None
                   else clamp(powercfg_timeout, MINIMUM_POWERCFG_TIMEOUT, MAXIMUM_POWERCFG_TIMEOUT))

        # The idle time should be less than or equal to the screen time
        idle = min(screen, idle)

        return MonitorSettings(
            screen_time_ms=screen * 1000,
            idle_time_ms=idle * 1000,
            sample_period_ms=sample * 1000,
            verbose=self.verbose if verbose is None else verbose,
            screen_saver=screen_saver or self.screen_saver,
            powercfg_timeout=float(timeout)
        )


# Global config instance
config = Config()
