"""Detection of a running screen saver process"""

from typing import Optional

import psutil

from .config import SCR_EXTENSION


def _process_names():
    """Yield names of running processes, skipping ones that vanish or deny access"""
    for proc in psutil.process_iter(['name']):
        try:
            name = proc.info.get('name')
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            continue
        if name:
            yield name


def is_screen_saver_running(process_name: Optional[str] = None) -> bool:
    """
    Check whether a screen saver is running

    Args:
        process_name: Specific screen saver (e.g. "Mystify.scr"). When not
            given, any process ending with .scr counts.

    Returns:
        True if a matching process is running
    """
    if process_name:
        wanted = process_name.upper()
        return any(name.upper() == wanted for name in _process_names())

    return any(name.upper().endswith(SCR_EXTENSION) for name in _process_names())


class ScreenSaverDetector:
    """Callable screen saver check bound to the configured process name"""

    def __init__(self, process_name: Optional[str] = None):
        self.process_name = process_name

    def __call__(self) -> bool:
        return is_screen_saver_running(self.process_name)
