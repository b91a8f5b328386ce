"""Operating system power calls and the checks needed before using them"""

import ctypes
import logging
import os
import platform
import struct
import subprocess
import sys
from typing import List, Optional


logger = logging.getLogger(__name__)


class PowerError(RuntimeError):
    """The operating system refused to suspend"""


def suspend_system():
    """
    Put the computer to sleep

    Windows: SetSuspendState(hibernate=False, force=True, wake events enabled).
    Elsewhere: systemctl suspend.

    Raises:
        PowerError: if the suspend request fails
    """
    if sys.platform == "win32":
        try:
            ok = ctypes.windll.powrprof.SetSuspendState(False, True, False)
        except (AttributeError, OSError) as e:
            raise PowerError(f"SetSuspendState unavailable: {e}") from e
        if not ok:
            raise PowerError(f"SetSuspendState failed: {ctypes.WinError()}")
        return

    try:
        result = subprocess.run(['systemctl', 'suspend'], capture_output=True, text=True)
    except OSError as e:
        raise PowerError(f"systemctl suspend failed: {e}") from e
    if result.returncode != 0:
        raise PowerError(f"systemctl suspend exited with code {result.returncode}: {result.stderr.strip()}")


def is_running_as_admin() -> bool:
    """True if the process can query power requests (administrator/root)"""
    try:
        if sys.platform == "win32":
            return bool(ctypes.windll.shell32.IsUserAnAdmin())
        return os.geteuid() == 0
    except (AttributeError, OSError):
        return False


def interpreter_bits() -> int:
    """Pointer size of this interpreter in bits"""
    return struct.calcsize("P") * 8


def os_is_64bit() -> bool:
    """True if the operating system is 64-bit"""
    if sys.platform == "win32":
        # A 32-bit interpreter on 64-bit Windows sees the native architecture here
        arch = os.environ.get('PROCESSOR_ARCHITEW6432') or os.environ.get('PROCESSOR_ARCHITECTURE', '')
        return arch.upper().endswith('64')
    return platform.machine().endswith('64')


def architecture_mismatch() -> Optional[str]:
    """
    Check that the interpreter matches the operating system

    powercfg does not report requests correctly to a 32-bit process on a
    64-bit system.

    Returns:
        Message naming the interpreter to use, or None if they match
    """
    bits = interpreter_bits()
    if os_is_64bit():
        if bits != 64:
            return "Use a 64-bit Python interpreter on this 64-bit system"
    elif bits != 32:
        return "Use a 32-bit Python interpreter on this 32-bit system"
    return None


def preflight() -> List[str]:
    """
    List the problems that would stop powercfg from being queried

    Returns:
        Problem descriptions; empty when the monitor can run
    """
    problems = []

    if sys.platform != "win32":
        problems.append(f"powercfg is only available on Windows (running on {platform.system()})")

    if not is_running_as_admin():
        problems.append("Run as administrator so powercfg can report requests")

    mismatch = architecture_mismatch()
    if mismatch:
        problems.append(mismatch)

    for problem in problems:
        logger.debug("Preflight: %s", problem)

    return problems
