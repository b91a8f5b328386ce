"""Invocation of powercfg.exe, the Windows power configuration tool"""

import logging
import subprocess
from typing import List

from .config import DEFAULT_POWERCFG_TIMEOUT


logger = logging.getLogger(__name__)

POWERCFG_EXE = "powercfg.exe"
REQUESTS_ARG = "/requests"
OVERRIDES_ARG = "/requestsoverride"


def run_powercfg(argument: str, timeout: float = DEFAULT_POWERCFG_TIMEOUT) -> List[str]:
    """
    Run powercfg with one argument and return its output lines

    Failures are logged and give an empty list, which the parsers read as
    "no requests". Callers therefore fail open towards allowing sleep.

    Args:
        argument: E.g. /requests or /requestsoverride
        timeout: Seconds to wait before giving up on the tool

    Returns:
        Output lines with newlines removed
    """
    try:
        result = subprocess.run(
            [POWERCFG_EXE, argument],
            capture_output=True,
            text=True,
            timeout=timeout
        )
    except FileNotFoundError:
        logger.warning("%s not found; treating %s as empty", POWERCFG_EXE, argument)
        return []
    except subprocess.TimeoutExpired:
        logger.warning("%s %s did not answer within %ss; treating as empty",
                       POWERCFG_EXE, argument, timeout)
        return []
    except OSError as e:
        logger.warning("Could not run %s %s: %s; treating as empty", POWERCFG_EXE, argument, e)
        return []

    if result.returncode != 0:
        # powercfg prints its errors (e.g. missing admin rights) on stdout
        detail = (result.stderr or result.stdout or "").strip()
        logger.warning("%s %s exited with code %s: %s",
                       POWERCFG_EXE, argument, result.returncode, detail)
        return []

    lines = (result.stdout or "").splitlines()
    if not lines:
        logger.warning("%s %s produced no output; treating as empty", POWERCFG_EXE, argument)

    return lines


class PowerCfgClient:
    """Runs the two powercfg queries the monitor needs"""

    def __init__(self, timeout: float = DEFAULT_POWERCFG_TIMEOUT):
        self.timeout = timeout

    def list_requests(self) -> List[str]:
        """Output of `powercfg /requests`"""
        return run_powercfg(REQUESTS_ARG, self.timeout)

    def list_overrides(self) -> List[str]:
        """Output of `powercfg /requestsoverride`"""
        return run_powercfg(OVERRIDES_ARG, self.timeout)
