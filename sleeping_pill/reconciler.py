"""Reconciliation of SYSTEM power requests against request overrides"""

import logging
from typing import Optional

from .models import ActiveRequestSet, CallerKind, OverrideReport, RequestReport
from .parser import parse_overrides, parse_requests
from .powercfg import PowerCfgClient
from . import ui


logger = logging.getLogger(__name__)


def is_overridden(request: str, overrides: OverrideReport) -> bool:
    """
    Check whether an override covers a request

    The override report only names the component, so a request is covered
    when it carries the override's caller tag and contains the override
    name anywhere, ignoring case.
    """
    request_upper = request.upper()
    for kind in CallerKind:
        if not request.startswith(kind.tag):
            continue
        for override in overrides.get(kind):
            if override.upper() in request_upper:
                return True
    return False


def compute_active_requests(requests: RequestReport, overrides: OverrideReport) -> ActiveRequestSet:
    """
    Get the SYSTEM requests that no override covers

    Args:
        requests: Parsed `powercfg /requests` report
        overrides: Parsed `powercfg /requestsoverride` report

    Returns:
        Requests that must be honored, in report order
    """
    system_requests = requests.system_requests()
    if not system_requests:
        return ()

    return tuple(r for r in system_requests if not is_overridden(r, overrides))


class RequestEvaluator:
    """Queries powercfg and decides which SYSTEM requests keep the machine awake"""

    def __init__(self, client: Optional[PowerCfgClient] = None, verbose: bool = False):
        self.client = client or PowerCfgClient()
        self.verbose = verbose

    def active_requests(self) -> ActiveRequestSet:
        """
        Run one evaluation

        Overrides are only queried when there are SYSTEM requests. Any
        failure while reading the reports counts as "no requests".
        """
        try:
            requests = parse_requests(self.client.list_requests())
            system_requests = requests.system_requests()

            if not system_requests:
                if self.verbose:
                    ui.print_info("There are no SYSTEM requests")
                return ()

            if self.verbose:
                ui.display_lines("SYSTEM requests:", system_requests)

            overrides = parse_overrides(self.client.list_overrides())
            if self.verbose and not overrides.is_empty():
                ui.display_lines("SYSTEM request overrides:", overrides.all_overrides())

            active = compute_active_requests(requests, overrides)

        except Exception:
            logger.exception("Failed to evaluate power requests; assuming none")
            return ()

        if self.verbose:
            if active:
                ui.display_lines("SYSTEM requests to honor:", active)
            else:
                ui.print_info("All SYSTEM requests are overridden")

        logger.debug("%d of %d SYSTEM requests active", len(active), len(system_requests))
        return active

