"""Parsers for the text reports printed by powercfg

`powercfg /requests` prints one block per request category:

    DISPLAY:
    None.

    SYSTEM:
    [DRIVER] Realtek High Definition Audio (HDAUDIO\\FUNC_01...)
    An audio stream is currently in use.

Only lines starting with a caller tag are requests; the free-text lines
underneath them are comments.

`powercfg /requestsoverride` prints one block per caller kind:

    [PROCESS]
    chrome.exe SYSTEM AWAYMODE

    [SERVICE]

    [DRIVER]
    Realtek High Definition Audio SYSTEM
"""

from typing import Dict, Iterable, List, Optional

from .models import SYSTEM_CATEGORY, CallerKind, OverrideReport, RequestReport


NO_REQUESTS = "None."
SYSTEM_MARKER = " " + SYSTEM_CATEGORY


def _clean(line: str) -> str:
    # Output decoded without universal newlines keeps its carriage returns
    return line.rstrip("\r\n")


def parse_requests(lines: Iterable[str]) -> RequestReport:
    """
    Parse the output of `powercfg /requests`

    Args:
        lines: Report lines with newlines removed

    Returns:
        RequestReport mapping each category to its requests, in order
    """
    grouped: Dict[str, List[str]] = {}
    category: Optional[str] = None

    for raw in lines:
        line = _clean(raw)

        if line.endswith(':'):
            category = line[:-1]
            grouped.setdefault(category, [])
            continue

        if category is None or not line:
            continue

        if line.upper() == NO_REQUESTS.upper():
            continue

        if CallerKind.for_line(line) is not None:
            grouped[category].append(line)

    return RequestReport({key: tuple(values) for key, values in grouped.items()})


def parse_overrides(lines: Iterable[str]) -> OverrideReport:
    """
    Parse the output of `powercfg /requestsoverride`

    Only SYSTEM overrides are kept. The " SYSTEM" marker is removed so that
    what remains names the overridden component.

    Args:
        lines: Report lines with newlines removed

    Returns:
        OverrideReport mapping caller kinds to overridden component names
    """
    grouped: Dict[CallerKind, List[str]] = {}
    caller: Optional[CallerKind] = None

    for raw in lines:
        line = _clean(raw)

        if line.startswith('[') and line.endswith(']'):
            kind = CallerKind.from_tag(line)
            if kind is not None:
                caller = kind
                grouped.setdefault(caller, [])
                continue

        if caller is None or not line:
            continue

        if SYSTEM_MARKER in line:
            grouped[caller].append(line.replace(SYSTEM_MARKER, ''))

    return OverrideReport({kind: tuple(values) for kind, values in grouped.items()})
