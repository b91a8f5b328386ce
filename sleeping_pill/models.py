"""Data models for power requests, overrides, tracker state and settings"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Tuple


SYSTEM_CATEGORY = "SYSTEM"

# SYSTEM requests that no override suppresses, as reported by powercfg
ActiveRequestSet = Tuple[str, ...]


class CallerKind(Enum):
    """Kind of component that placed a power request"""
    DRIVER = "[DRIVER]"
    PROCESS = "[PROCESS]"
    SERVICE = "[SERVICE]"

    @property
    def tag(self) -> str:
        """Literal tag as printed by powercfg"""
        return self.value

    @classmethod
    def from_tag(cls, text: str) -> Optional['CallerKind']:
        """Get the caller kind whose tag is exactly `text`"""
        return _TAG_LOOKUP.get(text)

    @classmethod
    def for_line(cls, text: str) -> Optional['CallerKind']:
        """Get the first caller kind whose tag starts `text`"""
        for kind in cls:
            if text.startswith(kind.tag):
                return kind
        return None


_TAG_LOOKUP: Dict[str, CallerKind] = {kind.tag: kind for kind in CallerKind}


@dataclass(frozen=True)
class RequestReport:
    """Requests grouped by category, as reported by `powercfg /requests`"""
    requests: Dict[str, Tuple[str, ...]] = field(default_factory=dict)

    def get(self, category: str) -> Tuple[str, ...]:
        """
        Get requests for a category, ignoring case; empty if absent

        Headers that differ only in case are one category, so their
        requests are joined in report order.
        """
        wanted = category.upper()
        return tuple(
            request
            for key, values in self.requests.items()
            if key.upper() == wanted
            for request in values
        )

    def categories(self) -> List[str]:
        """Category names in the order they were reported"""
        return list(self.requests)

    def system_requests(self) -> Tuple[str, ...]:
        """Shortcut for the SYSTEM category"""
        return self.get(SYSTEM_CATEGORY)


@dataclass(frozen=True)
class OverrideReport:
    """SYSTEM overrides grouped by caller kind, from `powercfg /requestsoverride`"""
    overrides: Dict[CallerKind, Tuple[str, ...]] = field(default_factory=dict)

    def get(self, kind: CallerKind) -> Tuple[str, ...]:
        """Get overrides for a caller kind; empty if absent"""
        return self.overrides.get(kind, ())

    def is_empty(self) -> bool:
        """True when no override strings were reported"""
        return not any(self.overrides.values())

    def all_overrides(self) -> List[str]:
        """Every override string, in section order"""
        return [o for values in self.overrides.values() for o in values]


class TrackerPhase(Enum):
    """Where the duration tracker stands after a tick"""
    IDLE = "idle"
    BELOW_THRESHOLD = "below_threshold"
    AWAITING_IDLE_CONFIRMATION = "awaiting_idle_confirmation"


@dataclass(frozen=True)
class TrackerState:
    """Counters carried from one sample tick to the next"""
    screen_saver_elapsed_ms: int = 0
    idle_without_request_elapsed_ms: int = 0

    @classmethod
    def initial(cls) -> 'TrackerState':
        return cls(0, 0)


@dataclass(frozen=True)
class TickResult:
    """Outcome of one tracker transition"""
    state: TrackerState
    phase: TrackerPhase
    fire_sleep: bool = False
    active_requests: Optional[ActiveRequestSet] = None  # None when not evaluated


@dataclass(frozen=True)
class MonitorSettings:
    """Validated settings consumed by the monitor loop"""
    screen_time_ms: int
    idle_time_ms: int
    sample_period_ms: int
    verbose: bool = False
    screen_saver: Optional[str] = None  # None means any .scr process
    powercfg_timeout: float = 30.0

    @property
    def threshold_ms(self) -> int:
        """Screen saver time after which requests are evaluated"""
        return self.screen_time_ms - self.idle_time_ms

    def describe_screen_saver(self) -> str:
        return self.screen_saver or "Any screen saver"


@dataclass
class SleepEvent:
    """Represents a recorded sleep action"""
    id: Optional[int]
    timestamp: str

    @classmethod
    def from_db_row(cls, row) -> 'SleepEvent':
        """Create SleepEvent from database row"""
        return cls(
            id=row['id'],
            timestamp=row['timestamp']
        )

    def get_datetime(self) -> datetime:
        """Get timestamp as datetime"""
        return datetime.fromisoformat(self.timestamp)
