"""Screen saver duration tracking and the decision to sleep"""

from typing import Callable

from .models import ActiveRequestSet, MonitorSettings, TickResult, TrackerPhase, TrackerState


def advance(
    state: TrackerState,
    settings: MonitorSettings,
    screen_saver_running: bool,
    evaluate: Callable[[], ActiveRequestSet]
) -> TickResult:
    """
    Advance the tracker by one sample period

    Args:
        state: Counters after the previous tick
        settings: Screen time, idle time and sample period
        screen_saver_running: Whether the screen saver runs at this sample
        evaluate: Returns the active SYSTEM requests; only called once the
            screen saver has run for screen time minus idle time

    Returns:
        TickResult with the new state. When fire_sleep is set the state is
        already reset.
    """
    if not screen_saver_running:
        return TickResult(TrackerState.initial(), TrackerPhase.IDLE)

    period = settings.sample_period_ms
    screen_elapsed = state.screen_saver_elapsed_ms + period

    if screen_elapsed < settings.threshold_ms:
        # Screen saver hasn't been on long enough yet
        return TickResult(TrackerState(screen_elapsed, 0), TrackerPhase.BELOW_THRESHOLD)

    active = evaluate()
    if active:
        # A request that must be honored restarts the idle clock
        return TickResult(
            TrackerState(screen_elapsed, 0),
            TrackerPhase.AWAITING_IDLE_CONFIRMATION,
            active_requests=active
        )

    idle_elapsed = state.idle_without_request_elapsed_ms + period
    if idle_elapsed >= settings.idle_time_ms:
        return TickResult(
            TrackerState.initial(),
            TrackerPhase.AWAITING_IDLE_CONFIRMATION,
            fire_sleep=True,
            active_requests=active
        )

    return TickResult(
        TrackerState(screen_elapsed, idle_elapsed),
        TrackerPhase.AWAITING_IDLE_CONFIRMATION,
        active_requests=active
    )


class DurationTracker:
    """Holds the tracker state between ticks of the monitor loop"""

    def __init__(self, settings: MonitorSettings):
        self.settings = settings
        self._state = TrackerState.initial()

    @property
    def state(self) -> TrackerState:
        return self._state

    def tick(self, screen_saver_running: bool, evaluate: Callable[[], ActiveRequestSet]) -> TickResult:
        """Apply one sample and keep the resulting state"""
        result = advance(self._state, self.settings, screen_saver_running, evaluate)
        self._state = result.state
        return result

    def reset(self):
        """Forget accumulated time"""
        self._state = TrackerState.initial()
