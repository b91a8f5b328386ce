"""Reporting on recorded sleep actions"""

from datetime import datetime
from typing import Optional

from .counter import SleepCounter, sleep_counter


RECENT_EVENTS = 5


class Reporter:
    """Generates the sleep statistics report"""

    def __init__(self, counter: Optional[SleepCounter] = None):
        self.counter = counter or sleep_counter

    def format_age(self, when: datetime, now: Optional[datetime] = None) -> str:
        """Format how long ago something happened"""
        delta = (now or datetime.now()) - when

        if delta.days > 1:
            return f"{delta.days} days ago"
        if delta.days == 1:
            return "Yesterday"

        hours = delta.seconds // 3600
        minutes = (delta.seconds % 3600) // 60
        if hours > 0:
            return f"{hours}h {minutes}m ago"
        return f"{minutes}m ago"

    def generate_stats_report(self, days: int = 7, now: Optional[datetime] = None) -> str:
        """Generate the sleep statistics summary"""
        total = self.counter.get_count()

        if total == 0:
            return "The computer has not been put to sleep yet."

        lines = [
            "Sleep Summary",
            "=" * 60,
            f"Total: {total} sleep action{'s' if total != 1 else ''}",
        ]

        last_event = self.counter.get_last_event()
        if last_event:
            last = last_event.get_datetime()
            lines.append(f"Last: {last.strftime('%Y-%m-%d %H:%M')} ({self.format_age(last, now)})")

        lines.extend([
            "",
            f"Last {days} days:",
            "-" * 60
        ])

        for day, count in self.counter.events_per_day(days, today=now).items():
            weekday = datetime.fromisoformat(day).strftime('%a')
            bar = "█" * count
            lines.append(f"{weekday} {day}  {count:>3}  {bar}")

        lines.extend([
            "",
            "Recent:",
            "-" * 60
        ])
        for event in self.counter.get_recent_events(RECENT_EVENTS):
            when = event.get_datetime()
            lines.append(f"{when.strftime('%Y-%m-%d %H:%M')}  {self.format_age(when, now)}")

        return "\n".join(lines)


# Global reporter instance
reporter = Reporter()
