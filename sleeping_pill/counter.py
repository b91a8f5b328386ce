"""Persisted count of the sleep actions taken"""

from datetime import datetime, timedelta
from typing import Dict, List, Optional

from .database import Database, db
from .models import SleepEvent


class SleepCounter:
    """Records each sleep action with its timestamp"""

    def __init__(self, database: Optional[Database] = None):
        self.db = database or db

    def increment_and_stamp(self, when: Optional[datetime] = None) -> int:
        """
        Record a sleep action

        Args:
            when: Time of the action (defaults to now)

        Returns:
            Total number of recorded sleep actions
        """
        stamp = (when or datetime.now()).isoformat(timespec='seconds')
        with self.db.transaction() as conn:
            conn.execute("INSERT INTO sleep_events (timestamp) VALUES (?)", (stamp,))
            row = conn.execute("SELECT COUNT(*) AS total FROM sleep_events").fetchone()
        return row['total']

    def get_count(self) -> int:
        """Number of recorded sleep actions"""
        row = self.db.fetch_one("SELECT COUNT(*) AS total FROM sleep_events")
        return row['total'] if row else 0

    def get_last_event(self) -> Optional[SleepEvent]:
        """Most recent sleep action"""
        row = self.db.fetch_one("""
            SELECT * FROM sleep_events
            ORDER BY timestamp DESC, id DESC
            LIMIT 1
        """)
        return SleepEvent.from_db_row(row) if row else None

    def get_recent_events(self, limit: int = 10) -> List[SleepEvent]:
        """Most recent sleep actions, newest first"""
        rows = self.db.fetch_all("""
            SELECT * FROM sleep_events
            ORDER BY timestamp DESC, id DESC
            LIMIT ?
        """, (limit,))
        return [SleepEvent.from_db_row(row) for row in rows]

    def events_per_day(self, days: int = 7, today: Optional[datetime] = None) -> Dict[str, int]:
        """
        Count sleep actions per day

        Args:
            days: Number of days to include, ending today
            today: Reference day (defaults to now)

        Returns:
            Dict mapping YYYY-MM-DD to count, oldest first, zero days included
        """
        end_day = (today or datetime.now()).date()
        start_day = end_day - timedelta(days=days - 1)

        counts = {(start_day + timedelta(days=i)).isoformat(): 0 for i in range(days)}

        rows = self.db.fetch_all("""
            SELECT substr(timestamp, 1, 10) AS day, COUNT(*) AS total
            FROM sleep_events
            WHERE timestamp >= ?
            GROUP BY day
        """, (start_day.isoformat(),))

        for row in rows:
            if row['day'] in counts:
                counts[row['day']] = row['total']

        return counts


# Global counter instance
sleep_counter = SleepCounter()
