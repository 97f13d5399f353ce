"""
Presence and activity patterns over calendar days and hours.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Iterable

from .models import DailyPresence, Observation


def presence_series(daily_rows: Iterable[DailyPresence], max_days: int = 30) -> dict:
    """
    Daily unique devices, mean appearances and mean active hours.

    Days are returned oldest first, limited to the ``max_days`` most recent.
    """
    by_date: dict[str, list[DailyPresence]] = defaultdict(list)
    for row in daily_rows:
        by_date[row.date].append(row)

    dates = sorted(by_date)[-max_days:] if max_days > 0 else []

    unique_devices = []
    avg_appearances = []
    avg_active_hours = []
    for date in dates:
        rows = by_date[date]
        unique_devices.append(len({r.fingerprint for r in rows}))
        avg_appearances.append(round(sum(r.appearances for r in rows) / len(rows), 2))
        avg_active_hours.append(round(sum(r.active_hours for r in rows) / len(rows), 2))

    return {
        'dates': dates,
        'uniqueDevices': unique_devices,
        'avgAppearances': avg_appearances,
        'avgActiveHours': avg_active_hours,
    }


def activity_heatmap(observations: Iterable[Observation]) -> list[dict]:
    """Distinct devices per (day of week, hour) cell; day 0 is Sunday."""
    cells: dict[tuple[int, int], set[str]] = defaultdict(set)
    for obs in observations:
        day_of_week = (obs.timestamp.weekday() + 1) % 7
        cells[(day_of_week, obs.timestamp.hour)].add(obs.fingerprint)

    return [
        {'x': hour, 'y': day, 'devices': len(cells[(day, hour)])}
        for day, hour in sorted(cells)
    ]


def hourly_counts(observations: Iterable[Observation]) -> list[dict]:
    """Number of observations per hour of day, for hours with activity."""
    counts: dict[int, int] = defaultdict(int)
    for obs in observations:
        counts[obs.timestamp.hour] += 1
    return [{'hour': f'{hour:02d}', 'count': counts[hour]} for hour in sorted(counts)]
