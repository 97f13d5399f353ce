"""
Dwell-time distribution: how long devices stay between first and last sighting.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from .constants import DWELL_BUCKETS
from .models import DeviceAggregate


def dwell_minutes(first_seen: datetime, last_seen: datetime) -> float:
    return (last_seen - first_seen).total_seconds() / 60.0


def dwell_bucket(minutes: float) -> Optional[str]:
    """Bucket label for a dwell time; None when the device has no dwell time."""
    if minutes <= 0:
        return None
    for label, upper in DWELL_BUCKETS:
        if minutes <= upper:
            return label
    return DWELL_BUCKETS[-1][0]


def dwell_distribution(devices: Iterable[DeviceAggregate]) -> dict:
    """
    Count devices per dwell bucket.

    Devices seen once (or with a non-positive span) are excluded. Only
    non-empty buckets are reported, shortest bucket first.
    """
    counts = {label: 0 for label, _ in DWELL_BUCKETS}
    for device in devices:
        if device.first_seen is None or device.last_seen is None:
            continue
        label = dwell_bucket(dwell_minutes(device.first_seen, device.last_seen))
        if label is not None:
            counts[label] += 1

    labels = [label for label, _ in DWELL_BUCKETS if counts[label]]
    return {
        'labels': labels,
        'values': [counts[label] for label in labels],
    }
