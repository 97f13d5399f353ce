"""
Interference scoring for hourly time buckets.

The score blends four normalised factors: weak average signal, wide signal
spread, device density and readings per device. RSSI is assumed to lie in
-100..0 dBm; readings outside that range can push the raw blend past the
bounds, so the final score is clamped to 0..100.
"""

from __future__ import annotations

from typing import Iterable, Optional

from .constants import (
    INTERFERENCE_DEVICE_SATURATION,
    INTERFERENCE_READING_SATURATION,
    INTERFERENCE_SCORE_MAX,
    INTERFERENCE_SCORE_MIN,
    INTERFERENCE_WEIGHT_AVG_RSSI,
    INTERFERENCE_WEIGHT_DEVICE_DENSITY,
    INTERFERENCE_WEIGHT_READING_DENSITY,
    INTERFERENCE_WEIGHT_SIGNAL_SPREAD,
    RSSI_SCALE_DBM,
)
from .models import TimeBucketAggregate, round_half_up


def interference_score(bucket: TimeBucketAggregate) -> Optional[int]:
    """
    Score a bucket from 0 (quiet) to 100 (congested).

    Returns None for buckets without active devices, which have no
    readings-per-device figure and must be left out of results.
    """
    if bucket.active_devices <= 0:
        return None

    normalized_avg_rssi = abs(bucket.avg_rssi) / RSSI_SCALE_DBM
    signal_spread = (bucket.max_rssi - bucket.min_rssi) / RSSI_SCALE_DBM
    device_density = min(bucket.active_devices / INTERFERENCE_DEVICE_SATURATION, 1)
    readings_per_device = bucket.transmission_count / bucket.active_devices
    reading_density = min(readings_per_device / INTERFERENCE_READING_SATURATION, 1)

    blended = (
        normalized_avg_rssi * INTERFERENCE_WEIGHT_AVG_RSSI
        + signal_spread * INTERFERENCE_WEIGHT_SIGNAL_SPREAD
        + device_density * INTERFERENCE_WEIGHT_DEVICE_DENSITY
        + reading_density * INTERFERENCE_WEIGHT_READING_DENSITY
    )
    score = round_half_up(blended * 100)
    return max(INTERFERENCE_SCORE_MIN, min(INTERFERENCE_SCORE_MAX, score))


def analyze_interference(buckets: Iterable[TimeBucketAggregate]) -> dict:
    """Build the interference chart series, skipping buckets without devices."""
    result: dict[str, list] = {
        'timeLabels': [],
        'rssiValues': [],
        'deviceCounts': [],
        'interferenceScores': [],
        'signalRanges': [],
        'readingDensities': [],
    }
    for bucket in buckets:
        score = interference_score(bucket)
        if score is None:
            continue
        result['timeLabels'].append(bucket.bucket_key)
        result['rssiValues'].append(round(bucket.avg_rssi, 1))
        result['deviceCounts'].append(bucket.active_devices)
        result['interferenceScores'].append(score)
        result['signalRanges'].append(bucket.max_rssi - bucket.min_rssi)
        result['readingDensities'].append(
            round(bucket.transmission_count / bucket.active_devices, 2)
        )
    return result
