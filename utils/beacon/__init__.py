"""
BLE beacon statistics package.

Turns stored beacon observations into dashboard metrics: device behaviour
categories, distance estimates, interference scores, channel load, dwell
time, presence series and manufacturer summaries.
"""

from __future__ import annotations

from .channel_load import analyze_channel_load, load_level, peak_usage
from .classifier import behaviour_summary, classify, device_details
from .dwell import dwell_bucket, dwell_distribution, dwell_minutes
from .grouping import (
    group_by_device,
    group_by_manufacturer,
    group_by_time,
    group_daily_presence,
    parse_observations,
)
from .interference import analyze_interference, interference_score
from .manufacturers import most_common_services, summarize_manufacturers
from .models import (
    DailyPresence,
    DeviceAggregate,
    ManufacturerAggregate,
    Observation,
    TimeBucketAggregate,
)
from .presence import activity_heatmap, hourly_counts, presence_series
from .signal import estimate_distance, format_distance, propagation_points, rssi_leaderboard

__all__ = [
    'Observation',
    'DeviceAggregate',
    'TimeBucketAggregate',
    'ManufacturerAggregate',
    'DailyPresence',
    'parse_observations',
    'group_by_device',
    'group_by_time',
    'group_by_manufacturer',
    'group_daily_presence',
    'estimate_distance',
    'format_distance',
    'propagation_points',
    'rssi_leaderboard',
    'classify',
    'device_details',
    'behaviour_summary',
    'interference_score',
    'analyze_interference',
    'load_level',
    'analyze_channel_load',
    'peak_usage',
    'dwell_minutes',
    'dwell_bucket',
    'dwell_distribution',
    'presence_series',
    'activity_heatmap',
    'hourly_counts',
    'most_common_services',
    'summarize_manufacturers',
]
