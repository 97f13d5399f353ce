"""
Channel utilisation analysis for hourly and per-minute buckets.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from .constants import (
    LOAD_FACTOR_MINUTES,
    LOAD_HIGH,
    LOAD_HIGH_THRESHOLD,
    LOAD_LOW,
    LOAD_MEDIUM,
    LOAD_MEDIUM_THRESHOLD,
)
from .models import TimeBucketAggregate, round_half_up


def load_level(transmissions_per_device: float) -> str:
    """Classify load from transmissions per device (thresholds are strict)."""
    if transmissions_per_device > LOAD_HIGH_THRESHOLD:
        return LOAD_HIGH
    if transmissions_per_device > LOAD_MEDIUM_THRESHOLD:
        return LOAD_MEDIUM
    return LOAD_LOW


@dataclass
class BucketLoad:
    """Channel load figures for a single time bucket."""

    bucket_key: str
    transmission_count: int
    active_devices: int
    transmissions_per_device: float
    channel_load_factor: float
    avg_signal_strength: float
    unique_services: int = 0

    @property
    def load_level(self) -> str:
        return load_level(self.transmissions_per_device)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'bucket_key': self.bucket_key,
            'transmission_count': self.transmission_count,
            'active_devices': self.active_devices,
            'transmissions_per_device': round(self.transmissions_per_device, 2),
            'channel_load_factor': round(self.channel_load_factor, 3),
            'avg_signal_strength': round(self.avg_signal_strength, 1),
            'unique_services': self.unique_services,
            'load_level': self.load_level,
        }


def analyze_bucket(bucket: TimeBucketAggregate) -> Optional[BucketLoad]:
    """Compute load for one bucket, or None when it has no active devices."""
    if bucket.active_devices <= 0:
        return None
    return BucketLoad(
        bucket_key=bucket.bucket_key,
        transmission_count=bucket.transmission_count,
        active_devices=bucket.active_devices,
        transmissions_per_device=bucket.transmission_count / bucket.active_devices,
        channel_load_factor=bucket.transmission_count / (LOAD_FACTOR_MINUTES * bucket.active_devices),
        avg_signal_strength=bucket.avg_rssi,
        unique_services=bucket.unique_services,
    )


def summarize_load(loads: list[BucketLoad]) -> dict:
    """Utilisation metrics across buckets; zeroed when there are none."""
    if not loads:
        return {
            'averageChannelLoad': 0.0,
            'peakUtilisation': 0.0,
            'deviceDensity': 0,
            'timeBlocks': 0,
        }

    average_load = sum(l.channel_load_factor for l in loads) / len(loads)
    peak = max(l.transmissions_per_device for l in loads)
    average_devices = sum(l.active_devices for l in loads) / len(loads)
    return {
        'averageChannelLoad': round(average_load, 3),
        'peakUtilisation': round(peak, 2),
        'deviceDensity': round_half_up(average_devices),
        'timeBlocks': len(loads),
    }


def analyze_channel_load(buckets: Iterable[TimeBucketAggregate]) -> dict:
    """Build channel utilisation series and summary metrics."""
    loads = [load for load in (analyze_bucket(b) for b in buckets) if load is not None]

    return {
        'timeLabels': [l.bucket_key for l in loads],
        'transmissionCounts': [l.transmission_count for l in loads],
        'activeDevices': [l.active_devices for l in loads],
        'transmissionsPerDevice': [round(l.transmissions_per_device, 2) for l in loads],
        'channelLoadFactors': [round(l.channel_load_factor, 3) for l in loads],
        'signalStrengths': [round(l.avg_signal_strength, 1) for l in loads],
        'uniqueServices': [l.unique_services for l in loads],
        'loadLevels': [l.load_level for l in loads],
        'metrics': summarize_load(loads),
    }


def peak_usage(buckets: Iterable[TimeBucketAggregate], limit: int = 100) -> dict:
    """Busiest buckets by transmission count; equal counts keep time order."""
    ranked = sorted(buckets, key=lambda b: b.transmission_count, reverse=True)[:limit]
    return {
        'timeLabels': [b.bucket_key for b in ranked],
        'scanCounts': [b.transmission_count for b in ranked],
        'deviceCounts': [b.active_devices for b in ranked],
        'signalStrengths': [round(b.avg_rssi, 1) for b in ranked],
    }
