"""
Grouping of raw scan rows into the aggregate rows consumed by the analyzers.

Every function here is a pure function of its input. Output ordering is
deterministic: devices by first appearance, time buckets and days in
ascending time order, manufacturers in first-encountered order.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Iterable, Mapping

from utils.logging import get_logger

from .constants import BUCKET_FORMATS, BUCKET_HOUR, DATE_FORMAT
from .models import (
    DailyPresence,
    DeviceAggregate,
    ManufacturerAggregate,
    Observation,
    TimeBucketAggregate,
)

logger = get_logger('beacon.grouping')


def parse_observations(rows: Iterable[Mapping[str, Any]]) -> list[Observation]:
    """Convert store rows to observations, skipping rows missing required columns."""
    observations = []
    skipped = 0
    for row in rows:
        try:
            observations.append(Observation.from_row(row))
        except (KeyError, OverflowError, TypeError, ValueError) as e:
            skipped += 1
            logger.debug(f"Skipping malformed scan row: {e}")
    if skipped:
        logger.warning(f"Skipped {skipped} malformed scan rows")
    return observations


def group_by_device(observations: Iterable[Observation]) -> list[DeviceAggregate]:
    """Aggregate observations per device fingerprint."""
    grouped: dict[str, list[Observation]] = defaultdict(list)
    for obs in observations:
        grouped[obs.fingerprint].append(obs)

    devices = []
    for fingerprint, items in grouped.items():
        rssi_values = [o.rssi for o in items]
        timestamps = [o.timestamp for o in items]

        manufacturer = next((o.manufacturer_data for o in items if o.manufacturer_data), None)
        services: list[str] = []
        for o in items:
            for uuid in o.service_uuids:
                if uuid not in services:
                    services.append(uuid)

        devices.append(DeviceAggregate(
            fingerprint=fingerprint,
            appearance_count=len(items),
            days_active=len({ts.strftime(DATE_FORMAT) for ts in timestamps}),
            active_hours=len({ts.hour for ts in timestamps}),
            avg_rssi=sum(rssi_values) / len(rssi_values),
            min_rssi=min(rssi_values),
            max_rssi=max(rssi_values),
            first_seen=min(timestamps),
            last_seen=max(timestamps),
            manufacturer=manufacturer,
            services=services,
        ))

    devices.sort(key=lambda d: (d.first_seen, d.fingerprint))
    return devices


def group_by_time(
    observations: Iterable[Observation],
    resolution: str = BUCKET_HOUR,
) -> list[TimeBucketAggregate]:
    """Aggregate observations into hour or minute buckets, oldest first."""
    try:
        fmt = BUCKET_FORMATS[resolution]
    except KeyError:
        raise ValueError(f'Unknown bucket resolution: {resolution}') from None

    grouped: dict[str, list[Observation]] = defaultdict(list)
    for obs in observations:
        grouped[obs.timestamp.strftime(fmt)].append(obs)

    buckets = []
    for key in sorted(grouped):
        items = grouped[key]
        rssi_values = [o.rssi for o in items]
        # Distinct advertised service sets, as the scanner stores them per row
        service_sets = {o.service_uuids for o in items if o.service_uuids}
        buckets.append(TimeBucketAggregate(
            bucket_key=key,
            transmission_count=len(items),
            active_devices=len({o.fingerprint for o in items}),
            avg_rssi=sum(rssi_values) / len(rssi_values),
            min_rssi=min(rssi_values),
            max_rssi=max(rssi_values),
            unique_services=len(service_sets),
        ))
    return buckets


def group_by_manufacturer(observations: Iterable[Observation]) -> list[ManufacturerAggregate]:
    """Aggregate observations per manufacturer label (absent data -> Unknown)."""
    grouped: dict[str, list[Observation]] = defaultdict(list)
    for obs in observations:
        grouped[obs.manufacturer_label].append(obs)

    aggregates = []
    for label, items in grouped.items():
        services: list[str] = []
        for o in items:
            for uuid in o.service_uuids:
                if uuid not in services:
                    services.append(uuid)

        aggregates.append(ManufacturerAggregate(
            manufacturer_label=label,
            device_count=len({o.fingerprint for o in items}),
            avg_signal_strength=sum(o.rssi for o in items) / len(items),
            total_appearances=len(items),
            days_seen=len({o.timestamp.strftime(DATE_FORMAT) for o in items}),
            services=services,
        ))
    return aggregates


def group_daily_presence(observations: Iterable[Observation]) -> list[DailyPresence]:
    """Aggregate observations per (device, calendar day), oldest day first."""
    counts: dict[tuple[str, str], int] = defaultdict(int)
    hours: dict[tuple[str, str], set[int]] = defaultdict(set)
    for obs in observations:
        key = (obs.timestamp.strftime(DATE_FORMAT), obs.fingerprint)
        counts[key] += 1
        hours[key].add(obs.timestamp.hour)

    return [
        DailyPresence(
            fingerprint=fingerprint,
            date=date,
            appearances=counts[(date, fingerprint)],
            active_hours=len(hours[(date, fingerprint)]),
        )
        for date, fingerprint in sorted(counts)
    ]
