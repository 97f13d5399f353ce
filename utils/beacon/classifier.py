"""
Device behaviour classification.

Devices are labelled from how often and on how many distinct days they were
seen. Rules are evaluated in order and the first match wins, so a device
seen on 3+ days is Regular even with a very high appearance count, unless
it also satisfies the Permanent rule.
"""

from __future__ import annotations

from typing import Iterable

from .constants import (
    BEHAVIOUR_MIN_APPEARANCES,
    CATEGORY_FREQUENT,
    CATEGORY_OCCASIONAL,
    CATEGORY_ORDER,
    CATEGORY_PERMANENT,
    CATEGORY_REGULAR,
    FREQUENT_MIN_APPEARANCES,
    PERMANENT_MIN_APPEARANCES,
    PERMANENT_MIN_DAYS,
    REGULAR_MIN_DAYS,
)
from .models import DeviceAggregate, round_half_up


def classify(appearance_count: int, days_active: int) -> str:
    """Return the behaviour category for a device."""
    if days_active >= PERMANENT_MIN_DAYS and appearance_count >= PERMANENT_MIN_APPEARANCES:
        return CATEGORY_PERMANENT
    if days_active >= REGULAR_MIN_DAYS:
        return CATEGORY_REGULAR
    if appearance_count >= FREQUENT_MIN_APPEARANCES:
        return CATEGORY_FREQUENT
    return CATEGORY_OCCASIONAL


def device_details(devices: Iterable[DeviceAggregate], limit: int = 50) -> list[dict]:
    """Per-device category with signal and presence stats, most persistent first."""
    ranked = sorted(
        devices,
        key=lambda d: (d.days_active, d.appearance_count),
        reverse=True,
    )[:limit]

    return [
        {
            'fingerprint': d.fingerprint,
            'category': classify(d.appearance_count, d.days_active),
            'manufacturer': d.manufacturer_label,
            'services': d.services,
            'signal_stats': {
                'avg_rssi': round(d.avg_rssi, 1),
                'min_rssi': d.min_rssi,
                'max_rssi': d.max_rssi,
            },
            'presence_stats': {
                'days_active': d.days_active,
                'total_hours': d.active_hours,
                'appearance_count': d.appearance_count,
            },
        }
        for d in ranked
    ]


def behaviour_summary(
    devices: Iterable[DeviceAggregate],
    min_appearances: int = BEHAVIOUR_MIN_APPEARANCES,
) -> dict:
    """
    Count devices per category for the behaviour pie chart.

    Devices with ``min_appearances`` or fewer sightings are ignored. Empty
    categories are omitted; the rest follow the fixed category order.
    """
    members: dict[str, list[DeviceAggregate]] = {c: [] for c in CATEGORY_ORDER}
    for device in devices:
        if device.appearance_count <= min_appearances:
            continue
        members[classify(device.appearance_count, device.days_active)].append(device)

    labels = []
    values = []
    metadata = []
    for category in CATEGORY_ORDER:
        group = members[category]
        if not group:
            continue
        labels.append(category)
        values.append(len(group))
        metadata.append({
            'avgAppearances': round_half_up(sum(d.appearance_count for d in group) / len(group)),
            'avgActiveHours': round_half_up(sum(d.active_hours for d in group) / len(group)),
        })

    return {'labels': labels, 'values': values, 'metadata': metadata}
