"""
Manufacturer ranking and service summary.
"""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from .constants import TOP_SERVICES_COUNT
from .models import ManufacturerAggregate


def most_common_services(
    aggregates: Iterable[ManufacturerAggregate],
    limit: int = TOP_SERVICES_COUNT,
) -> list[dict]:
    """Services advertised by the most manufacturers; ties keep first-seen order."""
    counter: Counter[str] = Counter()
    for aggregate in aggregates:
        for service in dict.fromkeys(s.strip() for s in aggregate.services):
            if service:
                counter[service] += 1
    return [{'service': service, 'count': count} for service, count in counter.most_common(limit)]


def summarize_manufacturers(
    aggregates: Iterable[ManufacturerAggregate],
    limit: int = 20,
    top_services: int = TOP_SERVICES_COUNT,
) -> dict:
    """
    Rank manufacturers by device count, then by average signal strength.

    The summary block covers every manufacturer, not only the ranked ones.
    """
    aggregates = [a for a in aggregates if a.device_count > 0]
    ranked = sorted(
        aggregates,
        key=lambda a: (a.device_count, round(a.avg_signal_strength, 1)),
        reverse=True,
    )[:limit]

    manufacturers = [
        {
            'manufacturer': a.manufacturer_label,
            'deviceCount': a.device_count,
            'avgSignalStrength': round(a.avg_signal_strength, 1),
            'services': a.services,
            'totalAppearances': a.total_appearances,
            'daysActive': a.days_seen,
            'appearancesPerDevice': round(a.total_appearances / a.device_count, 1),
        }
        for a in ranked
    ]

    if aggregates:
        average_signal = sum(round(a.avg_signal_strength, 1) for a in aggregates) / len(aggregates)
    else:
        average_signal = 0.0

    return {
        'manufacturers': manufacturers,
        'summary': {
            'totalManufacturers': len(aggregates),
            'totalDevices': sum(a.device_count for a in aggregates),
            'averageSignalStrength': round(average_signal, 1),
            'mostCommonServices': most_common_services(aggregates, top_services),
        },
    }
