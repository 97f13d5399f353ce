"""
Log-distance path-loss model.

A single distance estimator shared by every view. The path-loss exponent is
environment dependent, so callers always pass the one matching their
context (live display vs. indoor propagation analysis).
"""

from __future__ import annotations

import math
from typing import Iterable, Optional

from .constants import DEGENERATE_DISTANCE_M, DISTANCE_CM_THRESHOLD_M
from .models import DeviceAggregate, Observation


def estimate_distance(
    rssi: Optional[float],
    tx_power: Optional[float],
    path_loss_exponent: float,
) -> float:
    """
    Estimate distance in meters from received and transmit power.

    distance = 10 ^ ((tx_power - rssi) / (10 * n))

    Never raises. Missing inputs or an unusable exponent give the
    degenerate distance of 1 m; overflow gives infinity.
    """
    if rssi is None or tx_power is None:
        return DEGENERATE_DISTANCE_M
    try:
        n = float(path_loss_exponent)
        exponent = (float(tx_power) - float(rssi)) / (10 * n)
    except (OverflowError, TypeError, ValueError, ZeroDivisionError):
        return DEGENERATE_DISTANCE_M
    if not math.isfinite(exponent) or n <= 0:
        return DEGENERATE_DISTANCE_M

    try:
        return math.pow(10, exponent)
    except OverflowError:
        return math.inf


def format_distance(distance_m: float) -> str:
    """Format a distance for display, switching to centimetres below 1 m."""
    if distance_m < DISTANCE_CM_THRESHOLD_M:
        return f"{distance_m * 100:.1f} cm"
    return f"{distance_m:.1f} m"


def propagation_points(
    observations: Iterable[Observation],
    path_loss_exponent: float,
    limit: Optional[int] = None,
) -> list[dict]:
    """
    Build path-loss vs. distance points for observations that advertise tx power.

    Input order is preserved; observations without tx power are skipped.
    """
    points = []
    for obs in observations:
        if obs.tx_power_level is None:
            continue
        points.append({
            'x': estimate_distance(obs.rssi, obs.tx_power_level, path_loss_exponent),
            'y': obs.path_loss,
            'rssi': obs.rssi,
            'txPower': obs.tx_power_level,
            'fingerprint': obs.fingerprint,
        })
        if limit is not None and len(points) >= limit:
            break
    return points


def rssi_leaderboard(
    devices: Iterable[DeviceAggregate],
    tx_power: float,
    path_loss_exponent: float,
    limit: int = 20,
) -> list[dict]:
    """Strongest devices by average RSSI, annotated with an estimated distance."""
    ranked = sorted(devices, key=lambda d: d.avg_rssi, reverse=True)[:limit]
    rows = []
    for device in ranked:
        distance = estimate_distance(device.avg_rssi, tx_power, path_loss_exponent)
        rows.append({
            'fingerprint': device.fingerprint,
            'avg_rssi': round(device.avg_rssi, 1),
            'min_rssi': device.min_rssi,
            'max_rssi': device.max_rssi,
            'estimated_distance_m': round(distance, 2),
            'estimated_distance': format_distance(distance),
        })
    return rows
