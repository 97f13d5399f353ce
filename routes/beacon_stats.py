"""BLE scan statistics: device activity, device types, network load and environment."""

from __future__ import annotations

from flask import Blueprint, Response, jsonify
from werkzeug.exceptions import HTTPException

import config
from utils.beacon import (
    activity_heatmap,
    analyze_channel_load,
    analyze_interference,
    behaviour_summary,
    device_details,
    dwell_distribution,
    group_by_device,
    group_by_manufacturer,
    group_by_time,
    group_daily_presence,
    hourly_counts,
    parse_observations,
    peak_usage,
    presence_series,
    propagation_points,
    rssi_leaderboard,
    summarize_manufacturers,
)
from utils.beacon.constants import BUCKET_HOUR, BUCKET_MINUTE
from utils.beacon.models import Observation
from utils.database import DataUnavailable, fetch_scan_rows, scan_overview
from utils.logging import get_logger

logger = get_logger('beacon.routes')

beacon_stats_bp = Blueprint('beacon_stats', __name__, url_prefix='/api')


def _load_observations() -> list[Observation]:
    return parse_observations(fetch_scan_rows())


@beacon_stats_bp.errorhandler(DataUnavailable)
def handle_data_unavailable(e: DataUnavailable):
    logger.error(f"Scan data unavailable: {e}")
    return jsonify({'status': 'error', 'message': str(e)}), 503


@beacon_stats_bp.errorhandler(Exception)
def handle_unexpected(e: Exception):
    if isinstance(e, HTTPException):
        return e
    logger.exception(f"Error computing statistics: {e}")
    return jsonify({'status': 'error', 'message': 'Internal server error'}), 500


# =========================================================================
# Overview
# =========================================================================

@beacon_stats_bp.route('/stats/overview')
def stats_overview() -> Response:
    """Return total scans, unique devices and the scan time range."""
    return jsonify({'status': 'success', **scan_overview()})


@beacon_stats_bp.route('/stats/hourly')
def stats_hourly() -> Response:
    """Return observation counts per hour of day."""
    return jsonify({
        'status': 'success',
        'hours': hourly_counts(_load_observations()),
    })


@beacon_stats_bp.route('/stats/rssi')
def stats_rssi() -> Response:
    """Return the strongest devices with a live-display distance estimate."""
    devices = group_by_device(_load_observations())
    return jsonify({
        'status': 'success',
        'devices': rssi_leaderboard(
            devices,
            tx_power=config.DEFAULT_TX_POWER,
            path_loss_exponent=config.DISPLAY_PATH_LOSS_EXPONENT,
            limit=config.RSSI_LEADERBOARD_LIMIT,
        ),
    })


@beacon_stats_bp.route('/stats/devices')
def stats_devices() -> Response:
    """Return the most recently discovered devices."""
    devices = group_by_device(_load_observations())
    recent = sorted(devices, key=lambda d: d.first_seen, reverse=True)
    return jsonify({
        'status': 'success',
        'devices': [d.to_dict() for d in recent[:config.RECENT_DEVICES_LIMIT]],
    })


# =========================================================================
# Device activity
# =========================================================================

@beacon_stats_bp.route('/device-activity/heatmap')
def device_activity_heatmap() -> Response:
    return jsonify({
        'status': 'success',
        'heatmapData': activity_heatmap(_load_observations()),
    })


@beacon_stats_bp.route('/device-activity/presence')
def device_activity_presence() -> Response:
    """Return daily presence for the most recent days."""
    daily = group_daily_presence(_load_observations())
    return jsonify({
        'status': 'success',
        **presence_series(daily, max_days=config.PRESENCE_MAX_DAYS),
    })


@beacon_stats_bp.route('/device-activity/dwell-time')
def device_activity_dwell_time() -> Response:
    devices = group_by_device(_load_observations())
    return jsonify({'status': 'success', **dwell_distribution(devices)})


# =========================================================================
# Device types
# =========================================================================

@beacon_stats_bp.route('/device-types/details')
def device_types_details() -> Response:
    """Return per-device category, signal and presence stats."""
    devices = group_by_device(_load_observations())
    details = device_details(devices, limit=config.DEVICE_DETAILS_LIMIT)
    logger.info(f"Found {len(details)} device type details")
    return jsonify({'status': 'success', 'devices': details})


@beacon_stats_bp.route('/device-types/behaviour')
def device_types_behaviour() -> Response:
    devices = group_by_device(_load_observations())
    return jsonify({'status': 'success', **behaviour_summary(devices)})


@beacon_stats_bp.route('/device-types/manufacturers')
def device_types_manufacturers() -> Response:
    """Return ranked manufacturers and a service summary."""
    aggregates = group_by_manufacturer(_load_observations())
    return jsonify({
        'status': 'success',
        **summarize_manufacturers(aggregates, limit=config.MANUFACTURER_LIMIT),
    })


# =========================================================================
# Network
# =========================================================================

@beacon_stats_bp.route('/network/peak-usage')
def network_peak_usage() -> Response:
    """Return the busiest minutes by scan count."""
    buckets = group_by_time(_load_observations(), resolution=BUCKET_MINUTE)
    return jsonify({
        'status': 'success',
        **peak_usage(buckets, limit=config.PEAK_USAGE_LIMIT),
    })


@beacon_stats_bp.route('/network/channel-utilisation')
def network_channel_utilisation() -> Response:
    """Return hourly channel load and utilisation metrics."""
    buckets = group_by_time(_load_observations(), resolution=BUCKET_HOUR)
    buckets = buckets[:config.CHANNEL_MAX_BUCKETS]
    logger.info(f"Processing channel utilisation data for {len(buckets)} time blocks")
    return jsonify({'status': 'success', **analyze_channel_load(buckets)})


# =========================================================================
# Environment
# =========================================================================

@beacon_stats_bp.route('/environment/propagation')
def environment_propagation() -> Response:
    """Return path loss vs. estimated distance using the indoor exponent."""
    points = propagation_points(
        _load_observations(),
        path_loss_exponent=config.INDOOR_PATH_LOSS_EXPONENT,
        limit=config.PROPAGATION_LIMIT,
    )
    logger.info(f"Processed {len(points)} propagation data points")
    return jsonify({'status': 'success', 'pathLossData': points})


@beacon_stats_bp.route('/environment/interference')
def environment_interference() -> Response:
    """Return hourly interference scores."""
    buckets = group_by_time(_load_observations(), resolution=BUCKET_HOUR)
    buckets = buckets[:config.INTERFERENCE_MAX_BUCKETS]
    logger.info(f"Processing interference data for {len(buckets)} time blocks")
    return jsonify({'status': 'success', **analyze_interference(buckets)})
