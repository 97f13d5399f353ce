"""Configuration settings for the BLE scan dashboard."""

from __future__ import annotations

import os
from pathlib import Path

VERSION = '1.0.0'


def _get_env(key: str, default: str) -> str:
    return os.environ.get(f'BEACON_{key}', default)


def _get_env_int(key: str, default: int) -> int:
    try:
        return int(_get_env(key, str(default)))
    except ValueError:
        return default


def _get_env_float(key: str, default: float) -> float:
    try:
        return float(_get_env(key, str(default)))
    except ValueError:
        return default


def _get_env_bool(key: str, default: bool) -> bool:
    value = _get_env(key, '').lower()
    if not value:
        return default
    return value in ('1', 'true', 'yes', 'on')


# Server
HOST = _get_env('HOST', '0.0.0.0')
PORT = _get_env_int('PORT', 8080)
DEBUG = _get_env_bool('DEBUG', False)

# Logging
LOG_LEVEL = _get_env('LOG_LEVEL', 'INFO').upper()

# Scan store written by the external scanner (opened read-only)
DB_PATH = Path(_get_env('DB_PATH', str(Path(__file__).parent / 'ble_scans.db')))
DB_TIMEOUT = _get_env_float('DB_TIMEOUT', 5.0)

# Signal model
DISPLAY_PATH_LOSS_EXPONENT = _get_env_float('DISPLAY_PATH_LOSS_EXPONENT', 2.7)
INDOOR_PATH_LOSS_EXPONENT = _get_env_float('INDOOR_PATH_LOSS_EXPONENT', 2.5)
DEFAULT_TX_POWER = _get_env_int('DEFAULT_TX_POWER', -59)

# Result limits
INTERFERENCE_MAX_BUCKETS = _get_env_int('INTERFERENCE_MAX_BUCKETS', 168)  # one week of hours
CHANNEL_MAX_BUCKETS = _get_env_int('CHANNEL_MAX_BUCKETS', 168)
PEAK_USAGE_LIMIT = _get_env_int('PEAK_USAGE_LIMIT', 100)
PROPAGATION_LIMIT = _get_env_int('PROPAGATION_LIMIT', 1000)
PRESENCE_MAX_DAYS = _get_env_int('PRESENCE_MAX_DAYS', 30)
DEVICE_DETAILS_LIMIT = _get_env_int('DEVICE_DETAILS_LIMIT', 50)
MANUFACTURER_LIMIT = _get_env_int('MANUFACTURER_LIMIT', 20)
RSSI_LEADERBOARD_LIMIT = _get_env_int('RSSI_LEADERBOARD_LIMIT', 20)
RECENT_DEVICES_LIMIT = _get_env_int('RECENT_DEVICES_LIMIT', 50)
