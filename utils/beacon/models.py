"""
BLE beacon data models for the statistics layer.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from .constants import UNKNOWN_MANUFACTURER


def parse_timestamp(value: Any) -> datetime:
    """Parse a stored timestamp (ISO string or epoch seconds) to a naive UTC datetime."""
    if isinstance(value, datetime):
        ts = value
    elif isinstance(value, (int, float)):
        try:
            ts = datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            raise ValueError(f'Timestamp out of range: {value!r}') from e
    elif isinstance(value, str) and value.strip():
        ts = datetime.fromisoformat(value.strip().replace('Z', '+00:00'))
    else:
        raise ValueError(f'Invalid timestamp: {value!r}')

    if ts.tzinfo is not None:
        ts = ts.astimezone(timezone.utc).replace(tzinfo=None)
    return ts


def parse_optional_int(value: Any) -> Optional[int]:
    """Parse an optional integer column, returning None when absent or malformed."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(float(value))
    except (OverflowError, TypeError, ValueError):
        return None


def parse_service_uuids(value: Any) -> list[str]:
    """
    Parse a stored service UUID column.

    Accepts a JSON array, a Python-style list repr or a comma separated
    string. Anything else is treated as "no services".
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple, set, frozenset)):
        items = [str(v) for v in value]
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return []
        try:
            decoded = json.loads(text)
        except ValueError:
            decoded = None
        if isinstance(decoded, list):
            items = [str(v) for v in decoded]
        else:
            items = text.strip('[]').split(',')
    else:
        return []

    services: list[str] = []
    for item in items:
        uuid = item.strip().strip('\'"').strip()
        if uuid and uuid not in services:
            services.append(uuid)
    return services


def parse_manufacturer(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, (bytes, bytearray)):
        value = value.hex()
    text = str(value).strip()
    return text or None


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves rounded up (not to even)."""
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class Observation:
    """A single stored beacon observation."""

    fingerprint: str
    timestamp: datetime
    rssi: int
    tx_power_level: Optional[int] = None
    service_uuids: tuple[str, ...] = ()
    manufacturer_data: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> 'Observation':
        """
        Build an observation from a scan store row.

        Raises ValueError when a required column (fingerprint, timestamp,
        rssi) is missing or malformed. Optional columns fall back to
        defaults instead.
        """
        keys = set(row.keys())

        def column(name: str) -> Any:
            return row[name] if name in keys else None

        fingerprint = column('fingerprint')
        if fingerprint is None or not str(fingerprint).strip():
            raise ValueError('Observation without fingerprint')

        rssi = parse_optional_int(column('rssi'))
        if rssi is None:
            raise ValueError(f'Observation {fingerprint} without rssi')

        return cls(
            fingerprint=str(fingerprint).strip(),
            timestamp=parse_timestamp(column('timestamp')),
            rssi=rssi,
            tx_power_level=parse_optional_int(column('tx_power_level')),
            service_uuids=tuple(parse_service_uuids(column('service_uuids'))),
            manufacturer_data=parse_manufacturer(column('manufacturer_data')),
        )

    @property
    def manufacturer_label(self) -> str:
        return self.manufacturer_data or UNKNOWN_MANUFACTURER

    @property
    def path_loss(self) -> Optional[int]:
        """Path loss in dB, when the advertised tx power is known."""
        if self.tx_power_level is None:
            return None
        return self.tx_power_level - self.rssi

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'fingerprint': self.fingerprint,
            'timestamp': self.timestamp.isoformat(),
            'rssi': self.rssi,
            'tx_power_level': self.tx_power_level,
            'service_uuids': list(self.service_uuids),
            'manufacturer_data': self.manufacturer_data,
        }


@dataclass
class DeviceAggregate:
    """Observations of one device, aggregated over the whole history."""

    fingerprint: str
    appearance_count: int = 0
    days_active: int = 0
    active_hours: int = 0  # distinct hours of day
    avg_rssi: float = 0.0
    min_rssi: int = 0
    max_rssi: int = 0
    first_seen: Optional[datetime] = None
    last_seen: Optional[datetime] = None
    manufacturer: Optional[str] = None
    services: list[str] = field(default_factory=list)

    @property
    def manufacturer_label(self) -> str:
        return self.manufacturer or UNKNOWN_MANUFACTURER

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'fingerprint': self.fingerprint,
            'appearance_count': self.appearance_count,
            'days_active': self.days_active,
            'active_hours': self.active_hours,
            'avg_rssi': round(self.avg_rssi, 1),
            'min_rssi': self.min_rssi,
            'max_rssi': self.max_rssi,
            'first_seen': self.first_seen.isoformat() if self.first_seen else None,
            'last_seen': self.last_seen.isoformat() if self.last_seen else None,
            'manufacturer': self.manufacturer_label,
            'services': self.services,
        }


@dataclass
class TimeBucketAggregate:
    """Observations falling into one hour or minute bucket."""

    bucket_key: str
    transmission_count: int = 0
    active_devices: int = 0
    avg_rssi: float = 0.0
    min_rssi: int = 0
    max_rssi: int = 0
    unique_services: int = 0

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'bucket_key': self.bucket_key,
            'transmission_count': self.transmission_count,
            'active_devices': self.active_devices,
            'avg_rssi': round(self.avg_rssi, 1),
            'min_rssi': self.min_rssi,
            'max_rssi': self.max_rssi,
            'unique_services': self.unique_services,
        }


@dataclass
class ManufacturerAggregate:
    """Observations grouped by advertised manufacturer data."""

    manufacturer_label: str = UNKNOWN_MANUFACTURER
    device_count: int = 0
    avg_signal_strength: float = 0.0
    total_appearances: int = 0
    days_seen: int = 0
    services: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'manufacturer_label': self.manufacturer_label,
            'device_count': self.device_count,
            'avg_signal_strength': round(self.avg_signal_strength, 1),
            'total_appearances': self.total_appearances,
            'days_seen': self.days_seen,
            'services': self.services,
        }


@dataclass
class DailyPresence:
    """Appearances of one device on one calendar day."""

    fingerprint: str
    date: str  # YYYY-MM-DD
    appearances: int = 0
    active_hours: int = 0

    def to_dict(self) -> dict:
        return {
            'fingerprint': self.fingerprint,
            'date': self.date,
            'appearances': self.appearances,
            'active_hours': self.active_hours,
        }
