"""Shared fixtures: a temporary scan store shaped like the scanner's."""

import sqlite3
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

SCANS_SCHEMA = '''
    CREATE TABLE scans (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        timestamp TEXT NOT NULL,
        fingerprint TEXT NOT NULL,
        rssi INTEGER,
        tx_power_level INTEGER,
        service_uuids TEXT,
        manufacturer_data TEXT
    )
'''


def write_scans(db_path: Path, rows: list[dict]) -> None:
    """Create the scans table and insert rows (test-only writer)."""
    conn = sqlite3.connect(db_path)
    try:
        conn.execute(SCANS_SCHEMA)
        conn.executemany(
            '''
            INSERT INTO scans (timestamp, fingerprint, rssi, tx_power_level, service_uuids, manufacturer_data)
            VALUES (:timestamp, :fingerprint, :rssi, :tx_power_level, :service_uuids, :manufacturer_data)
            ''',
            [
                {
                    'tx_power_level': None,
                    'service_uuids': None,
                    'manufacturer_data': None,
                    **row,
                }
                for row in rows
            ],
        )
        conn.commit()
    finally:
        conn.close()


SAMPLE_SCANS = [
    # Apple device seen over 20 minutes with tx power
    {'timestamp': '2025-04-14 10:00:00', 'fingerprint': 'dev-a', 'rssi': -60, 'tx_power_level': -59,
     'service_uuids': '["fe9f"]', 'manufacturer_data': 'Apple'},
    {'timestamp': '2025-04-14 10:10:00', 'fingerprint': 'dev-a', 'rssi': -62, 'tx_power_level': -59,
     'service_uuids': '["fe9f"]', 'manufacturer_data': 'Apple'},
    {'timestamp': '2025-04-14 10:20:00', 'fingerprint': 'dev-a', 'rssi': -64, 'tx_power_level': -59,
     'service_uuids': '["fe9f"]', 'manufacturer_data': 'Apple'},
    # Samsung device, two readings in the same minute
    {'timestamp': '2025-04-14 10:20:30', 'fingerprint': 'dev-b', 'rssi': -80,
     'service_uuids': 'fd5a,180f', 'manufacturer_data': 'Samsung'},
    {'timestamp': '2025-04-14 10:20:45', 'fingerprint': 'dev-b', 'rssi': -82,
     'service_uuids': 'fd5a,180f', 'manufacturer_data': 'Samsung'},
    # Anonymous device seen once on the next day
    {'timestamp': '2025-04-15 09:00:00', 'fingerprint': 'dev-c', 'rssi': -90},
]


@pytest.fixture
def scan_db():
    """Temporary scan database patched in as the store."""
    with tempfile.TemporaryDirectory() as tmpdir:
        db_path = Path(tmpdir) / 'ble_scans.db'
        write_scans(db_path, SAMPLE_SCANS)
        with patch('utils.database.DB_PATH', db_path):
            yield db_path


@pytest.fixture
def missing_db():
    """Point the store at a path that does not exist."""
    with tempfile.TemporaryDirectory() as tmpdir:
        with patch('utils.database.DB_PATH', Path(tmpdir) / 'missing.db'):
            yield
