"""
Read-only access to the BLE scan store.

The scanner process owns the ``scans`` table; the dashboard only reads it.
Every failure to open or query the store is raised as DataUnavailable so
the route layer can report it without masking it.
"""

from __future__ import annotations

import sqlite3
from concurrent.futures import ThreadPoolExecutor
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Generator
from urllib.parse import quote

from config import DB_PATH, DB_TIMEOUT
from utils.logging import get_logger

logger = get_logger('beacon.database')


class DataUnavailable(Exception):
    """The scan store could not supply rows."""


@contextmanager
def get_db() -> Generator[sqlite3.Connection, None, None]:
    """Open a read-only connection to the scan store."""
    if not DB_PATH.exists():
        raise DataUnavailable(f'Scan database not found: {DB_PATH}')

    try:
        conn = sqlite3.connect(f'file:{quote(str(DB_PATH))}?mode=ro', uri=True, timeout=DB_TIMEOUT)
    except sqlite3.Error as e:
        raise DataUnavailable(f'Cannot open scan database: {e}') from e

    conn.row_factory = sqlite3.Row
    try:
        yield conn
    except sqlite3.Error as e:
        logger.error(f"Scan database query failed: {e}")
        raise DataUnavailable(f'Scan database query failed: {e}') from e
    finally:
        conn.close()


def database_available() -> bool:
    """Check that the scan store can be opened and has a scans table."""
    try:
        with get_db() as conn:
            conn.execute('SELECT 1 FROM scans LIMIT 1').fetchall()
        return True
    except DataUnavailable:
        return False


def fetch_scan_rows(since: datetime | None = None) -> list[sqlite3.Row]:
    """
    Fetch scan rows in ascending time order.

    All columns are selected so optional columns missing from older
    scanner schemas simply do not appear in the rows.
    """
    query = 'SELECT * FROM scans'
    params: list[Any] = []
    if since is not None:
        query += ' WHERE timestamp >= ?'
        params.append(since.isoformat(sep=' '))
    query += ' ORDER BY timestamp ASC, rowid ASC'

    with get_db() as conn:
        rows = conn.execute(query, params).fetchall()

    logger.debug(f"Fetched {len(rows)} scan rows")
    return rows


def _count_scans() -> dict:
    with get_db() as conn:
        row = conn.execute('SELECT COUNT(*) AS count FROM scans').fetchone()
    return {'count': row['count']}


def _count_devices() -> dict:
    with get_db() as conn:
        row = conn.execute('SELECT COUNT(DISTINCT fingerprint) AS count FROM scans').fetchone()
    return {'count': row['count']}


def _time_range() -> dict:
    with get_db() as conn:
        row = conn.execute(
            'SELECT MIN(timestamp) AS first_scan, MAX(timestamp) AS last_scan FROM scans'
        ).fetchone()
    return {'first_scan': row['first_scan'], 'last_scan': row['last_scan']}


def scan_overview() -> dict:
    """
    Total scans, unique devices and time range of the store.

    The three queries are independent and run concurrently, each on its
    own connection.
    """
    queries = {
        'totalScans': _count_scans,
        'uniqueDevices': _count_devices,
        'timeRange': _time_range,
    }
    with ThreadPoolExecutor(max_workers=len(queries)) as executor:
        futures = {key: executor.submit(fn) for key, fn in queries.items()}
        return {key: future.result() for key, future in futures.items()}
