#!/usr/bin/env python3
"""
BLE Scan Dashboard - statistics server for stored beacon observations.
"""

from __future__ import annotations

import argparse
import time
from pathlib import Path

from flask import Flask, jsonify

import config
from utils.logging import get_logger

logger = get_logger('beacon.app')

app = Flask(__name__)

_start_time = time.time()


@app.route('/health')
def health_check():
    """Report service version, uptime and scan store availability."""
    from utils.database import database_available

    return jsonify({
        'status': 'healthy',
        'version': config.VERSION,
        'uptime_seconds': round(time.time() - _start_time, 1),
        'database': {
            'path': str(config.DB_PATH),
            'available': database_available(),
        },
    })


def main() -> None:
    parser = argparse.ArgumentParser(description='BLE scan statistics dashboard')
    parser.add_argument('--host', default=config.HOST, help='Interface to bind')
    parser.add_argument('--port', type=int, default=config.PORT, help='Port to listen on')
    parser.add_argument('--db', type=Path, default=None, help='Path to the scan database')
    parser.add_argument('--debug', action='store_true', default=config.DEBUG, help='Enable Flask debug mode')
    args = parser.parse_args()

    if args.db is not None:
        import utils.database
        config.DB_PATH = args.db
        utils.database.DB_PATH = args.db

    from routes import register_blueprints
    register_blueprints(app)

    logger.info(f"Scan database: {config.DB_PATH}")
    logger.info(f"Dashboard server running at http://{args.host}:{args.port}")
    app.run(host=args.host, port=args.port, debug=args.debug, threaded=True)


if __name__ == '__main__':
    main()
