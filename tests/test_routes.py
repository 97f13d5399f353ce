"""Tests for Flask routes and API endpoints."""

import json
from unittest.mock import patch

import pytest


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    import app as app_module
    from routes import register_blueprints

    app_module.app.config['TESTING'] = True

    # Register blueprints only if not already registered (normally done in main())
    if 'beacon_stats' not in app_module.app.blueprints:
        register_blueprints(app_module.app)

    return app_module.app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


def _get(client, url):
    response = client.get(url)
    return response, json.loads(response.data)


class TestHealthEndpoint:
    """Tests for health check endpoint."""

    def test_health_check(self, client, scan_db):
        response, data = _get(client, '/health')
        assert response.status_code == 200
        assert data['status'] == 'healthy'
        assert 'version' in data
        assert 'uptime_seconds' in data
        assert data['database']['available'] is True

    def test_health_without_database(self, client, missing_db):
        response, data = _get(client, '/health')
        assert response.status_code == 200
        assert data['database']['available'] is False


class TestStatsEndpoints:
    """Tests for overview statistics."""

    def test_overview(self, client, scan_db):
        response, data = _get(client, '/api/stats/overview')
        assert response.status_code == 200
        assert data['status'] == 'success'
        assert data['totalScans']['count'] == 6
        assert data['uniqueDevices']['count'] == 3

    def test_hourly(self, client, scan_db):
        _, data = _get(client, '/api/stats/hourly')
        assert data['hours'] == [{'hour': '09', 'count': 1}, {'hour': '10', 'count': 5}]

    def test_rssi_leaderboard(self, client, scan_db):
        _, data = _get(client, '/api/stats/rssi')
        assert [d['fingerprint'] for d in data['devices']] == ['dev-a', 'dev-b', 'dev-c']
        assert data['devices'][0]['avg_rssi'] == -62.0

    def test_recent_devices(self, client, scan_db):
        _, data = _get(client, '/api/stats/devices')
        assert [d['fingerprint'] for d in data['devices']] == ['dev-c', 'dev-b', 'dev-a']
        oldest = data['devices'][2]
        assert oldest['appearance_count'] == 3
        assert oldest['first_seen'] == '2025-04-14T10:00:00'
        assert oldest['last_seen'] == '2025-04-14T10:20:00'
        assert oldest['manufacturer'] == 'Apple'
        assert oldest['services'] == ['fe9f']
        assert data['devices'][0]['manufacturer'] == 'Unknown'


class TestDeviceActivityEndpoints:
    """Tests for device activity endpoints."""

    def test_presence(self, client, scan_db):
        _, data = _get(client, '/api/device-activity/presence')
        assert data['dates'] == ['2025-04-14', '2025-04-15']
        assert data['uniqueDevices'] == [2, 1]
        assert data['avgAppearances'] == [2.5, 1.0]

    def test_dwell_time(self, client, scan_db):
        _, data = _get(client, '/api/device-activity/dwell-time')
        assert data['labels'] == ['0-5', '16-30']
        assert data['values'] == [1, 1]

    def test_heatmap(self, client, scan_db):
        _, data = _get(client, '/api/device-activity/heatmap')
        # 2025-04-14 is a Monday, 2025-04-15 a Tuesday
        assert data['heatmapData'] == [
            {'x': 10, 'y': 1, 'devices': 2},
            {'x': 9, 'y': 2, 'devices': 1},
        ]


class TestDeviceTypesEndpoints:
    """Tests for device classification endpoints."""

    def test_details(self, client, scan_db):
        _, data = _get(client, '/api/device-types/details')
        assert [d['fingerprint'] for d in data['devices']] == ['dev-a', 'dev-b', 'dev-c']
        assert all(d['category'] == 'Occasional' for d in data['devices'])
        assert data['devices'][0]['manufacturer'] == 'Apple'
        assert data['devices'][2]['manufacturer'] == 'Unknown'

    def test_behaviour_ignores_low_activity(self, client, scan_db):
        _, data = _get(client, '/api/device-types/behaviour')
        assert data['labels'] == []

    def test_manufacturers(self, client, scan_db):
        _, data = _get(client, '/api/device-types/manufacturers')
        names = [m['manufacturer'] for m in data['manufacturers']]
        assert names == ['Apple', 'Samsung', 'Unknown']
        assert data['summary']['totalDevices'] == 3
        assert data['manufacturers'][1]['services'] == ['fd5a', '180f']


class TestNetworkEndpoints:
    """Tests for network load endpoints."""

    def test_peak_usage(self, client, scan_db):
        _, data = _get(client, '/api/network/peak-usage')
        assert data['timeLabels'][0] == '2025-04-14 10:20'
        assert data['scanCounts'][0] == 3
        assert data['deviceCounts'][0] == 2

    def test_channel_utilisation(self, client, scan_db):
        _, data = _get(client, '/api/network/channel-utilisation')
        assert data['timeLabels'] == ['2025-04-14 10:00', '2025-04-15 09:00']
        assert data['transmissionsPerDevice'] == [2.5, 1.0]
        assert data['loadLevels'] == ['Low', 'Low']
        assert data['metrics']['timeBlocks'] == 2


class TestEnvironmentEndpoints:
    """Tests for environment analysis endpoints."""

    def test_propagation_uses_tx_power_rows(self, client, scan_db):
        _, data = _get(client, '/api/environment/propagation')
        points = data['pathLossData']
        assert len(points) == 3
        assert all(p['fingerprint'] == 'dev-a' for p in points)
        assert points[0]['y'] == 1
        assert points[0]['x'] == pytest.approx(10 ** (1 / 25))

    def test_interference(self, client, scan_db):
        _, data = _get(client, '/api/environment/interference')
        assert data['timeLabels'] == ['2025-04-14 10:00', '2025-04-15 09:00']
        assert data['rssiValues'][0] == -69.6
        assert data['interferenceScores'][0] == 32
        assert all(0 <= s <= 100 for s in data['interferenceScores'])


class TestErrorHandling:
    """Tests for error responses."""

    def test_missing_database_returns_503(self, client, missing_db):
        response, data = _get(client, '/api/environment/interference')
        assert response.status_code == 503
        assert data['status'] == 'error'
        assert 'not found' in data['message']

    def test_unexpected_error_returns_500(self, client, scan_db):
        with patch('routes.beacon_stats.analyze_channel_load', side_effect=RuntimeError('boom')):
            response, data = _get(client, '/api/network/channel-utilisation')
        assert response.status_code == 500
        assert data['status'] == 'error'
