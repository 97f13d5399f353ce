"""
Unit tests for manufacturer ranking and service summary.
"""

from utils.beacon.manufacturers import most_common_services, summarize_manufacturers
from utils.beacon.models import ManufacturerAggregate


def _maker(label, devices, avg, appearances=10, days=1, services=None):
    return ManufacturerAggregate(
        manufacturer_label=label,
        device_count=devices,
        avg_signal_strength=avg,
        total_appearances=appearances,
        days_seen=days,
        services=services or [],
    )


class TestSummarizeManufacturers:
    """Tests for summarize_manufacturers."""

    def test_ranked_by_device_count_then_signal(self):
        result = summarize_manufacturers([
            _maker('Weak', 3, -85.0),
            _maker('Big', 10, -90.0),
            _maker('Strong', 3, -55.0),
        ])
        names = [m['manufacturer'] for m in result['manufacturers']]
        assert names == ['Big', 'Strong', 'Weak']

    def test_row_fields(self):
        row = summarize_manufacturers([
            _maker('Apple', 3, -62.345, appearances=10, days=4, services=['fe9f']),
        ])['manufacturers'][0]
        assert row == {
            'manufacturer': 'Apple',
            'deviceCount': 3,
            'avgSignalStrength': -62.3,
            'services': ['fe9f'],
            'totalAppearances': 10,
            'daysActive': 4,
            'appearancesPerDevice': 3.3,
        }

    def test_capped_at_limit(self):
        makers = [_maker(f'm{i}', i + 1, -70.0) for i in range(25)]
        result = summarize_manufacturers(makers, limit=20)
        assert len(result['manufacturers']) == 20
        assert result['manufacturers'][0]['manufacturer'] == 'm24'
        # Summary still covers every manufacturer
        assert result['summary']['totalManufacturers'] == 25

    def test_summary(self):
        result = summarize_manufacturers([
            _maker('Apple', 2, -60.0, services=['fe9f', '180f']),
            _maker('Samsung', 1, -80.0, services=['fd5a', '180f']),
            _maker('Unknown', 1, -70.0),
        ])
        summary = result['summary']
        assert summary['totalManufacturers'] == 3
        assert summary['totalDevices'] == 4
        assert summary['averageSignalStrength'] == -70.0
        assert summary['mostCommonServices'][0] == {'service': '180f', 'count': 2}

    def test_empty(self):
        result = summarize_manufacturers([])
        assert result['manufacturers'] == []
        assert result['summary'] == {
            'totalManufacturers': 0,
            'totalDevices': 0,
            'averageSignalStrength': 0.0,
            'mostCommonServices': [],
        }


class TestMostCommonServices:
    """Tests for the top-services summary."""

    def test_top_five_with_first_seen_tie_break(self):
        makers = [
            _maker('a', 1, -70, services=['s1', 's2', 's3']),
            _maker('b', 1, -70, services=['s4', 's5', 's6', 's2']),
            _maker('c', 1, -70, services=['s7', 's2', 's3']),
        ]
        top = most_common_services(makers)
        assert [s['service'] for s in top] == ['s2', 's3', 's1', 's4', 's5']
        assert [s['count'] for s in top] == [3, 2, 1, 1, 1]

    def test_duplicate_services_counted_once_per_manufacturer(self):
        top = most_common_services([_maker('a', 1, -70, services=['s1', ' s1', 's1'])])
        assert top == [{'service': 's1', 'count': 1}]
