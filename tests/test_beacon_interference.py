"""
Unit tests for interference scoring.
"""

from utils.beacon.interference import analyze_interference, interference_score
from utils.beacon.models import TimeBucketAggregate


def _bucket(avg, lo, hi, devices, readings, key='2025-04-14 10:00'):
    return TimeBucketAggregate(
        bucket_key=key,
        transmission_count=readings,
        active_devices=devices,
        avg_rssi=avg,
        min_rssi=lo,
        max_rssi=hi,
    )


class TestInterferenceScore:
    """Tests for interference_score."""

    def test_weighted_blend(self):
        """0.3*0.5 + 0.3*0.4 + 0.2*0.5 + 0.2*0.5 = 0.47."""
        assert interference_score(_bucket(-50, -70, -30, 5, 250)) == 47

    def test_density_saturates(self):
        """Device and reading densities cap at 1."""
        score = interference_score(_bucket(0, 0, 0, 50, 50 * 500))
        assert score == 40

    def test_clamped_high(self):
        """RSSI outside -100..0 cannot push the score over 100."""
        assert interference_score(_bucket(-300, -400, 0, 20, 10000)) == 100

    def test_clamped_low(self):
        assert interference_score(_bucket(0, 0, -50, 1, 1)) == 0

    def test_zero_devices_not_scored(self):
        assert interference_score(_bucket(-60, -70, -50, 0, 10)) is None

    def test_bounds_over_grid(self):
        for avg in range(-150, 31, 30):
            for spread in (0, 20, 80, 200):
                for devices in (1, 5, 30):
                    for per_device in (1, 50, 400):
                        bucket = _bucket(avg, avg - spread, avg + spread, devices, devices * per_device)
                        score = interference_score(bucket)
                        assert 0 <= score <= 100
                        assert isinstance(score, int)


class TestAnalyzeInterference:
    """Tests for the interference series."""

    def test_excludes_buckets_without_devices(self):
        buckets = [
            _bucket(-50, -70, -30, 5, 250, key='2025-04-14 10:00'),
            _bucket(-60, -60, -60, 0, 0, key='2025-04-14 11:00'),
            _bucket(-69.64, -82, -60, 2, 5, key='2025-04-14 12:00'),
        ]
        result = analyze_interference(buckets)
        assert result['timeLabels'] == ['2025-04-14 10:00', '2025-04-14 12:00']
        assert result['rssiValues'] == [-50, -69.6]
        assert result['deviceCounts'] == [5, 2]
        assert result['signalRanges'] == [40, 22]
        assert result['readingDensities'] == [50.0, 2.5]
        assert result['interferenceScores'][0] == 47

    def test_empty(self):
        result = analyze_interference([])
        assert all(series == [] for series in result.values())

    def test_repeatable(self):
        buckets = [_bucket(-55, -80, -40, 3, 90)]
        assert analyze_interference(buckets) == analyze_interference(buckets)
