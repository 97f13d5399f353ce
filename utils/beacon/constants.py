"""
BLE beacon statistics constants.
"""

from __future__ import annotations

# =============================================================================
# SIGNAL MODEL
# =============================================================================

# Distance returned when the path-loss model cannot be evaluated
DEGENERATE_DISTANCE_M = 1.0

# Below this distance the display switches to centimetres
DISTANCE_CM_THRESHOLD_M = 1.0

# =============================================================================
# DEVICE CATEGORIES
# =============================================================================

CATEGORY_PERMANENT = 'Permanent'
CATEGORY_REGULAR = 'Regular'
CATEGORY_FREQUENT = 'Frequent'
CATEGORY_OCCASIONAL = 'Occasional'

CATEGORY_ORDER = [
    CATEGORY_PERMANENT,
    CATEGORY_REGULAR,
    CATEGORY_FREQUENT,
    CATEGORY_OCCASIONAL,
]

PERMANENT_MIN_DAYS = 7
PERMANENT_MIN_APPEARANCES = 100
REGULAR_MIN_DAYS = 3
FREQUENT_MIN_APPEARANCES = 50

# Devices at or below this appearance count are left out of behaviour stats
BEHAVIOUR_MIN_APPEARANCES = 10

# =============================================================================
# INTERFERENCE SCORING
# =============================================================================

# Assumed span of BLE RSSI values (-100..0 dBm)
RSSI_SCALE_DBM = 100.0

INTERFERENCE_DEVICE_SATURATION = 10       # devices per bucket for full density
INTERFERENCE_READING_SATURATION = 100     # readings per device for full density

INTERFERENCE_WEIGHT_AVG_RSSI = 0.3
INTERFERENCE_WEIGHT_SIGNAL_SPREAD = 0.3
INTERFERENCE_WEIGHT_DEVICE_DENSITY = 0.2
INTERFERENCE_WEIGHT_READING_DENSITY = 0.2

INTERFERENCE_SCORE_MIN = 0
INTERFERENCE_SCORE_MAX = 100

# =============================================================================
# CHANNEL LOAD
# =============================================================================

LOAD_LOW = 'Low'
LOAD_MEDIUM = 'Medium'
LOAD_HIGH = 'High'

# Thresholds on transmissions per device (strictly greater than)
LOAD_HIGH_THRESHOLD = 10
LOAD_MEDIUM_THRESHOLD = 5

# Minutes per hourly bucket used to normalise the load factor
LOAD_FACTOR_MINUTES = 60

# =============================================================================
# DWELL TIME
# =============================================================================

# (label, inclusive upper bound in minutes); last bucket is open ended
DWELL_BUCKETS: list[tuple[str, float]] = [
    ('0-5', 5),
    ('6-15', 15),
    ('16-30', 30),
    ('31-60', 60),
    ('60+', float('inf')),
]

# =============================================================================
# MANUFACTURERS
# =============================================================================

UNKNOWN_MANUFACTURER = 'Unknown'
TOP_SERVICES_COUNT = 5

# =============================================================================
# TIME BUCKETS
# =============================================================================

BUCKET_HOUR = 'hour'
BUCKET_MINUTE = 'minute'

BUCKET_FORMATS = {
    BUCKET_HOUR: '%Y-%m-%d %H:00',
    BUCKET_MINUTE: '%Y-%m-%d %H:%M',
}

DATE_FORMAT = '%Y-%m-%d'
