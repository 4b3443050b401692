"""
Default constants for the network tree engine.

Layout units match the flow view of the dashboard: one member card
(280 px including spacing) per leaf and 200 px between levels.
"""

from decimal import Decimal

# Layout
DEFAULT_UNIT_WIDTH = 280.0
DEFAULT_LEVEL_SPACING = 200.0

# Fetch boundary
DEFAULT_FETCH_DEPTH = 5
MAX_FETCH_DEPTH = 50

# Money normalisation
AMOUNT_QUANTUM = Decimal("0.01")
ZERO = Decimal("0")

DEFAULT_CURRENCY = "₹"
UNKNOWN_USER_NAME = "Unknown User"

# Member statuses reported by the source
STATUS_ACTIVE = "ACTIVE"
STATUS_INACTIVE = "INACTIVE"
STATUS_SUSPENDED = "SUSPENDED"
KNOWN_STATUSES = frozenset({STATUS_ACTIVE, STATUS_INACTIVE, STATUS_SUSPENDED})

# User-visible messages
MSG_DATA_UNAVAILABLE = "Network data unavailable, try again"
MSG_NOT_FOUND = "Not found in your network"
MSG_TRUNCATED = "More members below, load deeper levels"
