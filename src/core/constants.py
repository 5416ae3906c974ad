"""
Core constants and defaults.

Defines engine-wide constants and the default follower configuration
used by the CLI and request schemas.
"""

# Order sizing
MIN_ORDER_QUANTITY = 1  # Scaled quantities below one whole unit are skipped

# Default follower configuration
DEFAULT_INITIAL_CAPITAL = 10000.0
DEFAULT_POSITION_SIZE = 0.1  # 10% of current cash per trade
DEFAULT_MAX_POSITION_SIZE = 0.2  # 20% upper bound for the per-trade fraction
DEFAULT_SLIPPAGE = 0.001  # 0.1% price degradation
DEFAULT_COMMISSION = 0.001  # 0.1% of notional

# Cost model limits
MAX_SLIPPAGE = 1.0  # Exclusive: a sell at 100% slippage would fill at zero
MAX_COMMISSION = 1.0

# Trade source CSV layout
TRADE_CSV_COLUMNS = ["timestamp", "leader_id", "symbol", "side", "quantity", "price"]
