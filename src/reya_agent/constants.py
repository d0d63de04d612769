"""
Reya API endpoints and cache defaults.
"""

REYA_API_BASE_URL = "https://api.reya.xyz"

MARKETS = "/api/trading/markets"
MARKETS_DATA = "/api/trading/markets/data"
ASSETS = "/api/trading/assets"
PRICES = "/api/trading/prices"
FEE_TIER_PARAMETERS = "/api/trading/feeTierParameters"
GLOBAL_FEE_PARAMETERS = "/api/trading/globalFeeParameters"


def market_data_path(market_id: str) -> str:
    return f"/api/trading/market/{market_id}/data"


def price_by_pair_path(asset_pair_id: str) -> str:
    return f"/api/trading/prices/{asset_pair_id}"


# Seconds. Markets and assets stay short so newly listed tokens show up quickly.
DEFAULT_TTL_MARKETS = 30
DEFAULT_TTL_MARKET_DATA = 30
DEFAULT_TTL_ASSETS = 30
DEFAULT_TTL_PRICES = 10
DEFAULT_TTL_FEE_PARAMETERS = 3600

DEFAULT_REQUEST_TIMEOUT_SECONDS = 10.0
