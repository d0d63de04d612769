from dataclasses import dataclass, field

from .constants import (
    REYA_API_BASE_URL,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    DEFAULT_TTL_MARKETS,
    DEFAULT_TTL_MARKET_DATA,
    DEFAULT_TTL_ASSETS,
    DEFAULT_TTL_PRICES,
    DEFAULT_TTL_FEE_PARAMETERS,
)


@dataclass
class CacheTTLConfig:
    # Independent per resource kind
    markets: float = DEFAULT_TTL_MARKETS
    market_data: float = DEFAULT_TTL_MARKET_DATA
    assets: float = DEFAULT_TTL_ASSETS
    prices: float = DEFAULT_TTL_PRICES
    fee_parameters: float = DEFAULT_TTL_FEE_PARAMETERS


@dataclass
class ReyaAgentConfig:
    # Remote API
    api_base_url: str = REYA_API_BASE_URL
    request_timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT_SECONDS

    # Cache
    cache_ttl: CacheTTLConfig = field(default_factory=CacheTTLConfig)

    # LLM
    llm_provider: str = "groq"
    llm_model: str = "llama-3.1-8b-instant"

    verbose: bool = False
