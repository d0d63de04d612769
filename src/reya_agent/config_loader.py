"""
Configuration loader with validation.

Runtime settings win over environment variables, which win over defaults.
"""
from typing import Callable, Optional
from dotenv import load_dotenv

from .config import CacheTTLConfig, ReyaAgentConfig
from .config_validator import get_optional_env, validate_base_url, validate_ttl
from .constants import (
    REYA_API_BASE_URL,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    DEFAULT_TTL_MARKETS,
    DEFAULT_TTL_MARKET_DATA,
    DEFAULT_TTL_ASSETS,
    DEFAULT_TTL_PRICES,
    DEFAULT_TTL_FEE_PARAMETERS,
)

SettingsGetter = Callable[[str], Optional[str]]


def load_config_from_env(settings: Optional[SettingsGetter] = None) -> ReyaAgentConfig:
    """
    Load configuration from runtime settings and environment variables.
    
    Usage:
        config = load_config_from_env(runtime.get_setting)
        plugin = create_plugin(runtime, config)
    
    :param settings: Optional lookup into the host runtime's settings
    :return: Validated ReyaAgentConfig instance
    :raises: ConfigurationError if the base URL or a TTL is invalid
    """
    # Load .env file if it exists (for local development)
    load_dotenv()
    
    def setting(key: str, default: Optional[str] = None) -> Optional[str]:
        if settings is not None:
            value = settings(key)
            if value:
                return value
        return get_optional_env(key, default)
    
    cache_ttl = CacheTTLConfig(
        markets=validate_ttl(
            setting("REYA_CACHE_TTL_MARKETS", str(DEFAULT_TTL_MARKETS)),
            "REYA_CACHE_TTL_MARKETS",
        ),
        market_data=validate_ttl(
            setting("REYA_CACHE_TTL_MARKET_DATA", str(DEFAULT_TTL_MARKET_DATA)),
            "REYA_CACHE_TTL_MARKET_DATA",
        ),
        assets=validate_ttl(
            setting("REYA_CACHE_TTL_ASSETS", str(DEFAULT_TTL_ASSETS)),
            "REYA_CACHE_TTL_ASSETS",
        ),
        prices=validate_ttl(
            setting("REYA_CACHE_TTL_PRICES", str(DEFAULT_TTL_PRICES)),
            "REYA_CACHE_TTL_PRICES",
        ),
        fee_parameters=validate_ttl(
            setting("REYA_CACHE_TTL_FEE_PARAMETERS", str(DEFAULT_TTL_FEE_PARAMETERS)),
            "REYA_CACHE_TTL_FEE_PARAMETERS",
        ),
    )
    
    return ReyaAgentConfig(
        api_base_url=validate_base_url(setting("REYA_API_BASE_URL", REYA_API_BASE_URL)),
        request_timeout_seconds=validate_ttl(
            setting("REYA_REQUEST_TIMEOUT", str(DEFAULT_REQUEST_TIMEOUT_SECONDS)),
            "REYA_REQUEST_TIMEOUT",
        ),
        cache_ttl=cache_ttl,
        llm_provider=setting("LLM_PROVIDER", "groq"),
        llm_model=setting("LLM_MODEL", "llama-3.1-8b-instant"),
        verbose=(setting("VERBOSE", "false") or "false").lower() == "true",
    )


def validate_config(config: ReyaAgentConfig) -> ReyaAgentConfig:
    """
    Re-validate a config built by hand (tests, embedding hosts).
    
    :raises: ConfigurationError on an unusable endpoint or TTL
    """
    config.api_base_url = validate_base_url(config.api_base_url)
    config.request_timeout_seconds = validate_ttl(
        config.request_timeout_seconds, "request_timeout_seconds"
    )
    ttl = config.cache_ttl
    for name in ("markets", "market_data", "assets", "prices", "fee_parameters"):
        setattr(ttl, name, validate_ttl(getattr(ttl, name), f"cache_ttl.{name}"))
    return config
