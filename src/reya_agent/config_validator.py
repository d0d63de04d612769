"""
Configuration validation utilities.

Every validator raises ConfigurationError with a message that tells the
operator which setting to fix and how.
"""
import math
import os
import warnings
from typing import Optional
from urllib.parse import urlparse

from .exceptions import ConfigurationError


def get_required_env(key: str, description: str = None) -> str:
    """
    Get required environment variable with validation.
    
    :param key: Environment variable name
    :param description: Human-readable description for error messages
    :return: Environment variable value
    :raises: ConfigurationError if not set or a placeholder
    """
    value = os.getenv(key)
    
    if not value:
        desc = description or key
        raise ConfigurationError(
            f"{key} is required but not set.\n"
            f"Please set it using one of these methods:\n"
            f"  1. Environment variable: export {key}='your-value'\n"
            f"  2. .env file: Create .env in project root with {key}=your-value\n\n"
            f"Description: {desc}"
        )
    
    if _is_placeholder(value):
        raise ConfigurationError(
            f"{key} appears to be a placeholder value.\n"
            f"Please set a real value. Current value: {_mask_secret(value)}"
        )
    
    return value


def get_optional_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """
    Get optional environment variable.
    
    :param key: Environment variable name
    :param default: Default value if not set
    :return: Environment variable value or default
    """
    value = os.getenv(key, default)
    
    if value and _is_placeholder(value):
        warnings.warn(
            f"{key} appears to be a placeholder. Using default or None.",
            UserWarning
        )
        return default
    
    return value


def validate_base_url(url: Optional[str], setting_name: str = "REYA_API_BASE_URL") -> str:
    """
    Validate that the API base URL is a well-formed http(s) URL.
    
    Trailing slashes are stripped so endpoint paths can be appended directly.
    
    :param url: Candidate base URL
    :param setting_name: Setting name used in error messages
    :return: Normalized base URL
    :raises: ConfigurationError if missing or malformed
    """
    if not url or not url.strip():
        raise ConfigurationError(f"{setting_name} is required for the Reya plugin.")
    
    candidate = url.strip()
    parsed = urlparse(candidate)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigurationError(
            f"{setting_name} must be a valid http(s) URL, got: {candidate!r}"
        )
    
    return candidate.rstrip("/")


def validate_ttl(value, setting_name: str) -> float:
    """
    Validate a cache TTL in seconds.
    
    :param value: Number or numeric string
    :param setting_name: Setting name used in error messages
    :return: TTL as float
    :raises: ConfigurationError if not a positive finite number
    """
    try:
        ttl = float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{setting_name} must be a number of seconds, got: {value!r}")
    
    if not math.isfinite(ttl):
        raise ConfigurationError(f"{setting_name} must be finite, got: {value!r}")
    if ttl <= 0:
        raise ConfigurationError(f"{setting_name} must be positive, got: {ttl}")
    
    return ttl


def _is_placeholder(value: str) -> bool:
    """Check if value is a placeholder."""
    if not value:
        return False
    
    placeholder_patterns = [
        "your_",
        "placeholder",
        "xxx",
        "gsk_0000",
        "sk-0000",
        "replace",
        "todo",
    ]
    
    value_lower = value.lower()
    return any(pattern in value_lower for pattern in placeholder_patterns)


def _mask_secret(secret: str, show_chars: int = 4) -> str:
    """Mask secret for safe display in error messages."""
    if not secret or len(secret) <= show_chars * 2:
        return "***"
    
    return f"{secret[:show_chars]}...{secret[-show_chars:]}"
