from .client import ReyaApiClient

__all__ = ["ReyaApiClient"]
