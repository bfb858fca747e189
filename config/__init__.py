from .settings import get_config, get_api_key, reset_config, API_KEY_ENV


__all__ = [
    "get_config",
    "get_api_key",
    "reset_config",
    "API_KEY_ENV",
]
