from config.settings import ConfigurationError, TimebankConfig, get_config

__all__ = ["ConfigurationError", "TimebankConfig", "get_config"]
