"""
Timebank Gateway - Centralized Configuration
=============================================

Usage:
    from config.settings import get_config

    config = get_config()
    config.validate()

    # Access settings
    address = config.server.socket_address
    url = config.database.supabase_url

Environment overrides:
    Every setting is read from the environment when the config object is
    built. A `.env` file is loaded by the server entrypoint before that.
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List, Tuple


class ConfigurationError(ValueError):
    """Raised when a required setting is missing."""


def _env(name: str, default: str = "") -> str:
    return os.getenv(name, default).strip()


@dataclass
class ServerConfig:
    """gRPC server configuration"""
    socket_address: str = field(default_factory=lambda: _env("SOCKET_ADDRESS"))
    max_workers: int = field(default_factory=lambda: int(_env("MAX_WORKERS", "10")))
    shutdown_grace_seconds: float = field(
        default_factory=lambda: float(_env("SHUTDOWN_GRACE_SECONDS", "5")))


@dataclass
class DatabaseConfig:
    """Supabase (PostgREST + GoTrue) configuration"""
    supabase_url: str = field(default_factory=lambda: _env("SUPABASE_URL"))
    supabase_service_key: str = field(default_factory=lambda: _env("SUPABASE_SERVICE_KEY"))
    supabase_auth_url: str = field(default_factory=lambda: _env("SUPABASE_AUTH_URL"))

    @property
    def auth_url(self) -> str:
        """GoTrue base URL, derived from the project URL unless overridden."""
        if self.supabase_auth_url:
            return self.supabase_auth_url.rstrip("/")
        return f"{self.supabase_url.rstrip('/')}/auth/v1"


@dataclass
class LedgerConfig:
    """Smart-contract ledger configuration"""
    gateway_url: str = field(default_factory=lambda: _env("LEDGER_GATEWAY_URL"))
    admin_private_key: str = field(default_factory=lambda: _env("ADMIN_PRIVATE_KEY"))
    admin_account_address: str = field(default_factory=lambda: _env("ADMIN_ACCOUNT_ADDRESS"))
    contract_address: str = field(default_factory=lambda: _env("LEDGER_CONTRACT_ADDRESS"))


@dataclass
class MonitoringConfig:
    """Logging"""
    log_level: str = field(default_factory=lambda: _env("LOG_LEVEL", "INFO").upper())


@dataclass
class TimebankConfig:
    """Master configuration container"""
    server: ServerConfig = field(default_factory=ServerConfig)
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    ledger: LedgerConfig = field(default_factory=LedgerConfig)
    monitoring: MonitoringConfig = field(default_factory=MonitoringConfig)

    def required_values(self) -> List[Tuple[str, str]]:
        return [
            ("SOCKET_ADDRESS", self.server.socket_address),
            ("SUPABASE_URL", self.database.supabase_url),
            ("SUPABASE_SERVICE_KEY", self.database.supabase_service_key),
            ("LEDGER_GATEWAY_URL", self.ledger.gateway_url),
            ("ADMIN_PRIVATE_KEY", self.ledger.admin_private_key),
            ("ADMIN_ACCOUNT_ADDRESS", self.ledger.admin_account_address),
            ("LEDGER_CONTRACT_ADDRESS", self.ledger.contract_address),
        ]

    def validate(self) -> None:
        """Fail fast when any required variable is absent."""
        missing = [name for name, value in self.required_values() if not value]
        if missing:
            raise ConfigurationError(
                f"Missing required configuration: {', '.join(missing)}"
            )
        if self.server.max_workers < 1:
            raise ConfigurationError("MAX_WORKERS must be at least 1")


@lru_cache(maxsize=1)
def get_config() -> TimebankConfig:
    """Get cached configuration instance"""
    return TimebankConfig()
