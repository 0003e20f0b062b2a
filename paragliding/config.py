"""
Configuration management for the Paragliding API.

Loads settings from environment variables with sensible defaults.
The loaded AppConfig is handed to create_app(), which passes the
relevant section to each component it builds.
"""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class DatabaseConfig:
    """Database configuration."""
    url: str = os.getenv('DATABASE_URL', 'sqlite:///paragliding.db')

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith('sqlite')


@dataclass(frozen=True)
class WebhookConfig:
    """Outbound webhook delivery settings."""
    timeout_seconds: float = float(os.getenv('WEBHOOK_TIMEOUT_SECONDS', '5'))


@dataclass(frozen=True)
class TickerConfig:
    """Ticker feed settings."""
    cap: int = int(os.getenv('TICKER_CAP', '5'))  # Track IDs per page


@dataclass(frozen=True)
class IGCConfig:
    """IGC file download settings."""
    timeout_seconds: float = float(os.getenv('IGC_FETCH_TIMEOUT_SECONDS', '10'))


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration."""
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    webhook: WebhookConfig = field(default_factory=WebhookConfig)
    ticker: TickerConfig = field(default_factory=TickerConfig)
    igc: IGCConfig = field(default_factory=IGCConfig)

    # Flask settings
    secret_key: str = 'dev-key-change-in-prod'
    debug: bool = False


def load_config() -> AppConfig:
    """Load and validate all configuration."""
    return AppConfig(
        database=DatabaseConfig(),
        webhook=WebhookConfig(),
        ticker=TickerConfig(),
        igc=IGCConfig(),
        secret_key=os.getenv('SECRET_KEY', 'dev-key-change-in-prod'),
        debug=os.getenv('FLASK_DEBUG', '0') == '1',
    )
