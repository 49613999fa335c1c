"""
Configuration management for CountyScope.

Loads settings from environment variables with sensible defaults.
All upstream URLs and credentials are centralized here to avoid magic
strings scattered throughout the codebase.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _parse_int(value: Optional[str], default: int) -> int:
    """Parse an integer env value, or return default if empty/invalid."""
    if not value:
        return default
    try:
        return int(value.strip())
    except (ValueError, AttributeError):
        return default


@dataclass(frozen=True)
class CensusConfig:
    """Census County Business Patterns API configuration."""
    api_key: Optional[str] = os.getenv('CENSUS_API_KEY') or None
    base_url: str = 'https://api.census.gov/data'
    year: str = os.getenv('CBP_YEAR', '2022')
    naics_variable: str = 'NAICS2017'
    timeout_seconds: int = 30

    @property
    def dataset_url(self) -> str:
        return f'{self.base_url}/{self.year}/cbp'

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)


@dataclass(frozen=True)
class HudConfig:
    """HUD USPS crosswalk API configuration (ZIP -> county)."""
    token: Optional[str] = os.getenv('HUD_API_TOKEN') or None
    base_url: str = 'https://www.huduser.gov/hudapi/public/usps'
    timeout_seconds: int = 15

    @property
    def is_configured(self) -> bool:
        return bool(self.token)


@dataclass(frozen=True)
class NaicsConfig:
    """Census NAICS search handler configuration."""
    base_url: str = 'https://www.census.gov/naics/resources/model/dataHandler.php'
    year: str = os.getenv('NAICS_YEAR', '2022')
    user_agent: str = 'naics-collector/1.0'
    timeout_seconds: int = 15


@dataclass(frozen=True)
class ResultsConfig:
    """Result shaping settings."""
    top_n: int = _parse_int(os.getenv('TOP_N'), 10)
    max_limit: int = 50


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration."""
    census: CensusConfig
    hud: HudConfig
    naics: NaicsConfig
    results: ResultsConfig

    # Flask settings
    secret_key: str
    debug: bool


def load_config() -> AppConfig:
    """Load and validate all configuration."""
    return AppConfig(
        census=CensusConfig(),
        hud=HudConfig(),
        naics=NaicsConfig(),
        results=ResultsConfig(),
        secret_key=os.getenv('SECRET_KEY', 'dev-key-change-in-prod'),
        debug=os.getenv('FLASK_DEBUG', '0') == '1',
    )


# Singleton instance
config = load_config()
