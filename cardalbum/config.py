from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "Card Album"
    debug: bool = False

    database_url: str = "sqlite+aiosqlite:///./cardalbum.db"

    # External game data document (teams, promo codes, names, constants).
    # When unset the bundled data file is used.
    game_data_path: Path | None = None


settings = Settings()


# =============================================================================
# LEAGUE FILTERING
# =============================================================================

# Sentinel league filter meaning "every team"
ALL_LEAGUES = "all"


# =============================================================================
# GAME DEFAULTS
# =============================================================================

# Used when the game data document omits a constant
DEFAULT_CARDS_PER_TEAM = 300
DEFAULT_STARTING_COINS = 500
DEFAULT_DAILY_BONUS = 50
DEFAULT_STANDARD_PACK_PRICE = 100
DEFAULT_STANDARD_PACK_SIZE = 5

# Fallback name tokens for empty name lists
FALLBACK_FIRST_NAME = "Player"
FALLBACK_LAST_NAME = "Name"
