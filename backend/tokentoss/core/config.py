from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parents[3]


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./tokentoss.db"

    # the-odds-api.com
    THEODDS_BASE_URL: str = "https://api.the-odds-api.com/v4"
    THEODDS_API_KEY: str = ""
    THEODDS_SPORT: str = "americanfootball_nfl"
    THEODDS_REGIONS: str = "us"
    THEODDS_MARKETS: str = "h2h,spreads,totals"
    THEODDS_ODDS_FORMAT: str = "american"  # or "decimal"
    THEODDS_TIMEOUT_SECONDS: float = 20

    # background refresh cadence, the cache policy still decides if the API is hit
    AUTO_REFRESH_SECONDS: int = 60

    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
    )


settings = Settings()
