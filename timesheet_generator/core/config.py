from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    # Session state only lives for the lifetime of the process
    DATABASE_URL: str = "sqlite://"

    # Optional JSON file replacing the built-in employees/projects/holidays
    REFERENCE_DATA_PATH: Optional[str] = None

    # Generation policy
    DAILY_HOURS_MIN: float = 7.5
    DAILY_HOURS_MAX: float = 14.0
    PROJECT_SHARE_CAP: float = 0.6
    MIN_PROJECT_HOURS: float = 1.0
    RANDOM_SEED: Optional[int] = None

    # Date ranges
    DEFAULT_RANGE_DAYS: int = 15
    MAX_RANGE_DAYS: int = 366

    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",  # Local development
        "*",
    ]

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
