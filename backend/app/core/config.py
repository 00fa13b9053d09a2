from functools import lru_cache
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    default_author: str = "Current User"
    tick_interval_sec: float = 1.0
    sampling_rate_in: int = 48_000
    sampling_rate_out: int = 24_000
    chime_frequency_hz: float = 880.0
    chime_duration_sec: float = 0.6
    log_level: str = "INFO"
    seed_sample_recipes: bool = True

    model_config = {
        "env_file": ".env",
        "env_prefix": "",
        "extra": "ignore",
    }

@lru_cache()
def get_settings() -> Settings:
    """Return cached Settings instance."""
    return Settings()
