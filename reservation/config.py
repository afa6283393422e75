from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Storage
    DATA_FILE: Path = Path("railway_data.db")

    # Seat configuration
    SEAT_CLASSES: List[str] = ["AC", "Sleeper"]
    DEFAULT_AC_SEATS: int = 20
    DEFAULT_SLEEPER_SEATS: int = 50
    PNR_PREFIX: str = "PNR"

    # Security
    ADMIN_PASSWORD: str = "admin123"

    # Application
    PROJECT_NAME: str = "Railway Reservation System"
    API_V1_STR: str = "/api/v1"
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="RAILWAY_",
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def default_seat_config(self) -> dict:
        return {"AC": self.DEFAULT_AC_SEATS, "Sleeper": self.DEFAULT_SLEEPER_SEATS}


settings = Settings()
