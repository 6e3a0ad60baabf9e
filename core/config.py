from __future__ import annotations

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_SCRIPT_URL = (
    "https://script.google.com/macros/s/"
    "AKfycbyIjuVA42e9NT2xzVaaepnabo42Y2MMQLIoDR3RWte0C-qfOw4ctXrpSVuAln4y40eYtw/exec"
)

ALL_UNITS = "ALL"
ADMIN_UNIT = "ผู้ดูแลภาพรวม J1Admin"

UNITS: List[str] = [
    "กนผ.สนผพ.กพ.ทหาร",
    "กพบท.กพ.ทหาร",
    "กทด.สนผพ.กพ.ทหาร",
    "กกล.กพ.ทหาร",
    "กพพ.กพ.ทหาร",
    "กบพ.กพ.ทหาร",
    "กปค.กพ.ทหาร",
    "กคง.สนผพ.กพ.ทหาร",
    ADMIN_UNIT,
]

# Units a project can be assigned to (the admin sentinel owns none).
PROJECT_UNITS: List[str] = [u for u in UNITS if u != ADMIN_UNIT]


class Settings(BaseSettings):
    """Tracker settings loaded from environment variables or `.env`."""

    TRACKER_SCRIPT_URL: str = DEFAULT_SCRIPT_URL
    TRACKER_TIMEOUT_SECONDS: float = 30.0
    TRACKER_WRITE_WORKERS: int = 4

    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


def get_settings() -> Settings:
    return Settings()
