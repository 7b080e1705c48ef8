"""Application configuration via pydantic-settings."""

from functools import lru_cache

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Balancer settings loaded from environment variables (prefix BALANCER_)."""

    model_config = SettingsConfigDict(
        env_prefix="BALANCER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # JSON snapshot of the player store
    players_path: str = "data/players.json"

    # Team composition
    tank_slots: int = 2
    dps_slots: int = 2
    support_slots: int = 2

    @computed_field
    @property
    def team_slots(self) -> dict[str, int]:
        """Slot count per canonical role name, in display order."""
        return {
            "tank": self.tank_slots,
            "dps": self.dps_slots,
            "support": self.support_slots,
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
