# app/core/config.py
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

GOOGLE_GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"


class Settings(BaseSettings):
    locations_csv: str = "data/locations.csv"  # = LOCATIONS_CSV
    geocode_api_key: str = ""
    geocode_url: str = GOOGLE_GEOCODE_URL
    geocode_timeout_seconds: float = Field(default=10.0, gt=0)
    # Comma-separated in the environment, e.g. SEARCH_RADII=0.5,1,3,7
    search_radii: str = "0.5,1,3,7"
    search_unit: str = "mi"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        extra="ignore",
    )

    @field_validator("search_unit")
    @classmethod
    def _known_unit(cls, value: str) -> str:
        if value not in {"mi", "km", "m"}:
            raise ValueError("search_unit must be one of mi, km, m")
        return value

    @field_validator("search_radii")
    @classmethod
    def _positive_radii(cls, value: str) -> str:
        radii = [float(part) for part in value.split(",") if part.strip()]
        if not radii or any(r <= 0 for r in radii):
            raise ValueError("search_radii must list at least one positive radius")
        return value

    @property
    def radii(self) -> list[float]:
        return sorted(float(part) for part in self.search_radii.split(",") if part.strip())


settings = Settings()
