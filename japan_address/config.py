from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_env: str = "development"

    # Catalog source: local directory when set, otherwise the remote API
    catalog_api_url: str = "https://japanese-addresses.geolonia.com/api"
    catalog_dir: str = ""
    catalog_timeout: float = 30.0

    # Max number of (prefecture, city) town-pattern sets kept compiled
    town_cache_size: int = Field(default=1_000, ge=1)

    # CORS: allowed origins (comma-separated, or "*" for dev only)
    cors_origins: str = "http://localhost:5173,http://localhost:3000"

    @property
    def cors_origin_list(self) -> list[str]:
        """Parse CORS_ORIGINS into a list."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


settings = Settings()
