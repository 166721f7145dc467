from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "CardRanker"
    debug: bool = False

    database_url: str = "sqlite+aiosqlite:///./cardranker.db"

    # Set being graded; drives the catalog path and the storage key
    set_code: str = "tla"

    # Directory holding one sub-directory per set: {sets_dir}/{set_code}/{set_code}.json
    sets_dir: Path = Path("public/sets")

    # When set, the catalog is fetched from this URL instead of sets_dir
    catalog_url: str = ""

    # Prefix for locally cached card images
    image_base_url: str = "/sets"

    @property
    def storage_key(self) -> str:
        """Blob store key holding this set's grades."""
        return f"rankings-{self.set_code}"

    @property
    def catalog_path(self) -> Path:
        """Local catalog document for this set."""
        return self.sets_dir / self.set_code / f"{self.set_code}.json"


settings = Settings()


# =============================================================================
# SCRYFALL
# =============================================================================

SCRYFALL_SEARCH_API = "https://api.scryfall.com/cards/search"

# Scryfall asks clients to stay under 10 requests per second
SCRYFALL_REQUEST_DELAY_SECONDS = 0.1
