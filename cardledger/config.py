from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "cardledger"
    debug: bool = False

    database_url: str = "sqlite:///cardledger.db"

    scryfall_api_url: str = "https://api.scryfall.com"
    user_agent: str = "cardledger/1.0"

    # Set fetched when a request does not name one
    default_set_code: str = "fin"

    request_timeout: float = 30.0

    # Scryfall asks for at most 10 requests per second
    catalog_page_delay: float = 0.1
    catalog_max_pages: int = 50

    # Persisted key-value slots
    collection_storage_key: str = "cardledger-collection"
    language_storage_key: str = "cardledger-language"
    catalog_variant_storage_key: str = "cardledger-catalog-variant"


settings = Settings()


# Default file name offered when exporting the ledger
EXPORT_FILENAME = "cardledger-collection.json"
