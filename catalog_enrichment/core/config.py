from pydantic_settings import BaseSettings
from typing import Optional

from catalog_enrichment.core.errors import ConfigurationError


class Settings(BaseSettings):
    # Catalog store (required at enrichment time)
    supabase_url: Optional[str] = None
    supabase_service_role_key: Optional[str] = None
    products_table: str = "shopify_products"
    images_table: str = "product_images"

    # Text-completion service (required at enrichment time)
    deepseek_api_key: Optional[str] = None
    deepseek_api_url: str = "https://api.deepseek.com/v1/chat/completions"
    deepseek_model: str = "deepseek-chat"
    text_temperature: float = 0.3
    text_max_retries: int = 2
    analysis_max_tokens: int = 500
    seo_max_tokens: int = 200
    description_max_length: int = 800

    # Vision service (optional)
    google_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.5-flash"
    vision_temperature: float = 0.2
    vision_max_tokens: int = 150

    # Enrichment defaults
    default_taxonomy: str = "Home & Garden > Furniture"
    enrichment_timeout: float = 120.0
    enrichment_retries: int = 1

    # Optional with defaults
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000
    request_timeout: int = 30

    class Config:
        env_file = ".env"
        extra = "ignore"


def check_configuration(config: Settings) -> None:
    """Fail fast when a required credential is missing.

    The vision key is optional: without it vision analysis is skipped.
    """
    missing = []
    if not config.supabase_url:
        missing.append("SUPABASE_URL")
    if not config.supabase_service_role_key:
        missing.append("SUPABASE_SERVICE_ROLE_KEY")
    if missing:
        raise ConfigurationError(
            f"Catalog store configuration missing: {', '.join(missing)} not configured"
        )

    if not config.deepseek_api_key:
        raise ConfigurationError(
            "Text service API key not configured: DEEPSEEK_API_KEY is missing"
        )


settings = Settings()
