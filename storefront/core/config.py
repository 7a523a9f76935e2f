from decimal import Decimal
from typing import Literal

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    PROJECT_NAME: str = "Storefront API"
    API_PREFIX: str = "/api/v1"

    # Storage
    STORAGE_BACKEND: Literal["memory", "database"] = "memory"
    DATABASE_URL: str = "sqlite:///./storefront.db"
    SEED_CATALOG: bool = True

    # Auth
    SECRET_KEY: str = "supersecretkey_change_me_in_production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7 # 1 week

    # Pricing
    SHIPPING_FEE: Decimal = Decimal("9.99")
    TAX_RATE: Decimal = Decimal("0.08")
    VERIFY_ORDER_TOTALS: bool = False

    # Catalog paging
    DEFAULT_PAGE_SIZE: int = 12
    MAX_PAGE_SIZE: int = 100

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
