from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional

class Settings(BaseSettings):
    DATABASE_URL: str
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    # JWT verification (external identity provider)
    AUTH_JWKS_URL: Optional[str] = None
    AUTH_JWT_SECRET: Optional[str] = None  # HS256 shared secret; takes precedence over JWKS
    AUTH_AUDIENCE: str = "authenticated"

    # Lease funding
    ENFORCE_FUNDING_BALANCE: bool = False  # reject leases whose funders don't sum to market value

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://localhost:5000",
        "http://localhost:5173",
    ]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
