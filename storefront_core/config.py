"""Configuration management using pydantic-settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    database_path: str = "./data/storefront.db"
    cors_origins: list[str] = ["http://localhost:3000"]

    # JWT Configuration
    jwt_secret_key: str = "change-me-in-production-use-env-var"
    jwt_expiry_days: int = 30

    # PBKDF2 rounds applied to new passwords at signup.
    # Stored hashes record their own count, so raising this later
    # does not invalidate existing users. Review per deployment target;
    # tests lower it for faster execution.
    password_hash_iterations: int = 150_000

    # Auth cookie
    auth_cookie_secure: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False
    )


settings = Settings()
