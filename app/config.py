"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings

DEFAULT_JWT_SECRET = "change-me-to-a-long-random-secret-value"


class Settings(BaseSettings):
    # Database
    database_url: str = "sqlite:///./rentals.db"
    test_database_url: str = "sqlite://"
    database_echo: bool = False

    # Auth (token verification only)
    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"

    # CORS
    cors_origins: list[str] = [
        "https://smartrentsystem.netlify.app",
        "http://127.0.0.1:3000",
        "http://localhost:3000",
    ]
    cors_origin_regex: str = r"https://.*\.netlify\.app"

    # Catalog
    page_size: int = 100

    # Server
    log_level: str = "INFO"
    environment: str = "development"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    def validate_startup(self) -> list[str]:
        """Return configuration warnings worth logging at startup."""
        warnings: list[str] = []
        if self.jwt_secret == DEFAULT_JWT_SECRET and not self.is_development:
            warnings.append(
                "JWT_SECRET is still the default value. Set it in .env before "
                "accepting real traffic."
            )
        return warnings


settings = Settings()
