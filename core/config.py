import logging
import secrets

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    # Network reference data (stations, lines, branches)
    NETWORK_DATA_PATH: str = "data/underground-network.json"

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = False  # Default to False for security
    LOG_LEVEL: str = "INFO"

    # Admin token for /admin endpoints
    ADMIN_TOKEN: str = ""

    # Rate limiting storage (memory:// or redis://...)
    RATE_LIMIT_STORAGE_URI: str = "memory://"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    def validate_production_settings(self) -> None:
        """Validate critical settings for production environment.

        Raises ValueError if production settings are invalid.
        """
        errors = []

        if self.is_production:
            if not self.ADMIN_TOKEN or len(self.ADMIN_TOKEN) < 32:
                errors.append(
                    "ADMIN_TOKEN must be set to a secure value (min 32 chars) in production"
                )

            if self.DEBUG:
                errors.append("DEBUG must be False in production")

        if errors:
            raise ValueError(
                "Production configuration errors:\n" + "\n".join(f"  - {e}" for e in errors)
            )

    def validate_development_settings(self) -> None:
        """Set sensible defaults for development if not configured."""
        if not self.ADMIN_TOKEN:
            self.ADMIN_TOKEN = secrets.token_urlsafe(32)
            logger.warning(f"Using auto-generated ADMIN_TOKEN for development: {self.ADMIN_TOKEN}")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


# Create settings instance
settings = Settings()

# Validate based on environment
if settings.is_production:
    settings.validate_production_settings()
else:
    settings.validate_development_settings()
