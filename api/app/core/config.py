from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path
import logging

from dotenv import load_dotenv

_logger = logging.getLogger(__name__)

# Look for .env in api directory (parent of app directory)
api_dir = Path(__file__).parent.parent.parent
env_path = api_dir / ".env"

if env_path.exists():
    load_dotenv(env_path, override=False)
    _logger.info(f"Loaded .env file from: {env_path}")
else:
    # Fallback to current directory
    current_env = Path(".env")
    if current_env.exists():
        load_dotenv(current_env, override=False)
        _logger.info(f"Loaded .env file from: {current_env.absolute()}")


DEFAULT_SECRET_KEY = "dev_secret_change_me"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Database
    database_url: str = "sqlite:///./forum.db"

    # API
    api_prefix: str = "/api"

    # CORS
    cors_origins: list[str] = ["*"]

    # Auth
    secret_key: str = DEFAULT_SECRET_KEY
    jwt_algorithm: str = "HS256"
    access_token_expire_days: int = 7

    # Forum behaviour
    default_topic_color: str = "#8aa2ff"
    fallback_topic_title: str = "Uncategorized"
    seed_demo_data: bool = True

    # Client-only variant storage file
    local_store_path: str = "forum-local.json"

    environment: str = "production"

    @property
    def is_development(self) -> bool:
        return self.environment.lower() in ("development", "dev", "local")

    @property
    def sqlalchemy_url(self) -> str:
        # SQLAlchemy prefers postgresql:// over postgres://
        if self.database_url.startswith("postgres://"):
            return self.database_url.replace("postgres://", "postgresql://", 1)
        return self.database_url


# Create settings instance
settings = Settings()

if settings.secret_key == DEFAULT_SECRET_KEY:
    _logger.warning("SECRET_KEY is not set, using the development default")
