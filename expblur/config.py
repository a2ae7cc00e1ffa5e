"""Application configuration."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # Blur defaults, used when a request leaves a parameter out or zero
    DEFAULT_RADIUS: float = 5.0
    DEFAULT_APREC: int = 16
    DEFAULT_ZPREC: int = 7

    # Server settings
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    # API settings
    MAX_IMAGE_SIZE: int = 4096 * 4096 * 4  # Max raw image bytes (4K x 4K RGBA)

    LOG_LEVEL: str = "INFO"

    model_config = {"env_prefix": "EXPBLUR_"}


settings = Settings()
