"""Application configuration."""
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.
    
    Environment variables take precedence over .env file.
    """
    
    APP_NAME: str = "What's in the Box"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    
    # Database
    DATABASE_URL: str = "sqlite:///./whatsinthebox.db"
    
    # Deep links: <APP_SCHEME>://box/<id>
    APP_SCHEME: str = "whatsinthebox"
    
    # Photos are written here as <uuid>.jpg
    PHOTOS_DIR: str = "./documents"
    PHOTO_JPEG_QUALITY: int = 80
    
    # QR codes
    QR_DEFAULT_SIZE: int = 512
    QR_LOGO_SIZE: float = 0.2
    
    model_config = SettingsConfigDict(
        env_file=".env" if Path(".env").exists() else None,
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
