# backend/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./database_stock.db"
    FRONTEND_URL: str = "http://localhost:5173"

    # Blob store for product and laptop pictures
    UPLOAD_DIR: str = "static/uploads"

    # Country/organisation prefix used for generated EAN-13 codes
    BARCODE_PREFIX: str = "611"

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=str(env_path), extra="ignore")

settings = Settings()
