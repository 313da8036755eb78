# designsight/core/config.py
from pydantic_settings import BaseSettings
from typing import Optional, Any, List


class Settings(BaseSettings):
    PROJECT_NAME: str = "DesignSight API"
    API_PREFIX: str = "/api"
    ENV: str = "development"

    # Database settings
    POSTGRES_SERVER: Optional[str] = None
    POSTGRES_USER: Optional[str] = None
    POSTGRES_PASSWORD: Optional[str] = None
    POSTGRES_DB: Optional[str] = None
    SQLALCHEMY_DATABASE_URI: Optional[str] = None

    # Google Cloud Storage; local directory storage is used when no bucket is set
    GCS_BUCKET_NAME: Optional[str] = None
    GCS_PROJECT_ID: Optional[str] = None
    GCS_CREDENTIALS_FILE: Optional[str] = None
    LOCAL_STORAGE_DIR: str = "storage"
    SIGNED_URL_EXPIRATION_MINUTES: int = 7 * 24 * 60

    # Google Cloud Vision
    VISION_CREDENTIALS_FILE: Optional[str] = None

    # Logging
    LOG_LEVEL: str = "INFO"
    JSON_LOGS: bool = False

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = ["*"]

    # File upload settings
    MAX_UPLOAD_SIZE: int = 10 * 1024 * 1024  # 10MB
    MAX_IMAGE_WIDTH: int = 1920
    MAX_IMAGE_HEIGHT: int = 1080
    # Decoded pixel count accepted from an upload, checked before decoding
    MAX_IMAGE_PIXELS: int = 40_000_000
    JPEG_QUALITY: int = 90

    # Base URL used for links embedded in exported reports
    PUBLIC_BASE_URL: str = "http://localhost:8000"

    class Config:
        env_file = ".env"
        case_sensitive = True

    def __init__(self, **data: Any):
        super().__init__(**data)

        # Construct DB URI if not provided directly
        if not self.SQLALCHEMY_DATABASE_URI:
            if self.POSTGRES_SERVER and self.POSTGRES_USER and self.POSTGRES_PASSWORD and self.POSTGRES_DB:
                self.SQLALCHEMY_DATABASE_URI = (
                    f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
                    f"@{self.POSTGRES_SERVER}/{self.POSTGRES_DB}"
                )
            else:
                # Default to SQLite if PostgreSQL settings are not complete
                self.SQLALCHEMY_DATABASE_URI = "sqlite:///./designsight.db"

    @property
    def use_gcs(self) -> bool:
        return bool(self.GCS_BUCKET_NAME)


settings = Settings()
