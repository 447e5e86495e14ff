from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    ENV: str = Field(default="dev")  # dev|prod

    # DB
    DATABASE_URL: str = Field(default="postgresql+psycopg://app:app@db:5432/catalog")

    # CORS
    CORS_ORIGINS: str = Field(default="http://localhost:3000,http://localhost")

    # Celery / Redis
    REDIS_URL: str = Field(default="redis://redis:6379/0")

    # Blob storage
    BLOB_ROOT: str = Field(default="/app/data/blobs")
    PUBLIC_BASE_URL: str = Field(default="http://localhost:8000/blobs")

    # Import
    IMPORT_PAGE_SIZE: int = Field(default=50)
    IMPORT_DELIMITER: str = Field(default=";")
    IMPORT_ENCODING: str = Field(default="utf-8")
    IMPORT_LIMIT_OF_LINES: int = Field(default=10000)
    IMPORT_FILE_MAX_SIZE_MB: int = Field(default=1)

    # Export
    EXPORT_PAGE_SIZE: int = Field(default=50)
    EXPORT_LIMIT_OF_LINES: int = Field(default=10000)

    LOG_LEVEL: str | None = Field(default=None)  # overrides the ENV default (DEBUG in dev, INFO otherwise)

    # Catalog dictionaries
    AVAILABLE_LANGUAGES: str = Field(default="en-US,de-DE,fr-FR,es-ES,ru-RU")
    AVAILABLE_REVIEW_TYPES: str = Field(default="QuickReview,FullReview")

    def languages(self) -> list[str]:
        return [x.strip() for x in self.AVAILABLE_LANGUAGES.split(",") if x.strip()]

    def review_types(self) -> list[str]:
        return [x.strip() for x in self.AVAILABLE_REVIEW_TYPES.split(",") if x.strip()]


settings = Settings()
