# config.py
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_NAME: str = "calendario_servicios"
    DB_USER: str = "postgres"
    DB_PASSWORD: str = ""
    DATABASE_URL: str = ""

    DB_POOL_SIZE: int = 20
    DB_POOL_TIMEOUT: int = 2
    DB_POOL_RECYCLE: int = 30
    DB_SLOW_QUERY_THRESHOLD: float = 1.0

    JWT_SECRET: str = "your-secret-key-change-in-production"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRES_DAYS: int = 7

    PORT: int = 3000
    CORS_ORIGINS: str = "*"
    LOG_LEVEL: str = "INFO"

    # Cliente
    API_URL: str = Field(
        default="http://localhost:3000/api",
        validation_alias=AliasChoices("VITE_API_URL", "API_URL"),
    )
    STORAGE_PATH: str = ""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @property
    def constructed_database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"postgresql+psycopg2://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

settings = Settings()

class Config:
    SQLALCHEMY_DATABASE_URI = settings.constructed_database_url
    SECRET_KEY = settings.JWT_SECRET
    JWT_SECRET = settings.JWT_SECRET
    JWT_ALGORITHM = settings.JWT_ALGORITHM
    JWT_EXPIRES_DAYS = settings.JWT_EXPIRES_DAYS
    CORS_ORIGINS = settings.CORS_ORIGINS
    LOG_LEVEL = settings.LOG_LEVEL
    DB_SLOW_QUERY_THRESHOLD = settings.DB_SLOW_QUERY_THRESHOLD
    # Solo aplica a bases de datos con servidor (PostgreSQL)
    DB_POOL_OPTIONS = {
        'pool_size': settings.DB_POOL_SIZE,
        'pool_timeout': settings.DB_POOL_TIMEOUT,
        'pool_recycle': settings.DB_POOL_RECYCLE,
        'pool_pre_ping': True,
    }
