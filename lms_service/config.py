from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./lms.db"
    PORT: int = 5000
    LOG_LEVEL: str = "INFO"
    REDIS_URL: str = "redis://localhost:6379/0"
    CACHE_ENABLED: bool = True
    CACHE_TTL: int = 300  # 5 минут
    RATE_LIMIT_ENABLED: bool = True
    REGISTER_RATE_LIMIT: str = "30/minute"
    LOGIN_RATE_LIMIT: str = "10/minute"
    STATIC_DIR: str | None = None  # по умолчанию lms_service/static

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
