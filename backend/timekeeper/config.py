from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./timekeeper.db"
    DB_POOL_SIZE: int = 20
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 2
    DB_POOL_RECYCLE: int = 30
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: list[str] = [
        "http://127.0.0.1:3000",
        "http://localhost:3000",
        "http://127.0.0.1:8000",
        "http://localhost:8000",
    ]
    DEFAULT_PROJECT_COLOR: str = "#F4D03F"
    PROJECT_TIME_ENTRIES_LIMIT: int = 50
    TIMER_TICK_SECONDS: float = 1.0
    API_BASE_URL: str = "http://localhost:8000"

    class Config:
        env_file = ".env"

settings = Settings()
