from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    DATABASE_URL: str = "sqlite:///./studydeck.db"
    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]
    LOG_LEVEL: str = "INFO"
    SEED_SAMPLE_DECKS: bool = True
    # простаивающая дольше сессия изучения выбрасывается из памяти
    STUDY_SESSION_TTL_MINUTES: int = 120


settings = Settings()
