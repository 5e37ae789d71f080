from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    SQLSERVER_CONN_STRING: str = ""
    DATA_DIR: str = "./data"
    CORS_ORIGINS: list[str] = ["http://localhost:3000"]
    LOG_LEVEL: str = "INFO"

    DEFAULT_DURATION_MONTHS: int = 60
    BASELINE_LOOKBACK_MONTHS: int = 3
    HEALTH_LOOKBACK_MONTHS: int = 6
    NATIONAL_AVERAGE_SCORE: float = 73.0
    DEFAULT_AGE_GROUP_SCORE: float = 75.0

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
