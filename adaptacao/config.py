from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # local: JSON document + fixed credential table, remote: HTTP API over the KV store
    BACKEND: str = "remote"
    KV_STORE: str = "sql"
    DATABASE_URL: str = "sqlite:///./adaptacao.db"
    REDIS_URL: str = "redis://localhost:6379/0"
    DATA_FILE: str = "./adaptacao_data.json"
    API_URL: str = "http://localhost:8000"
    SECRET_KEY: str = "dev-secret-adaptacao"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_MINUTES: int = 60
    LOG_LEVEL: str = "INFO"
    RATE_LIMIT_PER_MINUTE: int = 60
    SEED_DEFAULT_USERS: bool = True

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
