import os
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Always load .env from root
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
load_dotenv(os.path.join(BASE_DIR, ".env"))


class Settings(BaseSettings):
    GOOGLE_USERINFO_URL: str = "https://www.googleapis.com/oauth2/v2/userinfo"

    JWT_SECRET: str | None = None
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_MINUTES: int = 1440  # 24 hours default

    DB_USER: str | None = None
    DB_PASS: str | None = None
    DB_HOST: str | None = None
    DB_PORT: str | None = None
    AUTH_DB_NAME: str | None = None
    PARKING_DB_NAME: str | None = None

    # Explicit URLs win over the DB_* parts (sqlite in tests)
    AUTH_DATABASE_URL: str | None = None
    PARKING_DATABASE_URL: str | None = None

    # Completion API (OpenAI compatible)
    OPENAI_API_KEY: str | None = None
    OPENAI_BASE_URL: str = "https://api.openai.com/v1"
    OPENAI_MODEL: str = "gpt-4"
    CHAT_MAX_TOKENS: int = 800
    CHAT_TEMPERATURE: float = 0.7
    CHAT_TIMEOUT_SECONDS: float = 30

    # Payment processor
    STRIPE_SECRET_KEY: str | None = None
    STRIPE_API_BASE: str = "https://api.stripe.com"
    PAYMENT_TIMEOUT_SECONDS: float = 20

    SEARCH_DEFAULT_LIMIT: int = 50
    SEARCH_MAX_LIMIT: int = 100

    CORS_ORIGINS: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def auth_database_url(self) -> str:
        return self.AUTH_DATABASE_URL or _postgres_url(self, self.AUTH_DB_NAME)

    @property
    def parking_database_url(self) -> str:
        return self.PARKING_DATABASE_URL or _postgres_url(self, self.PARKING_DB_NAME)


def _postgres_url(settings: Settings, db_name: str | None) -> str:
    return (
        f"postgresql+psycopg2://{settings.DB_USER}:{settings.DB_PASS}@{settings.DB_HOST}:{settings.DB_PORT}/{db_name}?sslmode=require"
    )


settings = Settings()
