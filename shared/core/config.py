import os
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Always load .env from root
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
load_dotenv(os.path.join(BASE_DIR, ".env"))


class Settings(BaseSettings):
    DB_USER: str | None = os.getenv("DB_USER")
    DB_PASS: str | None = os.getenv("DB_PASS")
    DB_HOST: str = os.getenv("DB_HOST", "localhost")
    DB_PORT: str = os.getenv("DB_PORT", "5432")
    CONTRACT_DB_NAME: str = os.getenv("CONTRACT_DB_NAME", "contracts")
    DB_SSLMODE: str | None = os.getenv("DB_SSLMODE")

    # Full SQLAlchemy URL; wins over the DB_* parts when set
    CONTRACT_DATABASE_URL: str | None = os.getenv("CONTRACT_DATABASE_URL")

    DB_POOL_SIZE: int = int(os.getenv("DB_POOL_SIZE", 2))
    DB_MAX_OVERFLOW: int = int(os.getenv("DB_MAX_OVERFLOW", 2))
    DB_POOL_TIMEOUT: int = int(os.getenv("DB_POOL_TIMEOUT", 30))

    # "restrict" | "cascade"
    CONTRACT_DELETE_POLICY: str = os.getenv(
        "CONTRACT_DELETE_POLICY", "restrict")

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()


def get_contract_database_url(cfg: Settings = settings) -> str:
    if cfg.CONTRACT_DATABASE_URL:
        return cfg.CONTRACT_DATABASE_URL

    url = (
        f"postgresql+psycopg2://{cfg.DB_USER}:{cfg.DB_PASS}@{cfg.DB_HOST}:{cfg.DB_PORT}/{cfg.CONTRACT_DB_NAME}"
    )
    if cfg.DB_SSLMODE:
        url += f"?sslmode={cfg.DB_SSLMODE}"
    return url
