import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


def _as_bool(value: str) -> bool:
    return value.lower() in ("true", "1", "yes")


@dataclass
class Settings:
    # Application settings
    app_name: str = os.getenv("APP_NAME", "Book Store API")
    app_version: str = os.getenv("APP_VERSION", "1.0.0")
    debug: bool = _as_bool(os.getenv("DEBUG", "False"))

    # Server settings
    api_host: str = os.getenv("API_HOST", "127.0.0.1")
    api_port: int = int(os.getenv("PORT", "3000"))

    # Logging settings
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Start each store with the three sample books
    seed_books: bool = _as_bool(os.getenv("SEED_BOOKS", "True"))


settings = Settings()
