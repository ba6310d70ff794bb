"""Application settings and environment variables."""

import os

from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file


class Settings:
    DB_HOST: str = os.getenv("DB_HOST", "localhost")
    DB_DATABASE: str = os.getenv("DB_NAME", "stockroom_db")
    DB_USER: str = os.getenv("DB_USER", "user")
    DB_PASSWORD: str = os.getenv("DB_PASSWORD", "password")

    # Single warehouse served by this instance
    WAREHOUSE_NAME: str = os.getenv("WAREHOUSE_NAME", "HEMATOLOGIA")

    # Date range filters are evaluated in this timezone
    LOCAL_TIMEZONE: str = os.getenv("LOCAL_TIMEZONE", "America/Lima")

    # Live query polling interval
    SNAPSHOT_POLL_SECONDS: int = int(os.getenv("SNAPSHOT_POLL_SECONDS", "5"))

    # Static catalog used to seed an empty product collection
    CATALOG_PATH: str = os.getenv("CATALOG_PATH", os.path.join(os.path.dirname(__file__), "catalog.json"))

    # Logging settings
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")  # INFO, DEBUG, WARNING, ERROR, CRITICAL


settings = Settings()
