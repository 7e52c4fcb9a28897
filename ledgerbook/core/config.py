import logging
import os
import sys
from pathlib import Path
from typing import List

from dotenv import load_dotenv

# .env lives next to the project root in dev and next to the exe when frozen
if getattr(sys, "frozen", False):
    BASE_DIR = Path(sys.executable).parent
else:
    BASE_DIR = Path(__file__).resolve().parents[2]

load_dotenv(dotenv_path=BASE_DIR / ".env")


def _split_csv(value: str) -> List[str]:
    return [v.strip() for v in value.split(",") if v.strip()]


class Settings:
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./ledgerbook.db")

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # summary report memo, one entry per filter combination
    SUMMARY_CACHE_MAX_KEYS: int = int(os.getenv("SUMMARY_CACHE_MAX_KEYS", "64"))

    CORS_ORIGINS: List[str] = _split_csv(
        os.getenv(
            "CORS_ORIGINS",
            "http://localhost:8080,http://localhost:8081,http://127.0.0.1:8080,http://127.0.0.1:8081",
        )
    )

    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "5001"))


settings = Settings()


def configure_logging(level: str = None) -> None:
    logging.basicConfig(
        level=getattr(logging, (level or settings.LOG_LEVEL), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
