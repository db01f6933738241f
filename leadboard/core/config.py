"""Application configuration helpers."""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

BUNDLED_DATA_PATH = Path(__file__).resolve().parents[1] / "data" / "default_companies.csv"
DEFAULT_TOP_N = 10


@dataclass(frozen=True)
class Settings:
    default_data_path: Path = BUNDLED_DATA_PATH
    top_n: int = DEFAULT_TOP_N
    server_port: int = 8080


def _parse_top_n(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        logger.warning("METRICS_TOP_N=%r is not an integer; using %d.", raw, DEFAULT_TOP_N)
        return DEFAULT_TOP_N
    if value <= 0:
        logger.warning("METRICS_TOP_N must be positive, got %d; using %d.", value, DEFAULT_TOP_N)
        return DEFAULT_TOP_N
    return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment variables with sensible defaults."""
    load_dotenv()

    data_path_raw = os.getenv("DEFAULT_DATA_PATH", "").strip()
    default_data_path = Path(data_path_raw).expanduser() if data_path_raw else BUNDLED_DATA_PATH
    top_n = _parse_top_n(os.getenv("METRICS_TOP_N", str(DEFAULT_TOP_N)))
    server_port = int(os.getenv("PORT") or os.getenv("WORKER_PORT") or "8080")

    if not default_data_path.is_file():
        logger.warning("DEFAULT_DATA_PATH %s does not exist; the default dataset will be empty.", default_data_path)

    return Settings(
        default_data_path=default_data_path,
        top_n=top_n,
        server_port=server_port,
    )
