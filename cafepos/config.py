"""Runtime configuration for the POS backend, read from the environment."""
import os
from typing import NamedTuple


class Settings(NamedTuple):
    database_url: str
    public_dir: str
    pages_dir: str
    admin_username: str
    admin_password: str
    log_level: str
    port: int


def load_settings() -> Settings:
    return Settings(
        database_url=os.getenv("CAFEPOS_DATABASE_URL", "sqlite:///./cafe_pos.sqlite"),
        public_dir=os.getenv("CAFEPOS_PUBLIC_DIR", "public"),
        pages_dir=os.getenv("CAFEPOS_PAGES_DIR", "pages"),
        admin_username=os.getenv("CAFEPOS_ADMIN_USERNAME", "Admin"),
        admin_password=os.getenv("CAFEPOS_ADMIN_PASSWORD", "1722"),
        log_level=os.getenv("CAFEPOS_LOG_LEVEL", "INFO").upper(),
        port=int(os.getenv("CAFEPOS_PORT", "3000")),
    )


state = load_settings()


def get_settings() -> Settings:
    return state
