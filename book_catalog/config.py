# book_catalog/config.py
import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


@dataclass
class Settings:
    # Server: one fixed port per run
    host: str = "127.0.0.1"
    port: int = int(os.getenv("BOOK_CATALOG_PORT", "3000"))
    log_level: str = "INFO"

    # Catalog
    seed_books: bool = True

    # Client notifications (seconds before a message is dismissed)
    message_timeout: float = float(os.getenv("BOOK_CATALOG_MESSAGE_TIMEOUT", "5"))

    app_name: str = "Book Management API"
    app_version: str = "1.0.0"

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"


settings = Settings()
