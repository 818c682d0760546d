import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

_BASE_DIR = os.path.dirname(os.path.abspath(__file__))


@dataclass
class Settings:
    # Application
    app_name: str = os.getenv("APP_NAME", "Bookshelf")
    debug: bool = os.getenv("DEBUG", "False").lower() in ("true", "1", "yes")
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Server
    api_host: str = os.getenv("API_HOST", "127.0.0.1")
    api_port: int = int(os.getenv("API_PORT", "8000"))

    # MongoDB
    mongodb_uri: str = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
    mongodb_database: str = os.getenv("MONGODB_DATABASE", "mydatabase")
    users_collection: str = os.getenv("MONGODB_USERS_COLLECTION", "users")
    books_collection: str = os.getenv("MONGODB_BOOKS_COLLECTION", "books")
    mongodb_timeout_ms: int = int(os.getenv("MONGODB_TIMEOUT_MS", "5000"))

    # Templates
    templates_dir: str = os.getenv("TEMPLATES_DIR", os.path.join(_BASE_DIR, "templates"))


settings = Settings()
