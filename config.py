"""
Application settings loaded from the environment.

Values are read once at import time (after loading .env) and exposed through
the module-level ``settings`` object.
"""
import os
from urllib.parse import quote_plus

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _build_database_url() -> str:
     """Use DATABASE_URL when set, otherwise build an MS SQL URL from DB_* variables."""
     url = os.getenv("DATABASE_URL")
     if url:
          return url

     server = os.getenv("DB_SERVER")
     if not server:
          return "sqlite:///./data/backoffice.db"

     user = quote_plus(os.getenv("DB_USER") or "")
     password = quote_plus(os.getenv("DB_PASS") or "")
     port = os.getenv("DB_PORT", "1433")
     name = os.getenv("DB_NAME")
     return f"mssql+pymssql://{user}:{password}@{server}:{port}/{name}"


class Settings:
     database_url: str = _build_database_url()
     sql_echo: bool = os.getenv("SQL_ECHO", "false").lower() == "true"

     jwt_secret: str = os.getenv("JWT_SECRET", "change-me")
     jwt_algorithm: str = "HS256"

     cors_origins: list[str] = [o for o in os.getenv("CORS_ORIGINS", "").split(",") if o]

     # Blob storage: "local" writes under upload_dir, "azure" uses a blob container
     blob_backend: str = os.getenv("BLOB_BACKEND", "local").lower()
     upload_dir: str = os.getenv("UPLOAD_DIR", "uploads")
     azure_storage_account: str | None = os.getenv("AZURE_STORAGE_ACCOUNT")
     azure_storage_key: str | None = os.getenv("AZURE_STORAGE_KEY")
     azure_blob_container: str = os.getenv("AZURE_BLOB_CONTAINER", "backoffice")

     page_size: int = int(os.getenv("PAGE_SIZE", "12"))

     log_level: str = os.getenv("LOG_LEVEL", "INFO")
     log_format: str = os.getenv(
          "LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
     )
     log_dir: str | None = os.getenv("LOG_DIR")


settings = Settings()
