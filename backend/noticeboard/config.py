# noticeboard/config.py
import os
from pydantic import BaseModel
from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


class Settings(BaseModel):
    # General app settings
    APP_NAME: str = "Digital Notice Board API"
    env: str = os.getenv("ENV", "dev")

    # Host & Port settings
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "5000"))

    # MongoDB connection string; the path component names the database
    mongodb_uri: str = os.getenv("MONGODB_URI", "mongodb://127.0.0.1:27017/digital_notice_board")

    # Insert admin1 / faculty1 / student1 on first start when no admin exists
    seed_demo_users: bool = _env_flag("SEED_DEMO_USERS", "true")

    # CORS origins for frontend (open by default, frontend is served same-origin)
    CORS_ORIGINS: list[str] = [
        o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()
    ]

    # Static folders
    public_dir: str = os.getenv("PUBLIC_DIR", "public")  # frontend files
    upload_dir: str = os.getenv("UPLOAD_DIR", "uploads")  # notice attachments (images, PDFs)
    max_upload_mb: int = int(os.getenv("MAX_UPLOAD_MB", "10"))

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024

settings = Settings()  # Instantiate configuration
