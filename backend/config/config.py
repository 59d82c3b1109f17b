"""
Application configuration module.
Loads environment variables and provides centralized config.
"""
import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env from backend/ or project root
base = Path(__file__).resolve().parent.parent
load_dotenv(base / ".env")
load_dotenv(base.parent / ".env")


class Config:
    """Base configuration."""
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key-change-in-production")
    DEBUG = os.getenv("FLASK_DEBUG", "false").lower() == "true"
    ENV = os.getenv("FLASK_ENV", "development")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    # Raw uploads: "local" keeps them under UPLOAD_FOLDER, "s3" sends them to the bucket in aws_config
    STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "local").lower()
    UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", str(base / "uploads"))
    MAX_CONTENT_LENGTH = int(os.getenv("MAX_CONTENT_LENGTH", str(1024 * 1024 * 1024)))  # 1 GB

    SAMPLE_BATCH_SIZE = int(os.getenv("SAMPLE_BATCH_SIZE", "5000"))
    MAX_HEADER_LINES = int(os.getenv("MAX_HEADER_LINES", "5000"))

    CORS_ORIGINS = [
        o.strip()
        for o in os.getenv(
            "CORS_ORIGINS",
            "http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173,http://127.0.0.1:5173",
        ).split(",")
        if o.strip()
    ]


# Config instance for app
config = Config()


class AWSConfig:
    """S3 settings, used when STORAGE_BACKEND is "s3"."""
    AWS_ACCESS_KEY_ID = os.getenv("AWS_ACCESS_KEY_ID", "")
    AWS_SECRET_ACCESS_KEY = os.getenv("AWS_SECRET_ACCESS_KEY", "")
    AWS_REGION = os.getenv("AWS_REGION", "us-east-1")
    S3_BUCKET_NAME = os.getenv("S3_BUCKET_NAME", "well-log-uploads")


aws_config = AWSConfig()
