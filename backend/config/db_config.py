"""
Database configuration.
Supports DATABASE_URL (Supabase / hosted PostgreSQL), component-based PostgreSQL,
or a local SQLite file when nothing is configured.
"""
import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

SQLITE_DIR = Path(__file__).resolve().parent.parent / "database"


def get_database_url():
    """Build the SQLAlchemy connection URL. Prefers DATABASE_URL."""
    url = os.getenv("DATABASE_URL") or os.getenv("SUPABASE_DB_URL")
    if url:
        # Ensure postgresql:// scheme (Supabase may give postgres://)
        if url.startswith("postgres://"):
            url = "postgresql://" + url[10:]
        # Hosted PostgreSQL requires SSL; add if not present
        if url.startswith("postgresql") and "sslmode" not in url:
            url += "&sslmode=require" if "?" in url else "?sslmode=require"
        return url
    if os.getenv("DB_HOST"):
        db_user = os.getenv("DB_USER", "postgres")
        db_password = os.getenv("DB_PASSWORD", "postgres")
        db_host = os.getenv("DB_HOST")
        db_port = os.getenv("DB_PORT", "5432")
        db_name = os.getenv("DB_NAME", "well_data")
        return f"postgresql://{db_user}:{db_password}@{db_host}:{db_port}/{db_name}"
    # Fallback: local SQLite file under backend/database/
    SQLITE_DIR.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{SQLITE_DIR / 'well_data.db'}"


DB_URL = get_database_url()
