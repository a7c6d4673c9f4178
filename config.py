"""
Configuration for the OTP auth Flask app.
Production (Railway/Render): uses DATABASE_URL only; fails if missing.
Local: DATABASE_URL or a SQLite file under instance/.
"""
import os
from pathlib import Path
from datetime import timedelta

BASE_DIR = Path(__file__).parent
INSTANCE_DIR = BASE_DIR / "instance"


def _env_flag(name, default="false"):
    return os.environ.get(name, default).lower() in ("true", "on", "1")


def _is_production():
    """True when running on Railway, Render, or explicit production."""
    return (
        os.environ.get("RENDER") == "true"
        or os.environ.get("RAILWAY_ENVIRONMENT") is not None
        or os.environ.get("FLASK_ENV") == "production"
    )


def _normalize_database_url(url):
    """Convert postgres:// URLs to the psycopg2 dialect SQLAlchemy expects."""
    url = url.strip()
    if url.startswith("postgres://"):
        return "postgresql+psycopg2://" + url[len("postgres://"):]
    if url.startswith("postgresql://"):
        return "postgresql+psycopg2://" + url[len("postgresql://"):]
    return url


def _get_database_uri():
    url = (os.environ.get("DATABASE_URL") or "").strip()
    if url:
        return _normalize_database_url(url)
    if _is_production():
        raise RuntimeError(
            "DATABASE_URL is required in production (Railway/Render). "
            "Set it in your service environment variables."
        )
    try:
        INSTANCE_DIR.mkdir(exist_ok=True)
    except OSError:
        pass
    return f"sqlite:///{INSTANCE_DIR / 'otp_auth.db'}"


class Config:
    """Base configuration."""
    SECRET_KEY = os.environ.get("SECRET_KEY") or "dev-secret-key-change-in-production"

    PERMANENT_SESSION_LIFETIME = timedelta(hours=8)
    SESSION_COOKIE_SECURE = _env_flag("SESSION_COOKIE_SECURE")
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"

    SQLALCHEMY_DATABASE_URI = _get_database_uri()
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Single mail surface shared by the registration and password reset flows
    MAIL_SERVER = os.environ.get("MAIL_SERVER")
    MAIL_PORT = int(os.environ.get("MAIL_PORT") or 587)
    MAIL_USE_TLS = _env_flag("MAIL_USE_TLS", "true")
    MAIL_USE_SSL = _env_flag("MAIL_USE_SSL")
    MAIL_USERNAME = os.environ.get("MAIL_USERNAME")
    MAIL_PASSWORD = os.environ.get("MAIL_PASSWORD")
    MAIL_DEFAULT_SENDER = os.environ.get("MAIL_DEFAULT_SENDER") or os.environ.get("MAIL_USERNAME") or "noreply@otp-auth.local"
    MAIL_SEND_ASYNC = _env_flag("MAIL_SEND_ASYNC", "true")

    OTP_EXPIRY_SECONDS = int(os.environ.get("OTP_EXPIRY_SECONDS") or 3600)

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()


class TestConfig(Config):
    """Configuration used by the test suite."""
    TESTING = True
    SECRET_KEY = "test-secret-key"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"

    MAIL_SERVER = "localhost"
    MAIL_USERNAME = "tester@otp-auth.local"
    MAIL_PASSWORD = None
    MAIL_DEFAULT_SENDER = "tester@otp-auth.local"
    MAIL_SUPPRESS_SEND = True
    MAIL_SEND_ASYNC = False

    LOG_LEVEL = "DEBUG"
