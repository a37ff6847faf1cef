"""Application configuration"""
import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()


class Settings:
    # Database Configuration
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./users.db")

    # JWT Authentication
    # Rotating SECRET_KEY invalidates every outstanding token.
    SECRET_KEY = os.getenv("SECRET_KEY", "your-secret-key-change-this-in-production-min-32-chars")
    ALGORITHM = os.getenv("ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_SECONDS = int(os.getenv("ACCESS_TOKEN_EXPIRE_SECONDS", 72000))  # 20 hours

    # OTP expiry (minutes); 0 keeps challenges until they are consumed
    OTP_EXPIRE_MINUTES = int(os.getenv("OTP_EXPIRE_MINUTES", 10))

    # Comma separated passlib schemes, first one is used for new passwords
    PASSWORD_SCHEMES = [
        s.strip() for s in os.getenv("PASSWORD_SCHEMES", "plaintext").split(",") if s.strip()
    ]

    # SMTP / Email configuration
    SMTP_HOST = os.getenv("SMTP_HOST", "smtp.gmail.com")
    SMTP_PORT = int(os.getenv("SMTP_PORT", 587))
    SMTP_USER = os.getenv("SMTP_USER", "")
    SMTP_PASS = os.getenv("SMTP_PASS", "")
    SMTP_TIMEOUT = int(os.getenv("SMTP_TIMEOUT", 15))
    EMAIL_FROM = os.getenv("EMAIL_FROM", "noreply@example.com")

    # Logging Configuration
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_DIR = os.getenv("LOG_DIR", str(Path(__file__).resolve().parent.parent / "logs"))

    # Server
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", 9001))

    # Initial admin, created on startup when the users table is empty
    INITIAL_ADMIN_USERNAME = os.getenv("INITIAL_ADMIN_USERNAME", "admin")
    INITIAL_ADMIN_PASSWORD = os.getenv("INITIAL_ADMIN_PASSWORD", "ChangeMe@Admin123!")
    INITIAL_ADMIN_EMAIL = os.getenv("INITIAL_ADMIN_EMAIL", "admin@example.com")
    INITIAL_ADMIN_MOBILE = os.getenv("INITIAL_ADMIN_MOBILE", "")

    # Project Metadata
    PROJECT_NAME = "User Auth API"
    PROJECT_VERSION = "1.0.0"


settings = Settings()
