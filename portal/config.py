import os
from dotenv import load_dotenv

load_dotenv()

class Config:
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///portal.db")

    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY")

    CORS_ORIGINS = os.getenv(
        "CORS_ORIGINS",
        "https://nebadon.no"
    )

    # comma separated principals that are admin without an explicit role assignment
    ADMIN_PRINCIPALS = os.getenv("ADMIN_PRINCIPALS", "")
    ADMIN_NOTIFY_EMAIL = os.getenv("ADMIN_NOTIFY_EMAIL")

    EMAIL_FROM_NAME = os.getenv("EMAIL_FROM_NAME", "Nebadon Encryption")
    EMAIL_FROM_ADDRESS = os.getenv("EMAIL_FROM_ADDRESS", "post@nebadon.no")
    SMTP_HOST = os.getenv("SMTP_HOST", "smtp.zoho.eu")
    SMTP_PORT = int(os.getenv("SMTP_PORT", 465))
    SMTP_PASSWORD = os.getenv("SMTP_PASSWORD")
    MAIL_ENABLED = os.getenv("MAIL_ENABLED", "true").lower() == "true"
    NOTIFY_ASYNC = True

    RATELIMIT_ENABLED = True
    RATELIMIT_HEADERS_ENABLED = True
    PUBLIC_SUBMISSION_LIMIT = os.getenv("PUBLIC_SUBMISSION_LIMIT", "10 per hour")

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    TRACK_PROFILE_URL = os.getenv("TRACK_PROFILE_URL", "https://suno.com/@nebacrypt")

class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

class ProductionConfig(Config):
    DEBUG = False

class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    JWT_SECRET_KEY = "test-secret-key-with-enough-length-for-hs256"
    ADMIN_PRINCIPALS = "admin-principal"
    ADMIN_NOTIFY_EMAIL = "admin@nebadon.no"
    MAIL_ENABLED = False
    NOTIFY_ASYNC = False
    RATELIMIT_ENABLED = False
