"""Application configuration settings"""

import os
from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes", "on"}


class Config:
    TESTING = _flag("TESTING", "false")
    DEBUG = _flag("DEBUG", "false")

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_PATH = os.getenv("LOG_PATH", "")
    LOG_FORMAT = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s [%(levelname)s] [%(correlation_id)s] %(name)s: %(message)s",
    )

    # Auth (tokens are issued by the user service)
    JWT_SECRET = os.getenv("JWT_SECRET", "")
    JWT_ISSUER = os.getenv("JWT_ISSUER", "littlesoftchat-user-service")
    JWT_AUDIENCE = os.getenv("JWT_AUDIENCE", "littlesoftchat-clients")

    # CORS - the realtime hub needs credentials, so origins must be explicit
    CORS_ORIGINS = os.getenv(
        "CORS_ORIGINS", "http://localhost:3000,https://localhost:3000"
    ).split(",")

    # Redis settings
    REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379")

    # Presence tracking
    # "memory" keeps presence in this process, "redis" shares it across instances
    CONNECTION_REGISTRY_BACKEND: str = os.getenv("CONNECTION_REGISTRY_BACKEND", "memory")
    CONNECTION_TTL_SECONDS: int = int(os.getenv("CONNECTION_TTL_SECONDS", "86400"))
    CONNECTION_CLEANUP_INTERVAL_SECONDS: float = float(
        os.getenv("CONNECTION_CLEANUP_INTERVAL_SECONDS", "300")
    )
    # per-socket bound on a single push; a stalled client is skipped
    HUB_SEND_TIMEOUT_SECONDS: float = float(os.getenv("HUB_SEND_TIMEOUT_SECONDS", "5"))

    # Postgresql Database settings (read by Prisma from the environment)
    DATABASE_URL: str = os.getenv("DATABASE_URL", "")

    # Notification limits
    NOTIFICATION_PAGE_SIZE_DEFAULT: int = int(
        os.getenv("NOTIFICATION_PAGE_SIZE_DEFAULT", "20")
    )
    NOTIFICATION_PAGE_SIZE_MAX: int = int(os.getenv("NOTIFICATION_PAGE_SIZE_MAX", "100"))
    NOTIFICATION_TITLE_MAX: int = 200
    NOTIFICATION_CONTENT_MAX: int = 1000
    BROADCAST_MAX_USERS: int = int(os.getenv("BROADCAST_MAX_USERS", "1000"))
    # false = legacy behaviour, total_count is the size of the returned page
    ACCURATE_TOTAL_COUNT = _flag("ACCURATE_TOTAL_COUNT", "true")

    # User service
    USER_SERVICE_URL: str = os.getenv("USER_SERVICE_URL", "")
    USER_SERVICE_TIMEOUT_SECONDS: float = float(
        os.getenv("USER_SERVICE_TIMEOUT_SECONDS", "5")
    )


class DevelopmentConfig(Config):
    """Development configuration"""

    DEBUG = True


class TestingConfig(Config):
    """Testing configuration"""

    TESTING = True


class ProductionConfig(Config):
    """Production configuration"""

    pass


# Configuration dictionary
config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(env=None):
    """Get configuration based on environment"""
    if env is None:
        env = os.getenv("APP_ENV", "development")
    return config.get(env, config["default"])
