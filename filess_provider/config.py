import os


class Config:
    """Base configuration class with common settings."""

    # filess.io API settings
    API_URL = os.getenv("FILESS_API_URL", "https://backend.filess.io")
    API_TOKEN = os.getenv("FILESS_API_TOKEN", "")

    # HTTP transport settings
    HTTP_TIMEOUT = float(os.getenv("FILESS_HTTP_TIMEOUT", "30"))
    HTTP_MAX_ATTEMPTS = int(os.getenv("FILESS_HTTP_MAX_ATTEMPTS", "3"))
    HTTP_RETRY_DELAY = float(os.getenv("FILESS_HTTP_RETRY_DELAY", "0.1"))

    # Provisioning wait settings
    POLL_DELAY = float(os.getenv("FILESS_POLL_DELAY", "5"))
    POLL_MIN_INTERVAL = float(os.getenv("FILESS_POLL_MIN_INTERVAL", "5"))
    POLL_MAX_INTERVAL = float(os.getenv("FILESS_POLL_MAX_INTERVAL", "10"))
    PROVISION_TIMEOUT = float(os.getenv("FILESS_PROVISION_TIMEOUT", "1800"))

    # Operator notifications
    TTY_PATH = os.getenv("FILESS_TTY_PATH", "/dev/tty")

    # Logging settings
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


class DevelopmentConfig(Config):
    """Development configuration."""

    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")


class TestingConfig(Config):
    """Testing configuration."""

    API_URL = "http://filess.test"
    API_TOKEN = "test-token"

    # No real waiting in tests
    HTTP_RETRY_DELAY = 0.0
    POLL_DELAY = 0.0
    POLL_MIN_INTERVAL = 0.0
    POLL_MAX_INTERVAL = 0.0
    PROVISION_TIMEOUT = 60.0

    TTY_PATH = os.devnull


class ProductionConfig(Config):
    """Production configuration."""

    LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")


# Configuration dictionary for easy selection
config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": ProductionConfig,
}


def get_config(config_name=None):
    """Get configuration class based on environment.

    Args:
        config_name: Configuration name ('development', 'testing', 'production').
                    If None, uses FILESS_ENV environment variable or defaults to 'production'.

    Returns:
        Configuration class.
    """
    if config_name is None:
        config_name = os.getenv("FILESS_ENV", "production")

    config_class = config.get(config_name, ProductionConfig)
    return config_class
