import os


def get_settings_module() -> str:
    """Map APP_ENV to one of the settings modules in this package."""
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "config.production"
    if env in {"test", "testing"}:
        return "config.testing"
    return "config.development"
