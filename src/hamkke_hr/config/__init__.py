import os


def get_settings_module() -> str:
    # APP_ENV picks the settings module; defaults to development.
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "hamkke_hr.config.production"

    if env in {"test", "testing"}:
        return "hamkke_hr.config.testing"

    return "hamkke_hr.config.development"
