"""Runtime settings, read from the environment when needed."""

import os

SESSION_COOKIE_NAME = "storefront_session"

_SEVEN_DAYS = 7 * 24 * 60 * 60


def environment() -> str:
    return os.environ.get("PROTEAN_ENV", "development").lower()


def is_production() -> bool:
    return environment() == "production"


def session_secret() -> str:
    return os.environ.get("SESSION_SECRET", "dev-secret-key")


def session_max_age() -> int:
    """Lifetime of a login session, in seconds."""
    return int(os.environ.get("SESSION_MAX_AGE", _SEVEN_DAYS))


def cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def stripe_secret_key() -> str | None:
    return os.environ.get("STRIPE_SECRET_KEY") or None


def payment_gateway_name() -> str | None:
    """Which gateway adapter to use: "stripe", "fake", or None when unconfigured."""
    name = os.environ.get("PAYMENT_GATEWAY")
    if name:
        return name.lower()
    return "stripe" if stripe_secret_key() else None
