import os

_TRUTHY = {"1", "true", "yes", "on"}
_KNOWN_WEAK_SECRETS = {"", "dev", "super-secret-key", "changeme"}
_MIN_SECRET_LENGTH = 32
_PRODUCTION_NAMES = {"prod", "production"}


def _read_bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    return default if raw is None else raw.strip().lower() in _TRUTHY


def _read_int_env(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _is_secret_weak(secret: str) -> bool:
    return (
        secret.strip().lower() in _KNOWN_WEAK_SECRETS
        or len(secret) < _MIN_SECRET_LENGTH
    )


def _runtime_environment_name() -> str:
    for env_name in ("APP_ENV", "FLASK_ENV"):
        value = (os.getenv(env_name) or "").strip().lower()
        if value:
            return value
    return ""


def _database_uri() -> str:
    explicit = os.getenv("DATABASE_URL")
    if explicit:
        return explicit
    user, password = os.getenv("DB_USER"), os.getenv("DB_PASS")
    host, port, name = os.getenv("DB_HOST"), os.getenv("DB_PORT"), os.getenv("DB_NAME")
    return f"postgresql://{user}:{password}@{host}:{port}/{name}"


def validate_security_configuration() -> None:
    """Refuse to boot a production-like process with unsafe settings.

    Debug and testing runs are exempt from the secret-strength check, but
    switching enforcement off is only allowed for those runs.
    """
    enforce = _read_bool_env("SECURITY_ENFORCE_STRONG_SECRETS", True)
    is_debug = _read_bool_env("FLASK_DEBUG", False)
    is_testing = _read_bool_env("FLASK_TESTING", False)
    relaxed_runtime = is_debug or is_testing

    if not enforce:
        if relaxed_runtime:
            return
        raise RuntimeError(
            "Invalid runtime configuration: SECURITY_ENFORCE_STRONG_SECRETS "
            "must be true when FLASK_DEBUG=false and FLASK_TESTING=false."
        )

    if is_debug and _runtime_environment_name() in _PRODUCTION_NAMES:
        raise RuntimeError(
            "Invalid runtime configuration: FLASK_DEBUG must be false in production."
        )
    if relaxed_runtime:
        return

    defaults = {"SECRET_KEY": "dev", "JWT_SECRET_KEY": "super-secret-key"}
    weak = [
        name
        for name, fallback in defaults.items()
        if _is_secret_weak(os.getenv(name, fallback))
    ]
    if weak:
        raise RuntimeError(
            f"Weak/invalid secrets for production runtime: {', '.join(weak)}. "
            "Configure strong values in environment variables."
        )


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev")

    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "super-secret-key")
    JWT_TOKEN_LOCATION = ["headers"]
    JWT_HEADER_TYPE = "Bearer"

    DEBUG = _read_bool_env("FLASK_DEBUG", False)

    SQLALCHEMY_DATABASE_URI = _database_uri()
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Read admin notifications older than this are purged by the retention CLI
    NOTIFICATION_RETENTION_DAYS = _read_int_env("NOTIFICATION_RETENTION_DAYS", 30)
