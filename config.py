import os

from dotenv import load_dotenv

load_dotenv()

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_flag(name, default):
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUE_VALUES


def _env_int(name):
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}")


class Config:
    SQLALCHEMY_DATABASE_URI = os.getenv("LEDGER_DATABASE_URL", "sqlite:///ledger.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    SEED_ON_STARTUP = _env_flag("LEDGER_SEED", True)
    # None means amounts of synthetic seed rows come from real randomness
    SEED_RANDOM_SEED = _env_int("LEDGER_SEED_RANDOM")

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip().upper()

    # Client-side convenience gate only; the API does not check it.
    ADMIN_PASSWORD = os.getenv("LEDGER_ADMIN_PASSWORD") or None

    API_BASE_URL = os.getenv("LEDGER_API_URL", "http://localhost:5000").rstrip("/")


class TestConfig(Config):
    __test__ = False

    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SEED_ON_STARTUP = False
    SEED_RANDOM_SEED = 1234
    LOG_LEVEL = "WARNING"
    ADMIN_PASSWORD = "test-password"
