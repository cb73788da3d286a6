"""
Ledger configuration. Values come from the environment (.env is loaded
first); anything unset falls back to a development default.
"""
import os
from decimal import Decimal
from dotenv import load_dotenv

load_dotenv()

# Compute absolute path to the project-root instance/ folder so SQLite always works
_HERE         = os.path.dirname(os.path.abspath(__file__))   # …/swadaya/
_PROJECT_ROOT = os.path.dirname(_HERE)
_INSTANCE_DIR = os.path.join(_PROJECT_ROOT, "instance")
_DEFAULT_DB   = "sqlite:///" + os.path.join(_INSTANCE_DIR, "ledger.db").replace("\\", "/")


class Config:
    # ── Core ────────────────────────────────────────────────────────────────
    SQLALCHEMY_DATABASE_URI: str = os.environ.get("DATABASE_URI", _DEFAULT_DB)
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # ── Logging ─────────────────────────────────────────────────────────────
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")

    # ── Billing fallbacks (used when the settings table has no value) ───────
    DEFAULT_MONTHLY_FEE = Decimal(os.environ.get("DEFAULT_MONTHLY_FEE", "30000.00"))
    DEFAULT_INSTALLATION_FEE = Decimal(os.environ.get("DEFAULT_INSTALLATION_FEE", "300000.00"))
    BILL_DUE_DAY = int(os.environ.get("BILL_DUE_DAY", "15"))

    # ── Rate Limiting ───────────────────────────────────────────────────────
    RATELIMIT_STORAGE_URI = "memory://"
    RATELIMIT_ENABLED = True


class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG")


class ProductionConfig(Config):
    DEBUG = False


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    RATELIMIT_ENABLED = False
    DEFAULT_MONTHLY_FEE = Decimal("30000.00")
    DEFAULT_INSTALLATION_FEE = Decimal("300000.00")
    BILL_DUE_DAY = 15


config: dict = {
    "development": DevelopmentConfig,
    "production":  ProductionConfig,
    "testing":     TestingConfig,
    "default":     DevelopmentConfig,
}
