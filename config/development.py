import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "payroll_db"),
}

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo employees on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

# Rendered salary slips
SLIP_STORAGE_DIR = os.getenv("SLIP_STORAGE_DIR", "var/slips")
SLIP_BASE_URL = os.getenv("SLIP_BASE_URL", "/slips")
COMPANY_NAME = os.getenv("COMPANY_NAME", "COMPANY NAME")

TREND_WINDOW_MONTHS = int(os.getenv("TREND_WINDOW_MONTHS", "12"))
