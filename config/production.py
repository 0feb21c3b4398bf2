import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "payroll_db"),
}

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

SLIP_STORAGE_DIR = os.getenv("SLIP_STORAGE_DIR", "/var/lib/payroll/slips")
SLIP_BASE_URL = os.getenv("SLIP_BASE_URL", "/slips")
COMPANY_NAME = os.getenv("COMPANY_NAME", "COMPANY NAME")

TREND_WINDOW_MONTHS = int(os.getenv("TREND_WINDOW_MONTHS", "12"))
