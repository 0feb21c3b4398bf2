import os
import tempfile

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "payroll_test_db"),
}

DEBUG = False
TESTING = True

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

SLIP_STORAGE_DIR = os.getenv("SLIP_STORAGE_DIR", os.path.join(tempfile.gettempdir(), "payroll_slips"))
SLIP_BASE_URL = "/slips"
COMPANY_NAME = "TEST COMPANY"

TREND_WINDOW_MONTHS = 12
