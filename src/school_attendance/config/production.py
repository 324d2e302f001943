import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "school_attendance"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

STATUS_RESET_ENABLED = bool(int(os.getenv("STATUS_RESET_ENABLED", "1")))
STATUS_RESET_INTERVAL_SECONDS = int(os.getenv("STATUS_RESET_INTERVAL_SECONDS", "60"))

QR_BOX_SIZE = int(os.getenv("QR_BOX_SIZE", "10"))
