import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "extentrack_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

SESSION_TTL_HOURS = 1
CORS_ALLOW_ORIGIN = "*"

ADMIN_EMAIL = "admin@extentrack.com"
ADMIN_PASSWORD = "admin123"
ADMIN_NAME = "Administrador"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
