import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# "memory" keeps everything in-process; "mysql" uses DB_CONFIG
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "memory")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "smart_attendance"),
}

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

# Dashboard headline counts treat members without any observation as absent
DASHBOARD_UNMARKED_POLICY = os.getenv("DASHBOARD_UNMARKED_POLICY", "collapse")
# Session amended by manual overrides when a day has several: "first" | "latest"
OVERRIDE_TARGET = os.getenv("OVERRIDE_TARGET", "first")
CSV_DELIMITER = os.getenv("CSV_DELIMITER", ",")
