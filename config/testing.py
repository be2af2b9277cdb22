SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

STORAGE_BACKEND = "memory"
DB_CONFIG = {}
AUTO_INIT_DB = False

DASHBOARD_UNMARKED_POLICY = "collapse"
OVERRIDE_TARGET = "first"
CSV_DELIMITER = ","
