import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_db_test"),
}

DEBUG = False
TESTING = True

UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", "uploads-test")

IMPORT_BATCH_SIZE = 10
WORKER_POOL_SIZE = 2
WORKER_TIMEOUT_SECONDS = 10.0
SUGGESTION_THRESHOLD = 0.6
MAX_SUGGESTIONS = 3
DEDUPE_WITHIN_IMPORT = False
