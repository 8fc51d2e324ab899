import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_db"),
}

DEBUG = False

UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", "/var/lib/attendance-import/uploads")

IMPORT_BATCH_SIZE = int(os.getenv("IMPORT_BATCH_SIZE", "100"))
WORKER_POOL_SIZE = int(os.getenv("WORKER_POOL_SIZE", str(os.cpu_count() or 1)))
WORKER_TIMEOUT_SECONDS = float(os.getenv("WORKER_TIMEOUT_SECONDS", "30"))
SUGGESTION_THRESHOLD = float(os.getenv("SUGGESTION_THRESHOLD", "0.6"))
MAX_SUGGESTIONS = int(os.getenv("MAX_SUGGESTIONS", "3"))
DEDUPE_WITHIN_IMPORT = bool(int(os.getenv("DEDUPE_WITHIN_IMPORT", "0")))
