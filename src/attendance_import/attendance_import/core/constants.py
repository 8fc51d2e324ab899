"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

import os

DEFAULT_BATCH_SIZE = 100
DEFAULT_POOL_SIZE = os.cpu_count() or 1
DEFAULT_WORKER_TIMEOUT_SECONDS = 30.0
DEFAULT_SUGGESTION_THRESHOLD = 0.6
DEFAULT_MAX_SUGGESTIONS = 3

REQUIRED_FIELDS = ("Employee Name", "Date")
ALLOWED_UPLOAD_EXTENSIONS = frozenset({"xlsx", "xls", "csv"})
