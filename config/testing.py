import os

SECRET_KEY = "test-secret"

# In-memory JSON store: nothing is written to disk.
STORAGE_BACKEND = "json"
DATA_DIR = None

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "lecture_tracker_test"),
}

DEBUG = False
TESTING = True

AUTO_INIT_DB = False

EVENT_QUEUE_SIZE = 100
EVENT_HEARTBEAT_SECONDS = 0.05
