SECRET_KEY = "test-secret"

API_CONFIG = {
    "base_url": "http://backend.test",
    "timeout": 5,
}

SCHOOL_NAME = "Test School"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

MAX_UPLOAD_MB = 1
