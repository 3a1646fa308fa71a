import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

API_CONFIG = {
    "base_url": os.getenv("API_BASE_URL", "https://srkdp-production.up.railway.app"),
    "timeout": float(os.getenv("API_TIMEOUT", "15")),
}

SCHOOL_NAME = os.getenv("SCHOOL_NAME", "Sri Ravi Kiran School")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

MAX_UPLOAD_MB = int(os.getenv("MAX_UPLOAD_MB", "2"))
