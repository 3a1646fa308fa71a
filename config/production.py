import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

API_CONFIG = {
    "base_url": os.getenv("API_BASE_URL", "https://srkdp-production.up.railway.app"),
    "timeout": float(os.getenv("API_TIMEOUT", "15")),
}

SCHOOL_NAME = os.getenv("SCHOOL_NAME", "Sri Ravi Kiran School")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

MAX_UPLOAD_MB = int(os.getenv("MAX_UPLOAD_MB", "2"))
