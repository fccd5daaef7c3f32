# newsletter/config.py
import os
from dotenv import load_dotenv

load_dotenv()

# Public base URL of this service, used to build confirmation links
APP_BASE_URL = os.getenv("APP_BASE_URL", "http://127.0.0.1:8000").rstrip("/")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "http://localhost:3000").split(",")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Email (Resend)
EMAIL_BASE_URL = os.getenv("EMAIL_BASE_URL", "https://api.resend.com")
EMAIL_FROM = os.getenv("EMAIL_FROM")
RESEND_API_KEY = os.getenv("RESEND_API_KEY")
EMAIL_TIMEOUT_MILLISECONDS = int(os.getenv("EMAIL_TIMEOUT_MILLISECONDS", "10000"))

# RESEND_API_KEY and EMAIL_FROM are only required once the email client is
# built (app startup), so the app can be imported without them.
