import os

SECRET_KEY = "test-secret"

API_BASE_URL = os.getenv("API_BASE_URL", "http://backend.test/api")
API_TIMEOUT_SECONDS = 2.0

BACKEND_SESSION_COOKIE = "JSESSIONID"
SESSION_COOKIE_SECURE = False

LOG_LEVEL = "WARNING"

DEBUG = False
TESTING = True
