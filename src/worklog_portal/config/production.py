import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

API_BASE_URL = os.getenv("API_BASE_URL", "http://backend:8080/api")
API_TIMEOUT_SECONDS = float(os.getenv("API_TIMEOUT_SECONDS", "10"))

BACKEND_SESSION_COOKIE = os.getenv("BACKEND_SESSION_COOKIE", "JSESSIONID")
SESSION_COOKIE_SECURE = bool(int(os.getenv("SESSION_COOKIE_SECURE", "1")))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DEBUG = False
