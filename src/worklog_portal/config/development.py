import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# Backend REST API (owns users, worklogs, departments)
API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8080/api")
API_TIMEOUT_SECONDS = float(os.getenv("API_TIMEOUT_SECONDS", "10"))

# Session cookie issued by the backend on login
BACKEND_SESSION_COOKIE = os.getenv("BACKEND_SESSION_COOKIE", "JSESSIONID")
SESSION_COOKIE_SECURE = False

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

DEBUG = True
