import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "staff_portal_test"),
}

DEBUG = False
TESTING = True

ADMIN_EMAIL = "admin@test.local"
ADMIN_PASSWORD = "admin-pass"
VICE_PRINCIPAL_EMAIL = "vp@test.local"
VICE_PRINCIPAL_PASSWORD = "vp-pass"

AI_API_URL = "http://ai.invalid/v1/chat/completions"
AI_API_KEY = "test-key"
AI_MODEL = "test-model"
AI_TIMEOUT_SECONDS = 5

AUTO_INIT_DB = False
