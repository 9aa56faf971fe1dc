import os

SECRET_KEY = "test-secret"
JWT_SECRET_KEY = "test-jwt-secret"
TOKEN_TTL_MINUTES = 60

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "gov_payroll_test"),
}

SALARY_YEAR_MIN = 2000
SALARY_YEAR_MAX = 2100

CORS_ORIGINS = ["*"]
WKHTMLTOPDF_PATH = None

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
AUTO_SEED_DB = False
