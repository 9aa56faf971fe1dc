import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")
# No default: create_app refuses to start without a signing secret.
JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY")
TOKEN_TTL_MINUTES = int(os.getenv("TOKEN_TTL_MINUTES", "60"))

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "gov_payroll"),
}

SALARY_YEAR_MIN = int(os.getenv("SALARY_YEAR_MIN", "2000"))
SALARY_YEAR_MAX = int(os.getenv("SALARY_YEAR_MAX", "2100"))

CORS_ORIGINS = os.getenv("CORS_ORIGINS", "").split(",")
WKHTMLTOPDF_PATH = os.getenv("WKHTMLTOPDF_PATH")

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
