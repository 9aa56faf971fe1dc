"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TOKEN_TTL_MINUTES = 60
JWT_ALGORITHM = "HS256"

SALARY_YEAR_MIN = 2000
SALARY_YEAR_MAX = 2100

MIN_PASSWORD_LENGTH = 6

DEFAULT_ADMIN_USERNAME = "admin"
DEFAULT_ADMIN_PASSWORD = "admin123"
DEFAULT_ADMIN_NAME = "Administrator"

NO_POSITION_LABEL = "-"

REPORT_TITLE = "SISTEM PAYROLL PEMERINTAH DESA"

# Month names used in printed reports and export filenames.
MONTH_NAMES = (
    "Januari",
    "Februari",
    "Maret",
    "April",
    "Mei",
    "Juni",
    "Juli",
    "Agustus",
    "September",
    "Oktober",
    "November",
    "Desember",
)
