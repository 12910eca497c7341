import os
import secrets

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
DB_PATH = os.environ.get("NIC_DB_PATH", os.path.join(BASE_DIR, "interest_calculator.db"))
SECRET_KEY = os.environ.get("SECRET_KEY", secrets.token_hex(16))

# Saved calculations live under one key, rewritten in full on every change
STORAGE_KEY = "nepaliInterestCalculations"

# Fixed-radix BS calendar model (not the real variable-length months)
BS_DAYS_PER_MONTH = 30
BS_MONTHS_PER_YEAR = 12

# Rates below this are quoted per month, at or above it per year
MONTHLY_RATE_THRESHOLD = 10

CURRENCY_SYMBOL = "रु"

DEFAULT_INPUTS = {
    "principal": "100000",
    "interestRate": "3",
    "startDate": "2078-01-01",
    "endDate": "2080-04-05",
}
