# jobboard/config.py
import logging
import os

from dotenv import load_dotenv

log = logging.getLogger(__name__)

load_dotenv()

DB_URL = os.getenv("DB_URL", "sqlite:///./jobboard.db")
APP_ENV = os.getenv("APP_ENV", "production").lower()

ALGORITHM = os.getenv("ALGORITHM", "HS256")
SECRET_KEY = os.getenv("SECRET_KEY")
if not SECRET_KEY:
    log.critical("FATAL: SECRET_KEY not found in environment variables!")
    raise ValueError("SECRET_KEY must be set in the environment variables.")

try:
    TOKEN_EXPIRATION_TIME_MINUTES = int(os.getenv("TOKEN_EXPIRATION_TIME_MINUTES", 30))
except ValueError:
    log.warning("Invalid TOKEN_EXPIRATION_TIME_MINUTES in .env, using default 30 minutes.")
    TOKEN_EXPIRATION_TIME_MINUTES = 30

# Set to false to skip the Pwned Passwords lookup (offline installs, tests)
CHECK_PWNED_PASSWORDS = os.getenv("CHECK_PWNED_PASSWORDS", "true").lower() in ["true", "on", "1"]
