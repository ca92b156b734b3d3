"""
Configuration Manager for Block Search
Handles all environment variables and settings
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Get script directory
SCRIPT_DIR = Path(__file__).parent.absolute()

# Load .env file (serverless hosts inject the environment directly)
env_path = SCRIPT_DIR / '.env'
if env_path.exists():
    load_dotenv(env_path)


def _env_flag(name, default):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    """Central configuration class"""

    # Google Sheets
    GOOGLE_SHEETS_ID = os.getenv('GOOGLE_SHEETS_ID', '').strip()
    GOOGLE_SHEET_URL = os.getenv('GOOGLE_SHEET_URL', '').strip()
    GOOGLE_SERVICE_ACCOUNT = os.getenv('GOOGLE_SERVICE_ACCOUNT', '').strip()
    GOOGLE_APPLICATION_CREDENTIALS = os.getenv('GOOGLE_APPLICATION_CREDENTIALS', 'credentials.json').strip()
    GOOGLE_SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]

    # Tokens
    JWT_SECRET = os.getenv('JWT_SECRET', '').strip()
    JWT_ALGORITHM = "HS256"
    JWT_EXPIRES_HOURS = int(os.getenv('JWT_EXPIRES_HOURS', '24'))
    REQUIRE_AUTH = _env_flag('REQUIRE_AUTH', True)

    # Sheet Ranges
    SHEET_DATA = "Data"
    SHEET_USERS = "User"
    DATA_RANGE = os.getenv('DATA_RANGE', f"{SHEET_DATA}!A2:W").strip()
    USER_RANGE = f"{SHEET_USERS}!A2:D"
    USER_APPEND_RANGE = f"{SHEET_USERS}!A:D"

    # Paths
    SCRIPT_DIR = SCRIPT_DIR

    # Environment
    IS_CI = bool(
        os.getenv('GITHUB_ACTIONS')
        or os.getenv('NETLIFY')
        or os.getenv('AWS_LAMBDA_FUNCTION_NAME')
    )

    @classmethod
    def validate(cls):
        """Return a list of configuration problems (empty when valid)"""
        errors = []

        if not cls.GOOGLE_SHEETS_ID and not cls.GOOGLE_SHEET_URL:
            errors.append("GOOGLE_SHEETS_ID or GOOGLE_SHEET_URL is required")

        cred_path = cls.get_credentials_path()
        has_json = bool(cls.GOOGLE_SERVICE_ACCOUNT)
        has_file = cred_path is not None and cred_path.exists()
        if not has_json and not has_file:
            errors.append("Google credentials required (GOOGLE_SERVICE_ACCOUNT or credentials file)")

        if not cls.JWT_SECRET:
            errors.append("JWT_SECRET is required")

        if cls.JWT_EXPIRES_HOURS <= 0:
            errors.append("JWT_EXPIRES_HOURS must be positive")

        return errors

    @classmethod
    def get_credentials_path(cls):
        """Resolve the credentials file path against the project directory"""
        if not cls.GOOGLE_APPLICATION_CREDENTIALS:
            return None
        p = Path(cls.GOOGLE_APPLICATION_CREDENTIALS)
        if p.is_absolute():
            return p
        return cls.SCRIPT_DIR / p
