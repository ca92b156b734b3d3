"""
================================================================================
SHEETS.PY - GOOGLE SHEETS OPERATIONS
================================================================================
PURPOSE: Handle all Google Sheets API interactions: authentication, reading
         raw cell ranges and appending rows.

FEATURES:
  - Google Sheets API authentication (raw JSON secret + local file)
  - Open the spreadsheet by id or by URL
  - Read any A1 range verbatim (short rows are kept as-is)
  - Append rows with RAW input
  - Every backend failure is reported as DataUnavailable
================================================================================
"""

import json
from pathlib import Path

import gspread
from gspread.exceptions import GSpreadException
from google.auth.exceptions import GoogleAuthError
from google.oauth2.service_account import Credentials
from requests.exceptions import RequestException

from config import Config
from core.errors import DataUnavailable
from core.logger import log_msg, print_error

# Failures raised by gspread, google-auth and the HTTP transport beneath them
BACKEND_ERRORS = (GSpreadException, GoogleAuthError, RequestException)

# ==================== GOOGLE AUTH ====================

def authenticate_google():
    """
    PURPOSE: Authenticate with Google Sheets API using a service account.
             Supports both the raw JSON secret (serverless hosts) and a local
             credentials file.

    LOGIC:
      - Use GOOGLE_SERVICE_ACCOUNT raw JSON when present
      - Fall back to the credentials file
      - Authorize gspread client with the spreadsheets scope

    RETURNS:
      gspread.Client: Authenticated Sheets client

    RAISES:
      DataUnavailable: If credentials are missing or rejected
    """
    cred_path = Config.get_credentials_path()

    try:
        if Config.GOOGLE_SERVICE_ACCOUNT:
            cred_dict = json.loads(Config.GOOGLE_SERVICE_ACCOUNT)
            credentials = Credentials.from_service_account_info(cred_dict, scopes=Config.GOOGLE_SCOPES)
            cred_source = "GOOGLE_SERVICE_ACCOUNT"

        elif cred_path and Path(cred_path).exists():
            credentials = Credentials.from_service_account_file(str(cred_path), scopes=Config.GOOGLE_SCOPES)
            cred_source = str(cred_path)

        else:
            print_error(
                f"Google credentials not found. "
                f"Checked GOOGLE_SERVICE_ACCOUNT and {cred_path}"
            )
            raise DataUnavailable("Google credentials are not configured")

        client = gspread.authorize(credentials)

    except json.JSONDecodeError as e:
        print_error(f"Invalid JSON in GOOGLE_SERVICE_ACCOUNT: {e}")
        raise DataUnavailable("Google credentials are invalid") from e
    except (ValueError, *BACKEND_ERRORS) as e:
        print_error(f"Google authentication failed: {e}")
        raise DataUnavailable("Google authentication failed") from e

    log_msg(f"[OK] Google Sheets authenticated ({cred_source})")
    return client


# ==================== SHEETS MANAGER CLASS ====================

class SheetsManager:
    """
    PURPOSE: Row source over one spreadsheet.

    ATTRIBUTES:
      client (gspread.Client): Authenticated Sheets API client
      ss (Spreadsheet): Active Google Spreadsheet
    """

    def __init__(self, client, sheet_id: str = None, sheet_url: str = None):
        """
        PURPOSE: Open the spreadsheet by id, falling back to its URL.

        RAISES:
          DataUnavailable: If no spreadsheet is configured or it cannot be opened
        """
        self.client = client
        sheet_id = sheet_id or Config.GOOGLE_SHEETS_ID
        sheet_url = sheet_url or Config.GOOGLE_SHEET_URL

        try:
            if sheet_id:
                self.ss = client.open_by_key(sheet_id)
            elif sheet_url:
                self.ss = client.open_by_url(sheet_url)
            else:
                print_error("Neither GOOGLE_SHEETS_ID nor GOOGLE_SHEET_URL is set")
                raise DataUnavailable("Spreadsheet is not configured")
        except BACKEND_ERRORS as e:
            print_error(f"Failed to open spreadsheet: {e}")
            raise DataUnavailable() from e

    def fetch_rows(self, range_id: str):
        """
        PURPOSE: Read every row of an A1 range verbatim.

        ARGS:
          range_id (str): A1 range such as "Data!A2:W"

        RETURNS:
          list: Rows as lists of cell strings ([] for an empty range)

        RAISES:
          DataUnavailable: If the API call fails or the range is malformed
        """
        if not range_id or not isinstance(range_id, str):
            raise DataUnavailable(f"Malformed range: {range_id!r}")

        try:
            response = self.ss.values_get(range_id)
        except BACKEND_ERRORS as e:
            print_error(f"Failed to read {range_id}: {e}")
            raise DataUnavailable() from e

        values = (response or {}).get("values")
        if values is None:
            log_msg(f"[API] {range_id} is empty")
            return []
        if not isinstance(values, list) or not all(isinstance(row, list) for row in values):
            print_error(f"Unexpected payload for {range_id}")
            raise DataUnavailable()

        log_msg(f"[API] Read {len(values)} rows from {range_id}")
        return values

    def append_row(self, range_id: str, values: list):
        """
        PURPOSE: Append one row after the last row of a range.

        ARGS:
          range_id (str): A1 range such as "User!A:D"
          values (list): Cell values in column order

        RAISES:
          DataUnavailable: If the API call fails
        """
        try:
            self.ss.values_append(
                range_id,
                {"valueInputOption": "RAW"},
                {"values": [values]},
            )
        except BACKEND_ERRORS as e:
            print_error(f"Failed to append to {range_id}: {e}")
            raise DataUnavailable("Failed to write data") from e

        log_msg(f"[API] Appended row to {range_id}")


def open_sheets():
    """Authenticate and open the configured spreadsheet."""
    return SheetsManager(authenticate_google())
