"""
================================================================================
core/__init__.py - Package Initialization
================================================================================
PURPOSE: Makes the core folder a Python package and exposes main classes/functions
         for the serverless functions and main.py

EXPORTS:
  - SearchQuery, search, run_search (from search)
  - SheetsManager, authenticate_google, open_sheets (from sheets)
  - authenticate, authenticate_request, create_user, verify_token (from auth)
  - error classes (from errors)
  - log_msg, print_* helpers (from logger)
================================================================================
"""

from core.errors import (
    AppError, InvalidQuery, Unauthorized, MethodNotAllowed,
    UserExists, DataUnavailable, ConfigurationError
)

from core.logger import (
    log_msg, get_timestamp_short,
    print_header, print_separator, print_success, print_error, print_info
)

from core.schema import COLUMNS, FIELD_NAMES, ALWAYS_SHOWN, label_for

from core.search import SearchQuery, search, run_search, active_fields

from core.sheets import authenticate_google, SheetsManager, open_sheets

from core.auth import (
    authenticate, authenticate_request, create_user, find_user,
    issue_token, verify_token
)

__all__ = [
    'AppError', 'InvalidQuery', 'Unauthorized', 'MethodNotAllowed',
    'UserExists', 'DataUnavailable', 'ConfigurationError',
    'log_msg', 'get_timestamp_short',
    'print_header', 'print_separator', 'print_success', 'print_error', 'print_info',
    'COLUMNS', 'FIELD_NAMES', 'ALWAYS_SHOWN', 'label_for',
    'SearchQuery', 'search', 'run_search', 'active_fields',
    'authenticate_google', 'SheetsManager', 'open_sheets',
    'authenticate', 'authenticate_request', 'create_user', 'find_user',
    'issue_token', 'verify_token',
]
