"""
================================================================================
AUTH.PY - LOGIN, TOKENS & USER RECORDS
================================================================================
PURPOSE: Identify callers of the search endpoint. Users are rows on the
         "User" tab (ID, Username, Password, Email); a successful login returns
         a signed bearer token that the search handler verifies.

FEATURES:
  - Case-insensitive username lookup
  - HS256 JWT issuance and verification (PyJWT)
  - Bearer token extraction from request headers
  - User registration with sequential ids
================================================================================
"""

import hmac
from datetime import datetime, timedelta, timezone

import jwt

from config import Config
from core.errors import ConfigurationError, InvalidQuery, Unauthorized, UserExists
from core.logger import log_msg

# ==================== USER RECORDS ====================

def _parse_id(value):
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return 0


def _row_to_user(row):
    padded = list(row) + [""] * (4 - len(row))
    return {
        "id": _parse_id(padded[0]),
        "username": padded[1],
        "password": padded[2],
        "email": padded[3],
    }


def public_user(user):
    """Strip the password from a user record."""
    return {"id": user["id"], "username": user["username"], "email": user["email"]}


def find_user(source, username: str):
    """
    PURPOSE: Look up a user by username (case-insensitive).

    ARGS:
      source: Row source exposing fetch_rows(range_id)
      username (str): Username to find

    RETURNS:
      dict or None: User record
    """
    wanted = username.casefold()
    for row in source.fetch_rows(Config.USER_RANGE):
        if len(row) > 1 and str(row[1]).casefold() == wanted:
            return _row_to_user(row)
    return None


def require_credentials(username: str, password: str):
    """Raise InvalidQuery unless both login fields are present."""
    if not username or not password:
        raise InvalidQuery("Username and password are required")


def clean_user_fields(fields):
    """
    PURPOSE: Normalise registration fields.

    RETURNS:
      dict: username, email (stripped) and password

    RAISES:
      InvalidQuery: Any field missing
    """
    cleaned = {
        "username": (fields.get("username") or "").strip(),
        "email": (fields.get("email") or "").strip(),
        "password": fields.get("password") or "",
    }
    if not all(cleaned.values()):
        raise InvalidQuery("Username, email and password are required")
    return cleaned


def create_user(source, fields):
    """
    PURPOSE: Register a new user on the User tab.

    LOGIC:
      - Require username, email and password
      - Reject usernames already taken (case-insensitive)
      - Assign id = highest existing id + 1
      - Append [id, username, password, email]

    RETURNS:
      dict: Public user record (no password)

    RAISES:
      InvalidQuery: Missing fields
      UserExists: Username already taken
      DataUnavailable: Sheet read/write failed
    """
    cleaned = clean_user_fields(fields)
    username, email, password = cleaned["username"], cleaned["email"], cleaned["password"]

    rows = source.fetch_rows(Config.USER_RANGE)
    wanted = username.casefold()
    if any(len(row) > 1 and str(row[1]).casefold() == wanted for row in rows):
        log_msg(f"[AUTH] Registration rejected, username taken: {username}")
        raise UserExists()

    new_id = max((_parse_id(row[0]) for row in rows if row), default=0) + 1
    source.append_row(Config.USER_APPEND_RANGE, [new_id, username, password, email])

    log_msg(f"[AUTH] [OK] Registered user {username} (id {new_id})")
    return {"id": new_id, "username": username, "email": email}

# ==================== TOKENS ====================

def _secret():
    if not Config.JWT_SECRET:
        raise ConfigurationError("JWT_SECRET is not set")
    return Config.JWT_SECRET


def issue_token(user, now: datetime = None):
    """Sign a bearer token for ``user`` valid for JWT_EXPIRES_HOURS."""
    now = now or datetime.now(timezone.utc)
    payload = {
        "userId": user["id"],
        "username": user["username"],
        "email": user["email"],
        "iat": now,
        "exp": now + timedelta(hours=Config.JWT_EXPIRES_HOURS),
    }
    return jwt.encode(payload, _secret(), algorithm=Config.JWT_ALGORITHM)


def verify_token(token: str):
    """
    PURPOSE: Decode and validate a bearer token.

    RETURNS:
      dict: Token claims

    RAISES:
      Unauthorized: Expired or invalid token
    """
    secret = _secret()
    try:
        return jwt.decode(token, secret, algorithms=[Config.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError as e:
        raise Unauthorized("Token has expired") from e
    except jwt.PyJWTError as e:
        raise Unauthorized("Invalid token") from e


def extract_bearer_token(event):
    headers = event.get("headers") or {}
    auth_header = headers.get("authorization") or headers.get("Authorization") or ""
    scheme, _, token = auth_header.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def authenticate_request(event):
    """
    PURPOSE: Establish the caller identity of a handler event.

    RETURNS:
      dict: Token claims

    RAISES:
      Unauthorized: No bearer token, or token invalid/expired
    """
    token = extract_bearer_token(event)
    if not token:
        raise Unauthorized("No authorization header")
    return verify_token(token)

# ==================== LOGIN ====================

def authenticate(source, username: str, password: str):
    """
    PURPOSE: Check credentials against the User tab and issue a token.

    ARGS:
      source: Row source exposing fetch_rows(range_id)
      username (str): Username (case-insensitive)
      password (str): Password as stored on the sheet

    RETURNS:
      dict: {"token": str, "user": public user record}

    RAISES:
      InvalidQuery: Missing username or password
      Unauthorized: Unknown user or wrong password
    """
    require_credentials(username, password)

    log_msg(f"[AUTH] Login attempt for {username}")
    user = find_user(source, username)

    if user is None or not hmac.compare_digest(
        password.encode("utf-8"), user["password"].encode("utf-8")
    ):
        log_msg(f"[AUTH] Invalid credentials for {username}")
        raise Unauthorized("Invalid credentials")

    token = issue_token(user)
    log_msg(f"[AUTH] [OK] {user['username']} authenticated")
    return {"token": token, "user": public_user(user)}
