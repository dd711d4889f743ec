"""
Application-wide constants for TMDB login.

This module defines API paths, parameter names and user-facing messages.
"""

DEFAULT_API_BASE_URL = "https://api.themoviedb.org/3"
DEFAULT_TIMEOUT = 30
# Handshake is fail-fast, retries are a user re-submission
DEFAULT_MAX_RETRIES = 0

# API paths
PATH_REQUEST_TOKEN = "/authentication/token/new"
PATH_VALIDATE_WITH_LOGIN = "/authentication/token/validate_with_login"
PATH_SESSION_NEW = "/authentication/session/new"
PATH_SESSION = "/authentication/session"
PATH_ACCOUNT = "/account"

# Query parameter keys
PARAM_API_KEY = "api_key"
PARAM_REQUEST_TOKEN = "request_token"
PARAM_SESSION_ID = "session_id"
PARAM_USERNAME = "username"
PARAM_PASSWORD = "password"

# Response fields
FIELD_REQUEST_TOKEN = "request_token"
FIELD_SUCCESS = "success"
FIELD_SESSION_ID = "session_id"
FIELD_ACCOUNT_ID = "id"

# Failure reasons
REASON_NON_2XX = "non-2xx status"
REASON_TOKEN_MISSING = "token missing from response"
REASON_SESSION_MISSING = "session id missing from response"
REASON_USER_MISSING = "user id missing from response"
REASON_REJECTED = "authentication rejected"
REASON_EMPTY_INPUT = "username or password empty"
REASON_ABANDONED = "login attempt abandoned"

# Messages shown by the presentation layer
MESSAGE_EMPTY_INPUT = "Username or Password Empty."
MESSAGE_REQUEST_TOKEN_FAILED = "Login Failed (Request Token)."
MESSAGE_AUTHENTICATE_FAILED = "Login Failed (Authenticate Token)."
MESSAGE_SESSION_FAILED = "Login Failed (Session ID)."
