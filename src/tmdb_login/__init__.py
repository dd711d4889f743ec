"""
TMDB Login

This package establishes an authenticated session with The Movie Database
(TMDB) API: request token, login validation, session creation and account lookup.
"""

__version__ = "0.1.0"
__description__ = "TMDB session establishment from username and password"


def __getattr__(name):
    """Lazy import to avoid importing dependencies when not needed."""
    if name == "LoginApp":
        from .main import LoginApp
        return LoginApp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "LoginApp",
]
