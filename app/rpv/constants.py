"""
Central constants for the RPV application.
"""
from __future__ import annotations

MIN_PASSWORD_LENGTH = 6

# Where the login form sends the browser after a successful sign-in.
LOGIN_SUCCESS_REDIRECT = "/directory"

FORBIDDEN_MESSAGE = "Access denied. {role} role required."

# Paths that skip session lookup and CSRF checks.
UNGUARDED_PREFIXES = ("/static/", "/health", "/healthz")

# Seed data for scripts/init_db.py
DEFAULT_PROPERTIES = ("Big Bear", "Lake Tahoe", "Mammoth", "Palm Springs")
