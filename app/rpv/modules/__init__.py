"""
Feature modules live under this package.

Each module owns its routes, models and service functions, and reuses the
platform primitives (sessions, RBAC, error handling, DB session).
"""
