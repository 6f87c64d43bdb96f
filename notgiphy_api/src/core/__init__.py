"""
Core application utilities for settings, logging and FastAPI dependencies.

This package provides:
- Application-level settings (separate from DB settings)
- Logging configuration with request context
- Password hashing and session token helpers
- Dependency helpers (store selection, current user resolution)
"""
