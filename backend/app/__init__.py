# backend/app/__init__.py
"""
CivicConnect notifier backend application package.

This package contains:
- main: FastAPI application entrypoint
- reports: civic issue report schemas
- notifications: SMS / email dispatch for test-category reports
"""
