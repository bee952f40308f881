"""
Shared pytest setup.

The application engine is created at import time, so the database URL is
pointed at a throwaway SQLite file before any certreview module loads.
"""
import os

os.environ.setdefault("CERTREVIEW_DATABASE_URL", "sqlite:///./test_certreview.db")
