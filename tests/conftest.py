"""
Test environment: settings are read at import time, so point them at
throwaway locations before any application module is imported.
"""
import os
import tempfile

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("UPLOAD_DIR", os.path.join(tempfile.gettempdir(), "backoffice-test-uploads"))
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("BLOB_BACKEND", "local")
