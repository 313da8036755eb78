# tests/conftest.py
import os
import tempfile

# Settings are read at import time, so the test environment is set up before
# any designsight module is imported
os.environ.setdefault("SQLALCHEMY_DATABASE_URI", "sqlite://")
os.environ.setdefault("LOCAL_STORAGE_DIR", tempfile.mkdtemp(prefix="designsight-test-"))
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.pop("GCS_BUCKET_NAME", None)
