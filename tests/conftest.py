"""Pytest config: PYTHONPATH and env for tests."""
import os
import sys
from pathlib import Path

root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(root))
os.environ.pop("OPENAI_API_KEY", None)
os.environ.setdefault("HTTP_MAX_RETRIES", "2")
os.environ.setdefault("HTTP_BACKOFF_SEC", "0")
