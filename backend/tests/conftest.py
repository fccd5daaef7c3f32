import os
import sys
from pathlib import Path

import pytest

# Add /backend to sys.path so "import newsletter" works in tests
BACKEND_DIR = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(BACKEND_DIR))

os.environ.setdefault("RESEND_API_KEY", "re_test_key")
os.environ.setdefault("EMAIL_FROM", "sender@example.com")

from tests.stand_in_server import StandInServer  # noqa: E402


@pytest.fixture
def mock_server():
    server = StandInServer().start()
    yield server
    server.stop()
