import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from mapgen import create_app  # noqa: E402
from mapgen.logging_utils import RecordingLogger  # noqa: E402


@pytest.fixture()
def test_app():
    app = create_app(
        {
            "TESTING": True,
            "DEFAULT_HEXAGON_COUNT": 20,
            "MAX_HEXAGON_COUNT": 200,
            "CORS_ALLOWED_ORIGINS": "*",
        }
    )
    return app


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


@pytest.fixture()
def sink():
    """Logger stand-in that records events instead of printing them."""
    return RecordingLogger()
