import os
import random
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from zipper import create_app  # noqa: E402


@pytest.fixture(scope="session")
def test_app():
    app = create_app()
    app.config.update({"TESTING": True})
    return app


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


@pytest.fixture()
def rng():
    """Seeded random source so generation in tests is reproducible."""
    return random.Random(20240601)


@pytest.fixture(autouse=True)
def _restore_retry_config(test_app):
    """Tests may tweak GENERATION_RETRIES; put it back afterwards."""
    saved = test_app.config.get("GENERATION_RETRIES")
    yield
    test_app.config["GENERATION_RETRIES"] = saved
