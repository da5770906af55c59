import sys
from pathlib import Path

# Ensure package import for tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from config import Config


@pytest.fixture(autouse=True)
def _restore_config():
    """Undo any Config overrides a test applies."""

    saved = {key: getattr(Config, key) for key in Config._KEYS}
    yield
    for key, value in saved.items():
        setattr(Config, key, value)


@pytest.fixture
def client():
    import main

    main.app.config["TESTING"] = True
    main.RUNS.clear()
    with main.app.test_client() as c:
        yield c
    main.RUNS.clear()
