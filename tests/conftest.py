import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from island import create_app  # noqa: E402
from island.routes.world_api import clear_cache  # noqa: E402
from island.worldgen import World, WorldConfig  # noqa: E402

# Seed used by the documented example world
EXAMPLE_CONFIG = dict(
    seed=42,
    width=150,
    height=75,
    shape="rectangular",
    spread="packed",
    min_room_dim=5,
    max_room_dim=12,
    continuation="straight",
)


@pytest.fixture(scope="session")
def test_app():
    app = create_app({"TESTING": True})
    return app


@pytest.fixture(autouse=True)
def _push_app_context(test_app):
    ctx = test_app.app_context()
    ctx.push()
    try:
        yield
    finally:
        ctx.pop()


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


@pytest.fixture(autouse=True)
def _clear_world_cache():
    """Worlds cached by one test must not leak into the next."""
    clear_cache()
    yield
    clear_cache()


@pytest.fixture(scope="session")
def example_world():
    return World(WorldConfig(**EXAMPLE_CONFIG))


def pytest_configure(config):  # register custom marker
    config.addinivalue_line("markers", "performance: generation timing guardrails")
