import os
import sys

import pytest

# Ensure repository root importable early (run.py lives there)
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from dgmapper import create_app  # noqa: E402
from dgmapper.dungeon import Map  # noqa: E402

# Base b2 in the middle of the top row, leaves west (a2), east (c2) and
# south (b1); the south leaf is the critical endpoint.
PLUS_MAP = "3 2 E.W/-N- b2 - b1"

# 4x4 tree used by traversal tests (top row first):
#   y=3  - - - -
#   y=2  E E . W      base c3, a3 -> b3 -> c3, d3 -> c3
#   y=1  - - N -      c2 -> c3
#   y=0  - E N -      c1 -> c2, b1 -> c1
TREE_MAP = "4 4 ----/EE.W/--N-/-EN- c3 b1"


@pytest.fixture(scope="session")
def test_app(tmp_path_factory):
    app = create_app({"TESTING": True})
    app.instance_path = str(tmp_path_factory.mktemp("instance"))
    return app


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


@pytest.fixture()
def plus_map() -> Map:
    return Map.parse(PLUS_MAP)


@pytest.fixture()
def tree_map() -> Map:
    return Map.parse(TREE_MAP)


@pytest.fixture(autouse=True)
def _quiet_logs(monkeypatch):
    # Keep structured debug events out of test output unless a test opts in.
    monkeypatch.setenv("DGMAPPER_LOG_LEVEL", "warn")
    monkeypatch.delenv("DGMAPPER_LOG_JSON", raising=False)
