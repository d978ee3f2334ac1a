from __future__ import annotations

import sys
from pathlib import Path
from types import SimpleNamespace

import pytest


# Ensure src/ is importable for all tests (CI and local)
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from listen_up import emitter, reset_settings  # noqa: E402


def pytest_collection_modifyitems(config, items):
    """Default all tests to 'unit' unless explicitly marked otherwise."""
    for item in items:
        marks = {m.name for m in item.iter_markers()}
        if not ("integ" in marks or "unit" in marks):
            item.add_marker(pytest.mark.unit)


@pytest.fixture(autouse=True)
def _default_settings():
    reset_settings()
    yield
    reset_settings()


def _standalone():
    instance = emitter()
    instance.name = "test"
    instance.called = 0
    return instance


def _mixed_in():
    return emitter(SimpleNamespace(name="test", called=0))


@pytest.fixture(params=[_standalone, _mixed_in], ids=["object", "mixed-in"])
def make_emitter(request):
    """Factory for an emitter host with a ``called`` counter."""
    return request.param
