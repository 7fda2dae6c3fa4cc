# tests/conftest.py
import pytest

import dimensia.core.context as ctxmod
from dimensia.units import registry as regmod


@pytest.fixture(autouse=True)
def _restore_default_context():
    """Tests may swap the process-wide strategy/mode; put the original back."""
    saved = ctxmod.get_default_context()
    yield
    ctxmod.set_default_context(saved)


@pytest.fixture()
def physical_reg():
    """Fresh, fully-bootstrapped physical registry for isolation per test."""
    return regmod._bootstrap_physical()
