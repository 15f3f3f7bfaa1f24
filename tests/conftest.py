import importlib
import pytest

@pytest.fixture(scope="session")
def logic():
    return importlib.import_module("bitpic_lint.logic")

@pytest.fixture(scope="session")
def render():
    return importlib.import_module("bitpic_lint.render")
