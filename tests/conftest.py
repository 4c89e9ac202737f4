"""Test configuration and fixtures."""

import os

import pytest

from pkcs11_registry.config import get_settings
from pkcs11_registry.core.algorithm_catalog import AlgorithmCatalog
from pkcs11_registry.core.capability_index import MechanismCapabilityIndex
from pkcs11_registry.core.registry import build_registry, get_registry


@pytest.fixture(autouse=True)
def clean_harness_environment(monkeypatch, tmp_path):
    """Keep host PKCS11TEST_* variables and .env files out of the tests."""
    for name in list(os.environ):
        if name.upper().startswith("PKCS11TEST_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def catalog():
    """A fresh built-in algorithm catalog."""
    return AlgorithmCatalog.builtin()


@pytest.fixture
def index():
    """A fresh built-in capability index."""
    return MechanismCapabilityIndex.builtin()


@pytest.fixture
def registry():
    """A freshly built registry."""
    return build_registry()


@pytest.fixture
def shared_registry():
    """The process-wide registry, rebuilt for each test."""
    get_registry.cache_clear()
    yield get_registry()
    get_registry.cache_clear()
