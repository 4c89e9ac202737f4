"""Tests for harness configuration and context."""

from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from pkcs11_registry.config import HarnessSettings, get_settings
from pkcs11_registry.context import HarnessContext, load_pkcs11_library
from pkcs11_registry.core import constants
from pkcs11_registry.core.exceptions import HarnessConfigurationError


class TestConstants:
    """Tests for process-wide constants."""

    def test_pins(self):
        assert constants.USER_PIN == "useruser"
        assert constants.RESET_USER_PIN == "12345678"
        assert constants.SO_PIN == "sososo"
        assert constants.RESET_SO_PIN == "87654321"

    def test_label(self):
        assert constants.LABEL == "pkcs11test object"
        assert constants.LABEL_LEN == 17

    def test_bool_sentinels(self):
        assert constants.CK_TRUE == 1
        assert constants.CK_FALSE == 0
        assert constants.CK_TRUE_BYTES == b"\x01"
        assert constants.CK_FALSE_BYTES == b"\x00"


class TestSettings:
    """Tests for HarnessSettings."""

    def test_defaults(self):
        settings = HarnessSettings()
        assert settings.module_path is None
        assert settings.slot_id == 0
        assert settings.verbose is False
        assert settings.so_tests is True
        assert settings.init_token is False
        assert settings.user_pin == constants.USER_PIN
        assert settings.so_pin == constants.SO_PIN

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("PKCS11TEST_MODULE_PATH", "/usr/lib/softhsm/libsofthsm2.so")
        monkeypatch.setenv("PKCS11TEST_SLOT_ID", "3")
        monkeypatch.setenv("PKCS11TEST_SO_TESTS", "false")
        monkeypatch.setenv("PKCS11TEST_VERBOSE", "1")

        settings = get_settings()

        assert settings.module_path == "/usr/lib/softhsm/libsofthsm2.so"
        assert settings.slot_id == 3
        assert settings.so_tests is False
        assert settings.verbose is True

    def test_cached(self):
        assert get_settings() is get_settings()

    def test_token_label_padding(self):
        settings = HarnessSettings(token_label="test token")
        assert settings.token_label_bytes == b"test token" + b" " * 22
        assert len(settings.token_label_bytes) == constants.TOKEN_LABEL_SIZE

    def test_token_label_too_long(self):
        with pytest.raises(ValidationError):
            HarnessSettings(token_label="x" * 33)

    def test_negative_slot(self):
        with pytest.raises(ValidationError):
            HarnessSettings(slot_id=-1)

    def test_frozen(self):
        settings = HarnessSettings()
        with pytest.raises(ValidationError):
            settings.slot_id = 2


class TestContext:
    """Tests for HarnessContext."""

    def test_create_without_library(self, shared_registry):
        context = HarnessContext.create(HarnessSettings(slot_id=1), load_library=False)

        assert context.registry is shared_registry
        assert context.library is None
        assert context.slot_id == 1

    def test_explicit_registry(self, registry):
        context = HarnessContext.create(HarnessSettings(), registry=registry, load_library=False)
        assert context.registry is registry

    def test_missing_module_path(self):
        with pytest.raises(HarnessConfigurationError):
            HarnessContext.create(HarnessSettings())

    def test_library_loaded(self, monkeypatch, registry):
        import pkcs11

        fake_lib = MagicMock(manufacturer_id="SoftHSM")
        loader = MagicMock(return_value=fake_lib)
        monkeypatch.setattr(pkcs11, "lib", loader)

        context = HarnessContext.create(
            HarnessSettings(module_path="/opt/token.so"), registry=registry,
        )

        loader.assert_called_once_with("/opt/token.so")
        assert context.library is fake_lib

    def test_library_load_failure(self, monkeypatch):
        import pkcs11

        monkeypatch.setattr(pkcs11, "lib", MagicMock(side_effect=RuntimeError("dlopen failed")))

        with pytest.raises(HarnessConfigurationError) as exc_info:
            load_pkcs11_library("/missing.so")

        assert "/missing.so" in str(exc_info.value)

    def test_get_slot(self, registry):
        slots = [MagicMock(slot_id=0), MagicMock(slot_id=5)]
        library = MagicMock()
        library.get_slots.return_value = slots
        context = HarnessContext(HarnessSettings(slot_id=5), registry, library)

        assert context.get_slot() is slots[1]

    def test_get_slot_missing(self, registry):
        library = MagicMock()
        library.get_slots.return_value = [MagicMock(slot_id=0)]
        context = HarnessContext(HarnessSettings(slot_id=9), registry, library)

        with pytest.raises(HarnessConfigurationError):
            context.get_slot()

    def test_get_slot_without_library(self, registry):
        context = HarnessContext(HarnessSettings(), registry)
        with pytest.raises(HarnessConfigurationError):
            context.get_slot()

    def test_context_is_frozen(self, registry):
        context = HarnessContext(HarnessSettings(), registry)
        with pytest.raises(AttributeError):
            context.registry = None
