"""Harness configuration."""

from functools import lru_cache
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pkcs11_registry.core.constants import SO_PIN, TOKEN_LABEL_SIZE, USER_PIN


class HarnessSettings(BaseSettings):
    """Harness settings loaded from environment variables (PKCS11TEST_*)."""

    # PKCS#11 module providing the token's function list
    module_path: Optional[str] = None

    # Token selection
    slot_id: int = 0

    # Test selection
    verbose: bool = False
    so_tests: bool = True  # run tests that need the security officer PIN
    init_token: bool = False  # C_InitToken before running

    # Used with init_token
    token_flags: int = 0
    token_label: str = "pkcs11test"

    user_pin: str = USER_PIN
    so_pin: str = SO_PIN

    # Logging
    log_json: bool = False
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="PKCS11TEST_",
        env_file=".env",
        case_sensitive=False,
        frozen=True,
    )

    @field_validator("token_label")
    @classmethod
    def _check_label_size(cls, value: str) -> str:
        if len(value.encode("utf-8")) > TOKEN_LABEL_SIZE:
            raise ValueError(f"token_label must fit in {TOKEN_LABEL_SIZE} bytes")
        return value

    @field_validator("slot_id", "token_flags")
    @classmethod
    def _check_unsigned(cls, value: int) -> int:
        if value < 0:
            raise ValueError("must be a non-negative CK_ULONG")
        return value

    @property
    def token_label_bytes(self) -> bytes:
        """Label as CK_UTF8CHAR[32], blank padded."""
        return self.token_label.encode("utf-8").ljust(TOKEN_LABEL_SIZE, b" ")


@lru_cache
def get_settings() -> HarnessSettings:
    """Get cached settings instance."""
    return HarnessSettings()
