"""Harness context.

One ``HarnessContext`` is built at harness start-up and passed to every test
case. It carries the configuration, the registry and the loaded PKCS#11
library, so test cases never reach for module-level globals.
"""

from dataclasses import dataclass, field
from typing import Any

from pkcs11_registry.config import HarnessSettings, get_settings
from pkcs11_registry.core.exceptions import HarnessConfigurationError
from pkcs11_registry.core.logging import get_logger, setup_logging
from pkcs11_registry.core.registry import Registry, get_registry

logger = get_logger(__name__)


def load_pkcs11_library(module_path: str | None) -> Any:
    """Load a PKCS#11 module and return its ``pkcs11.lib`` handle."""
    if not module_path:
        raise HarnessConfigurationError(
            "No PKCS#11 module configured (set PKCS11TEST_MODULE_PATH)"
        )

    import pkcs11
    from pkcs11.exceptions import PKCS11Error

    try:
        library = pkcs11.lib(module_path)
    except (RuntimeError, OSError, PKCS11Error) as e:
        raise HarnessConfigurationError(
            f"Cannot load PKCS#11 module {module_path}: {e}"
        ) from e

    logger.info(
        "Loaded PKCS#11 module",
        module_path=module_path,
        manufacturer=getattr(library, "manufacturer_id", None),
    )
    return library


@dataclass(frozen=True)
class HarnessContext:
    """Read-only state shared by all test cases."""

    settings: HarnessSettings
    registry: Registry
    library: Any = field(default=None, compare=False)

    @classmethod
    def create(
        cls,
        settings: HarnessSettings | None = None,
        registry: Registry | None = None,
        load_library: bool = True,
        configure_logging: bool = False,
    ) -> "HarnessContext":
        """Build the context once, before any test runs.

        Args:
            settings: Harness settings (defaults to the environment)
            registry: Registry (defaults to the process-wide instance)
            load_library: Open the configured PKCS#11 module
            configure_logging: Install log handlers from the settings
        """
        settings = settings or get_settings()
        if configure_logging:
            level = "DEBUG" if settings.verbose else settings.log_level
            setup_logging(json_output=settings.log_json, level=level)

        registry = registry or get_registry()
        library = load_pkcs11_library(settings.module_path) if load_library else None

        logger.info(
            "Harness context created",
            slot_id=settings.slot_id,
            so_tests=settings.so_tests,
            init_token=settings.init_token,
        )
        return cls(settings=settings, registry=registry, library=library)

    @property
    def slot_id(self) -> int:
        return self.settings.slot_id

    def get_slot(self) -> Any:
        """The configured slot of the loaded library."""
        if self.library is None:
            raise HarnessConfigurationError("No PKCS#11 library loaded")
        for slot in self.library.get_slots():
            if slot.slot_id == self.settings.slot_id:
                return slot
        raise HarnessConfigurationError(
            f"Slot {self.settings.slot_id} not found in {self.settings.module_path}"
        )
