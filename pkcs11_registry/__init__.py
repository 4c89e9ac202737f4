"""PKCS#11 mechanism capability registry."""

from pkcs11_registry.core.algorithm_catalog import (
    AlgorithmCatalog,
    AlgorithmFamily,
    CipherInfo,
    DigestInfo,
    HmacInfo,
    SignatureInfo,
)
from pkcs11_registry.core.capability_index import Capability, MechanismCapabilityIndex
from pkcs11_registry.core.exceptions import (
    AlgorithmNotFoundError,
    HarnessConfigurationError,
    RegistryError,
    RegistryIntegrityError,
)
from pkcs11_registry.core.mechanisms import KeyType, Mechanism
from pkcs11_registry.core.registry import Registry, build_registry, get_registry

__version__ = "0.1.0"

__all__ = [
    "AlgorithmCatalog",
    "AlgorithmFamily",
    "AlgorithmNotFoundError",
    "Capability",
    "CipherInfo",
    "DigestInfo",
    "HarnessConfigurationError",
    "HmacInfo",
    "KeyType",
    "Mechanism",
    "MechanismCapabilityIndex",
    "Registry",
    "RegistryError",
    "RegistryIntegrityError",
    "SignatureInfo",
    "build_registry",
    "get_registry",
]
